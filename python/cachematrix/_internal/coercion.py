from __future__ import annotations

from collections.abc import Sequence as _SequenceABC
from typing import Any

import numpy as np

from .errors import InversionError

_LAPACK_DTYPES = tuple(np.dtype(t) for t in (np.float32, np.float64, np.complex64, np.complex128))


def is_sequence_like(value: Any) -> bool:
    return isinstance(value, _SequenceABC) and not isinstance(value, (str, bytes, bytearray))


def shape_of(candidate: Any) -> tuple[int, ...] | None:
    """Best-effort shape of an array or nested sequence, without copying data."""
    shape = getattr(candidate, "shape", None)
    if isinstance(shape, tuple):
        return tuple(int(n) for n in shape)
    if not is_sequence_like(candidate):
        return None
    if candidate and is_sequence_like(candidate[0]):
        return (len(candidate), len(candidate[0]))
    return (len(candidate),)


def as_square_array(candidate: Any) -> np.ndarray:
    """Coerce matrix input to a square, non-empty, finite NumPy array LAPACK accepts.

    Nested sequences and array-likes go through ``numpy.asarray``. float32,
    float64, complex64 and complex128 are kept as is. Other real data
    (integers, booleans, float16, longdouble) becomes float64 and other
    complex data becomes complex128. NaN or infinite entries are rejected.
    """
    try:
        array = np.asarray(candidate)
    except (TypeError, ValueError) as exc:
        raise InversionError(
            "Matrix data must be a rectangular nested sequence or a NumPy array."
        ) from exc

    if array.ndim != 2:
        raise InversionError(f"Matrix input must be 2D, got {array.ndim} dimension(s).")
    rows, cols = array.shape
    if rows != cols:
        raise InversionError(f"Matrix must be square to invert, got shape {rows}x{cols}.")
    if rows == 0:
        raise InversionError("Matrix must not be empty.")

    if array.dtype not in _LAPACK_DTYPES:
        target = np.complex128 if array.dtype.kind == "c" else np.float64
        try:
            array = array.astype(target)
        except (TypeError, ValueError) as exc:
            raise InversionError(f"Matrix entries must be numeric, got dtype {array.dtype}.") from exc

    if not np.all(np.isfinite(array)):
        raise InversionError("Matrix entries must be finite (no NaN or infinity).")
    return array
