from __future__ import annotations

import logging
import warnings
from typing import Any, Callable

import numpy as np
from scipy.linalg import LinAlgWarning, lu_factor, lu_solve

from .coercion import as_square_array
from .errors import InversionError
from .warnings import CacheMatrixConditioningWarning

logger = logging.getLogger(__name__)

__all__ = [
    "INVERSION_METHODS",
    "invert_matrix",
    "invert_inv",
    "invert_solve",
    "invert_lu",
]


def invert_inv(A: np.ndarray) -> np.ndarray:
    """Invert using ``numpy.linalg.inv`` (LAPACK gesv)."""
    try:
        return np.linalg.inv(A)
    except np.linalg.LinAlgError as exc:
        raise InversionError(f"Matrix is not invertible: {exc}") from exc


def invert_solve(A: np.ndarray) -> np.ndarray:
    """Invert by solving ``A X = I``."""
    identity = np.identity(A.shape[0], dtype=A.dtype)
    try:
        return np.linalg.solve(A, identity)
    except np.linalg.LinAlgError as exc:
        raise InversionError(f"Matrix is not invertible: {exc}") from exc


def invert_lu(A: np.ndarray) -> np.ndarray:
    """Invert using a pivoted LU factorization from SciPy."""
    with warnings.catch_warnings():
        # lu_factor only warns on an exactly singular factor; the zero pivot is checked below.
        warnings.simplefilter("ignore", LinAlgWarning)
        lu, piv = lu_factor(A)

    zero_pivots = np.flatnonzero(np.diag(lu) == 0)
    if zero_pivots.size:
        raise InversionError(
            f"Matrix is not invertible: Singular matrix (zero pivot at index {int(zero_pivots[0])})"
        )
    identity = np.identity(A.shape[0], dtype=lu.dtype)
    return lu_solve((lu, piv), identity)


INVERSION_METHODS: dict[str, Callable[[np.ndarray], np.ndarray]] = {
    "inv": invert_inv,
    "solve": invert_solve,
    "lu": invert_lu,
}


def _warn_if_ill_conditioned(A: np.ndarray, A_inv: np.ndarray, threshold: float) -> None:
    cond = float(np.linalg.norm(A, 1) * np.linalg.norm(A_inv, 1))
    if not np.isfinite(cond) or cond > threshold:
        warnings.warn(
            f"Matrix is ill-conditioned (1-norm condition estimate {cond:.3g} exceeds "
            f"{threshold:.3g}); the cached inverse may be inaccurate.",
            CacheMatrixConditioningWarning,
            stacklevel=3,
        )


def invert_matrix(matrix: Any, method: str = "inv", *, condition_warning: float | None = None) -> np.ndarray:
    """
    Invert a square matrix using the specified method.

    Args:
        matrix: Square matrix as a NumPy array or nested sequence.
        method: One of 'inv', 'solve', 'lu'.
        condition_warning: Emit CacheMatrixConditioningWarning when the condition
            estimate exceeds this value. None or a non-positive value disables it.

    Returns:
        The inverse as a NumPy array.

    Raises:
        InversionError: If the matrix is singular, not square, or not numeric.
        ValueError: If the method is unknown.
    """
    try:
        invert = INVERSION_METHODS[method]
    except KeyError:
        raise ValueError(
            f"Unknown inversion method {method!r}; expected one of {', '.join(INVERSION_METHODS)}"
        ) from None

    A = as_square_array(matrix)
    logger.debug(f"Inverting {A.shape[0]}x{A.shape[1]} matrix with method={method}")
    A_inv = invert(A)

    if condition_warning is not None and condition_warning > 0:
        _warn_if_ill_conditioned(A, A_inv, condition_warning)
    return A_inv
