"""Matrix container that lazily computes and memoizes its inverse."""
from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError, version as _dist_version
from typing import Any

try:
    __version__ = _dist_version("cachematrix")
except PackageNotFoundError:
    __version__ = "unknown"

from ._internal import observability as _observability
from ._internal import runtime as _runtime_mod
from ._internal import solve as _solve
from ._internal.cache_matrix import CacheMatrix
from ._internal.errors import InversionError, MatrixNotSetError
from ._internal.inversion import INVERSION_METHODS, invert_matrix
from ._internal.warnings import (
    CacheMatrixWarning,
    CacheMatrixConditioningWarning,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

_runtime = _runtime_mod.Runtime(known_methods=INVERSION_METHODS)


def make_cache_matrix(matrix: Any = None) -> CacheMatrix:
    """
    Create a CacheMatrix.

    Args:
        matrix: Initial square matrix (NumPy array or nested sequence). The
            default placeholder ``None`` must be replaced via ``set_matrix``
            before the first ``cache_solve``.

    Returns:
        A CacheMatrix with an empty inverse cache.
    """
    return CacheMatrix(matrix)


def cache_solve(container: CacheMatrix, *, inverter: Any = None) -> Any:
    """
    Return the inverse of the matrix held by ``container``.

    On a cache hit the stored inverse is returned as is and "getting cached
    data" is logged on the ``cachematrix`` logger. Otherwise the inverse is
    computed, stored in the container and returned.

    Args:
        container: The CacheMatrix to solve.
        inverter: Optional callable ``inverter(matrix) -> inverse`` replacing
            the configured inversion method.

    Raises:
        MatrixNotSetError: If the container still holds the placeholder.
        InversionError: If the default inverter cannot invert the matrix.
            Errors from a custom ``inverter`` propagate unchanged.
    """
    return _solve.cache_solve(
        container,
        inverter=inverter,
        runtime=_runtime,
        observability=_observability.default_instance(),
    )


def get_inversion_method() -> str:
    """Inversion method used by cache_solve: override, $CACHEMATRIX_INVERSION_METHOD, or 'inv'."""
    return _runtime.inversion_method()


def set_inversion_method(method: str | None) -> None:
    """Override the inversion method ('inv', 'solve', 'lu'). ``None`` restores the default lookup."""
    _runtime.set_inversion_method(method)


def get_condition_warning_threshold() -> float | None:
    return _runtime.condition_warning_threshold()


def set_condition_warning_threshold(value: float | None) -> None:
    """Override the conditioning warning threshold.

    A non-positive value disables the warning; ``None`` restores the
    environment/default lookup.
    """
    _runtime.set_condition_warning_threshold(value)


def last_solve_trace(outcome: str | None = None) -> dict[str, Any] | None:
    """Latest cache_solve record, optionally for one outcome ('hit', 'miss', 'error')."""
    return _observability.default_instance().last(outcome)


def clear_solve_traces() -> None:
    _observability.default_instance().clear()


def solve_stats() -> dict[str, int]:
    """Counts of cache_solve outcomes since the last clear_solve_traces()."""
    return _observability.default_instance().stats()


__all__ = [
    "CacheMatrix",
    "make_cache_matrix",
    "cache_solve",
    "invert_matrix",
    "INVERSION_METHODS",
    "get_inversion_method",
    "set_inversion_method",
    "get_condition_warning_threshold",
    "set_condition_warning_threshold",
    "last_solve_trace",
    "clear_solve_traces",
    "solve_stats",
    "InversionError",
    "MatrixNotSetError",
    "CacheMatrixWarning",
    "CacheMatrixConditioningWarning",
]
