from __future__ import annotations

import logging
from typing import Any, Callable

from .cache_matrix import CacheMatrix
from .errors import MatrixNotSetError
from .inversion import invert_matrix
from .observability import SolveObservability
from .runtime import Runtime

logger = logging.getLogger(__name__)

Inverter = Callable[[Any], Any]

CACHE_HIT_MESSAGE = "getting cached data"


def default_inverter(runtime: Runtime) -> tuple[Inverter, str]:
    method = runtime.inversion_method()
    threshold = runtime.condition_warning_threshold()

    def _invert(matrix: Any) -> Any:
        return invert_matrix(matrix, method, condition_warning=threshold)

    return _invert, method


def cache_solve(
    container: CacheMatrix,
    *,
    inverter: Inverter | None = None,
    runtime: Runtime,
    observability: SolveObservability,
) -> Any:
    """Return the inverse of the container's matrix, computing and caching it on a miss.

    A failing inverter propagates unchanged and leaves the cache empty.
    """
    cached = container.get_inverse()
    if cached is not None:
        logger.info(CACHE_HIT_MESSAGE)
        observability.record("hit", container.get_matrix())
        return cached

    matrix = container.get_matrix()
    if matrix is None:
        raise MatrixNotSetError(
            "CacheMatrix has no matrix yet; call set_matrix() before cache_solve()."
        )

    if inverter is None:
        inverter, method = default_inverter(runtime)
    else:
        method = getattr(inverter, "__name__", type(inverter).__name__)

    try:
        inverse = inverter(matrix)
    except Exception as exc:
        logger.debug(f"Inversion failed with method={method}: {exc}")
        observability.record("error", matrix, method=method, error=exc)
        raise

    container.set_inverse(inverse)
    observability.record("miss", matrix, method=method)
    return inverse
