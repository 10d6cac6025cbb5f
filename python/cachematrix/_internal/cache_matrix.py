from __future__ import annotations

from typing import Any


class CacheMatrix:
    """A matrix paired with a lazily computed, memoized inverse.

    The container only holds state; it never computes anything and does not
    depend on the numeric library. ``cache_solve`` owns the inversion policy.

    Invariant: the cached inverse, when present, belongs to the current
    matrix. ``set_matrix`` always clears it, even if the new matrix equals the
    old one.

    Values are stored as given, without copying or validation. A matrix
    handed to the container must not be mutated in place afterwards, as that
    would bypass invalidation.
    """

    def __init__(self, matrix: Any = None):
        # None is the placeholder: no usable matrix yet.
        self._matrix = matrix
        self._inverse: Any | None = None

    def set_matrix(self, matrix: Any) -> None:
        self._matrix = matrix
        self._inverse = None

    def get_matrix(self) -> Any:
        return self._matrix

    def set_inverse(self, inverse: Any) -> None:
        """Store the inverse of the current matrix. Meant for cache_solve only; not checked."""
        self._inverse = inverse

    def get_inverse(self) -> Any | None:
        return self._inverse

    @property
    def has_inverse(self) -> bool:
        return self._inverse is not None

    def __repr__(self) -> str:
        if self._matrix is None:
            return "CacheMatrix(matrix=None)"
        shape = getattr(self._matrix, "shape", None)
        if shape is None:
            try:
                shape = (len(self._matrix), len(self._matrix[0]))
            except (TypeError, IndexError, KeyError):
                shape = None
        shape_text = "?" if shape is None else str(tuple(shape))
        return f"CacheMatrix(shape={shape_text}, cached={self.has_inverse})"
