"""Warning categories raised by cachematrix.

Filter on CacheMatrixWarning to silence or escalate every warning this
package emits. No imports here; the inversion code pulls these in.
"""


class CacheMatrixWarning(UserWarning):
    """Base warning category for all cachematrix user-facing warnings."""


class CacheMatrixConditioningWarning(CacheMatrixWarning):
    """Heuristic warnings about ill-conditioned matrices (inverse may be inaccurate)."""
