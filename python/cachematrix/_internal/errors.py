from __future__ import annotations

import numpy as np


class InversionError(np.linalg.LinAlgError):
    """Raised when a matrix cannot be inverted (singular, non-square or malformed)."""


class MatrixNotSetError(RuntimeError):
    pass
