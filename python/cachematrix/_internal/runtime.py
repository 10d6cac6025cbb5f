from __future__ import annotations

import os
from typing import Iterable

DEFAULT_INVERSION_METHOD = "inv"
DEFAULT_CONDITION_WARNING = 1e12

_UNSET = object()
_DISABLED_TOKENS = ("off", "none", "false", "disable", "disabled")


class Runtime:
    """Process-wide settings: environment variables with programmatic overrides.

    Environment variables are read on every lookup so that changes made after
    import (e.g. in tests) take effect; an override set through the setters
    always wins until it is reset with ``None``.
    """

    def __init__(
        self,
        *,
        known_methods: Iterable[str],
        method_env_var: str = "CACHEMATRIX_INVERSION_METHOD",
        condition_env_var: str = "CACHEMATRIX_CONDITION_WARNING",
    ) -> None:
        self._known_methods = tuple(known_methods)
        self._method_env_var = method_env_var
        self._condition_env_var = condition_env_var
        self._method_override: str | None = None
        self._condition_override: object = _UNSET

    def _check_method(self, method: str, *, source: str) -> str:
        if not isinstance(method, str):
            raise TypeError(
                f"Inversion method from {source} must be a string, got {type(method).__name__}; "
                f"expected one of {', '.join(self._known_methods)}"
            )
        name = method.strip().lower()
        if name not in self._known_methods:
            raise ValueError(
                f"Unknown inversion method {method!r} from {source}; "
                f"expected one of {', '.join(self._known_methods)}"
            )
        return name

    def inversion_method(self) -> str:
        if self._method_override is not None:
            return self._method_override

        env = os.environ.get(self._method_env_var)
        if env:
            return self._check_method(env, source=self._method_env_var)
        return DEFAULT_INVERSION_METHOD

    def set_inversion_method(self, method: str | None) -> None:
        if method is None:
            self._method_override = None
            return
        self._method_override = self._check_method(method, source="set_inversion_method")

    def condition_warning_threshold(self) -> float | None:
        if self._condition_override is not _UNSET:
            return self._condition_override  # type: ignore[return-value]

        env = os.environ.get(self._condition_env_var)
        if env is None or not env.strip():
            return DEFAULT_CONDITION_WARNING
        if env.strip().lower() in _DISABLED_TOKENS:
            return None
        try:
            value = float(env)
        except ValueError:
            raise ValueError(
                f"{self._condition_env_var} must be a number or 'off', got {env!r}"
            ) from None
        return value if value > 0 else None

    def set_condition_warning_threshold(self, value: float | None) -> None:
        """Override the condition threshold; ``None`` restores the environment/default lookup."""
        if value is None:
            self._condition_override = _UNSET
            return
        value = float(value)
        self._condition_override = value if value > 0 else None
