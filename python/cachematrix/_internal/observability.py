from __future__ import annotations

import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, Tuple

from .coercion import shape_of

OUTCOMES = ("hit", "miss", "error")


@dataclass
class SolveRecord:
    op: str
    outcome: str
    method: str | None
    shape: Tuple[int, ...] | None
    trace_tag: str
    error: str | None
    timestamp: float


class SolveObservability:
    """Keeps the latest solve record per outcome and running outcome counters."""

    def __init__(self) -> None:
        self._counter = 0
        self._counts: Dict[str, int] = {outcome: 0 for outcome in OUTCOMES}
        self._last: dict[str, dict[str, Any]] = {}

    def clear(self) -> None:
        self._last.clear()
        for outcome in OUTCOMES:
            self._counts[outcome] = 0

    def _record(self, record: SolveRecord) -> dict[str, Any]:
        payload = asdict(record)
        self._last["__latest__"] = payload
        self._last[record.outcome] = payload
        self._counts[record.outcome] += 1
        return payload

    def record(
        self,
        outcome: str,
        matrix: Any,
        *,
        method: str | None = None,
        error: BaseException | None = None,
        op: str = "cache_solve",
    ) -> dict[str, Any]:
        if outcome not in OUTCOMES:
            raise ValueError(f"Unknown solve outcome {outcome!r}")

        self._counter += 1
        record = SolveRecord(
            op=op,
            outcome=outcome,
            method=method,
            shape=shape_of(matrix),
            trace_tag=f"{op}:{outcome}:{self._counter}",
            error=None if error is None else f"{type(error).__name__}: {error}",
            timestamp=time.time(),
        )
        return self._record(record)

    def last(self, outcome: str | None = None) -> dict[str, Any] | None:
        key = outcome or "__latest__"
        payload = self._last.get(key)
        if payload is None:
            return None
        return dict(payload)

    def stats(self) -> dict[str, int]:
        return dict(self._counts)


# Module-level singleton helpers (optional convenience)
_default_observability = SolveObservability()


def default_instance() -> SolveObservability:
    return _default_observability
