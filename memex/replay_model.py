"""One run reassembled from a recorded events file."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, is_dataclass
from typing import Any, Optional


def _plain(value: Any) -> Any:
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    return value


@dataclass
class ReplayRun:
    """Events belonging to a single run id."""

    run_id: str = ""
    runner_start: Optional[Any] = None
    runner_exit: Optional[Any] = None
    tee_drop: Optional[Any] = None
    memory_calls: list[Any] = field(default_factory=list)
    tool_events: list[Any] = field(default_factory=list)
    search_result: Optional[Any] = None
    gatekeeper_decision: Optional[Any] = None
    derived: Any = None

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready dictionary of the run."""
        return {
            "run_id": self.run_id,
            "runner_start": _plain(self.runner_start),
            "runner_exit": _plain(self.runner_exit),
            "tee_drop": _plain(self.tee_drop),
            "memory_calls": [_plain(e) for e in self.memory_calls],
            "tool_events": [_plain(e) for e in self.tool_events],
            "search_result": _plain(self.search_result),
            "gatekeeper_decision": _plain(self.gatekeeper_decision),
            "derived": self.derived,
        }