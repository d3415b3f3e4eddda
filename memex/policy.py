"""Policy enforcement for tool requests seen on a runner's output."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from .runner_types import PolicyAction, PolicyPlugin


class PolicyDecision(Enum):
    """Decision sent back to the child over the control channel."""

    ALLOW = "allow"
    DENY = "deny"


@dataclass(frozen=True)
class PolicyOutcome:
    """Whether the run may continue; ``abort_reason`` is set when it must stop."""

    abort_reason: Optional[str] = None

    @property
    def aborted(self) -> bool:
        return self.abort_reason is not None


@dataclass
class _Pending:
    started_at: float
    prompt: str


def policy_decision_command(
    run_id: str, request_id: str, decision: PolicyDecision, reason: str
) -> dict[str, Any]:
    """Build the ``policy.decision`` control message."""
    return {
        "v": 1,
        "type": "policy.decision",
        "ts": datetime.now(timezone.utc).isoformat(),
        "run_id": run_id,
        "id": request_id,
        "decision": decision.value,
        "reason": reason,
    }


async def _send_decision(
    ctl_queue: Any, run_id: str, request_id: str, decision: PolicyDecision, reason: str
) -> Optional[Exception]:
    try:
        await ctl_queue.put(policy_decision_command(run_id, request_id, decision, reason))
    except Exception as exc:  # the control channel is gone or refusing writes
        return exc
    return None


def _event_id(ev: Any) -> Optional[str]:
    value = ev.get("id") if isinstance(ev, Mapping) else getattr(ev, "id", None)
    return None if value is None else str(value)


class PolicyEngine:
    """Decides each tool request once and reports the decision to the child."""

    def __init__(self, fail_closed: bool, decision_timeout: float) -> None:
        self.fail_closed = fail_closed
        self.decision_timeout = decision_timeout
        self._decided: set[str] = set()
        self._pending: dict[str, _Pending] = {}

    async def on_tool_request(
        self,
        ev: Any,
        policy: Optional[PolicyPlugin],
        ctl_queue: Any,
        run_id: str,
    ) -> PolicyOutcome:
        """Check one ``tool.request`` event and send the resulting decision."""
        request_id = _event_id(ev)
        if request_id is None:
            if self.fail_closed:
                return PolicyOutcome("tool.request missing id")
            return PolicyOutcome()

        if request_id in self._decided:
            return PolicyOutcome()

        action = await policy.check(ev) if policy is not None else PolicyAction.allow()

        if action.kind == "allow":
            err = await _send_decision(
                ctl_queue, run_id, request_id, PolicyDecision.ALLOW, "allowed"
            )
            if err is not None and self.fail_closed:
                return PolicyOutcome(f"policy.decision write failed: {err}")
            self._decided.add(request_id)
            return PolicyOutcome()

        if action.kind == "deny":
            await _send_decision(ctl_queue, run_id, request_id, PolicyDecision.DENY, action.reason)
            self._decided.add(request_id)
            return PolicyOutcome(f"policy denial: {action.reason}")

        reason = f"policy requires approval: {action.prompt}"
        await _send_decision(ctl_queue, run_id, request_id, PolicyDecision.DENY, reason)
        self._decided.add(request_id)
        return PolicyOutcome(reason)

    async def on_tick(self, now: float, ctl_queue: Any, run_id: str) -> PolicyOutcome:
        """Deny pending requests older than the decision timeout (``now`` is monotonic)."""
        timed_out = [
            request_id
            for request_id, pending in self._pending.items()
            if now - pending.started_at > self.decision_timeout
        ]
        if not timed_out:
            return PolicyOutcome()

        for request_id in timed_out:
            pending = self._pending.pop(request_id, None)
            prompt = pending.prompt if pending is not None else "policy approval required"
            reason = f"policy decision timeout: {prompt}"
            await _send_decision(ctl_queue, run_id, request_id, PolicyDecision.DENY, reason)
            self._decided.add(request_id)

        if self.fail_closed:
            return PolicyOutcome("decision timeout")
        return PolicyOutcome()