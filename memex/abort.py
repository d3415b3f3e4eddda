"""Aborting a run: tell the child over the control channel, then kill it."""

from __future__ import annotations

import asyncio
import contextlib
from datetime import datetime, timezone
from typing import Any, Optional

from .runner_types import RunnerSession, Signal


def abort_command(run_id: str, reason: str, code: Optional[str]) -> dict[str, Any]:
    """Build the ``control.abort`` control message."""
    now = datetime.now(timezone.utc)
    millis = int(now.timestamp() * 1000)
    cmd: dict[str, Any] = {
        "v": 1,
        "type": "control.abort",
        "ts": now.isoformat(),
        "run_id": run_id,
        "id": f"abort-{run_id}-{millis}",
        "reason": reason,
    }
    if code is not None:
        cmd["code"] = code
    return cmd


async def abort_sequence(
    session: RunnerSession,
    ctl_queue: Any,
    run_id: str,
    abort_grace_ms: int,
    reason: str,
    code: Optional[str],
) -> None:
    """Send an abort message, wait the grace period, then kill the session."""
    with contextlib.suppress(Exception):
        await ctl_queue.put(abort_command(run_id, reason, code))
    await asyncio.sleep(abort_grace_ms / 1000.0)
    with contextlib.suppress(Exception):
        await session.signal(Signal.KILL)