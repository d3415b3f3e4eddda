"""Writer task that sends JSON control messages to a child's stdin."""

from __future__ import annotations

import asyncio
import json
from typing import Any


def encode_control_line(msg: Any) -> bytes:
    """Encode one message as compact JSON followed by a newline."""
    return (json.dumps(msg, separators=(",", ":"), ensure_ascii=False) + "\n").encode("utf-8")


async def _write_loop(stdin: Any, ctl_queue: asyncio.Queue, err_queue: asyncio.Queue) -> None:
    while True:
        msg = await ctl_queue.get()
        if msg is None:
            return
        try:
            stdin.write(encode_control_line(msg))
            await stdin.drain()
        except OSError as exc:
            await err_queue.put(f"stdin write failed: {exc}")
            return


def spawn_control_writer(
    stdin: Any,
    control_channel_capacity: int,
    control_writer_error_capacity: int,
) -> tuple[asyncio.Queue, asyncio.Queue, asyncio.Task]:
    """Start the writer; returns (message queue, error queue, task).

    Put ``None`` on the message queue to stop the writer. The first write
    failure is reported on the error queue and ends the writer.
    """
    ctl_queue: asyncio.Queue = asyncio.Queue(maxsize=control_channel_capacity)
    err_queue: asyncio.Queue = asyncio.Queue(maxsize=control_writer_error_capacity)
    task = asyncio.create_task(_write_loop(stdin, ctl_queue, err_queue))
    return ctl_queue, err_queue, task