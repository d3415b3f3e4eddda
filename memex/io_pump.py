"""Reading a child's output streams into a tail buffer and a queue of lines."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Any

_flow_log = logging.getLogger("memex.flow")

_READ_CHUNK = 16 * 1024
_PREVIEW_MAX = 120


def _flow_audit_enabled() -> bool:
    value = os.environ.get("MEMEX_FLOW_AUDIT", "")
    return value not in ("", "0")


def _audit_preview(s: str) -> str:
    return s if len(s) <= _PREVIEW_MAX else s[:_PREVIEW_MAX] + "…"


class LineStream(Enum):
    """Which child stream a line came from."""

    STDOUT = "stdout"
    STDERR = "stderr"


@dataclass(frozen=True)
class LineTap:
    """One line of child output."""

    line: str
    stream: LineStream


class TailBuffer:
    """Keeps only the most recent ``capacity`` bytes pushed into it."""

    def __init__(self, capacity: int) -> None:
        self.capacity = max(capacity, 0)
        self._buf = bytearray()

    def push(self, data: bytes) -> None:
        self._buf += data
        excess = len(self._buf) - self.capacity
        if excess > 0:
            del self._buf[:excess]

    def to_bytes(self) -> bytes:
        return bytes(self._buf)

    def __len__(self) -> int:
        return len(self._buf)


def _trim_newline(raw: bytes) -> bytes:
    if raw.endswith(b"\n"):
        raw = raw[:-1]
    if raw.endswith(b"\r"):
        raw = raw[:-1]
    return raw


async def _emit(line_queue: Any, raw: bytes, stream: LineStream, stage: str) -> None:
    line = raw.decode("utf-8", errors="replace")
    if _flow_audit_enabled():
        _flow_log.debug(
            "%s stream=%s bytes=%d preview=%s",
            stage,
            stream.value,
            len(line),
            _audit_preview(line),
        )
    await line_queue.put(LineTap(line, stream))


async def pump(reader: Any, ring: TailBuffer, line_queue: Any, stream: LineStream) -> int:
    """Copy ``reader`` to ``ring`` and queue each line; return the bytes read."""
    audit = _flow_audit_enabled()
    if audit:
        _flow_log.debug("capture.start stream=%s", stream.value)

    total = 0
    pending = bytearray()
    while True:
        chunk = await reader.read(_READ_CHUNK)
        if not chunk:
            break
        ring.push(chunk)
        total += len(chunk)
        pending += chunk
        while (pos := pending.find(b"\n")) != -1:
            one = bytes(pending[: pos + 1])
            del pending[: pos + 1]
            await _emit(line_queue, _trim_newline(one), stream, "capture.line")

    if pending:
        last = _trim_newline(bytes(pending))
        if last:
            await _emit(line_queue, last, stream, "capture.line_eof")

    if audit:
        _flow_log.debug("capture.end stream=%s total_bytes=%d", stream.value, total)
    return total