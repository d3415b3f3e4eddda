"""Types shared by runner sessions, runner plugins and policy plugins."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


@dataclass
class RunOutcome:
    """How a child run ended, plus what the gatekeeper needs to know about it."""

    exit_code: int
    duration_ms: Optional[int] = None
    stdout_tail: str = ""
    stderr_tail: str = ""
    tool_events: list[Any] = field(default_factory=list)
    shown_qa_ids: list[str] = field(default_factory=list)
    used_qa_ids: list[str] = field(default_factory=list)


class Signal(Enum):
    """Signals a runner session can deliver to its child."""

    KILL = "Kill"
    TERM = "Term"


@dataclass(frozen=True)
class PolicyAction:
    """A policy plugin's verdict on a tool request: allow, deny or ask."""

    kind: str
    reason: str = ""
    prompt: str = ""

    @staticmethod
    def allow() -> "PolicyAction":
        """Let the request go ahead."""
        return PolicyAction("allow")

    @staticmethod
    def deny(reason: str) -> "PolicyAction":
        """Refuse the request for ``reason``."""
        return PolicyAction("deny", reason=reason)

    @staticmethod
    def ask(prompt: str) -> "PolicyAction":
        """Require approval, described by ``prompt``."""
        return PolicyAction("ask", prompt=prompt)


@dataclass
class RunnerStartArgs:
    """What to start: command, arguments, extra environment and working directory."""

    cmd: str
    args: list[str] = field(default_factory=list)
    envs: dict[str, str] = field(default_factory=dict)
    cwd: Optional[str] = None


@dataclass
class RunnerResult:
    """The result of running one session to completion or abort."""

    run_id: str
    exit_code: int
    duration_ms: Optional[int] = None
    stdout_tail: str = ""
    stderr_tail: str = ""
    tool_events: list[Any] = field(default_factory=list)
    dropped_lines: int = 0


@dataclass(frozen=True)
class RunnerEvent:
    """An event emitted by the runner loop for a front end to display."""

    class Kind(Enum):
        TOOL_EVENT = "tool_event"
        ASSISTANT_OUTPUT = "assistant_output"
        RAW_STDOUT = "raw_stdout"
        RAW_STDERR = "raw_stderr"
        STATUS_UPDATE = "status_update"
        RUN_COMPLETE = "run_complete"
        ERROR = "error"

    kind: RunnerEvent.Kind
    text: str = ""
    tool_event: Any = None
    tokens: int = 0
    duration: float = 0.0
    exit_code: int = 0


class RunnerSession(ABC):
    """A started child process whose streams the runner drives."""

    @abstractmethod
    def stdin(self) -> Any:
        """Take the child's stdin writer, or ``None`` if already taken."""

    @abstractmethod
    def stdout(self) -> Any:
        """Take the child's stdout reader, or ``None`` if already taken."""

    @abstractmethod
    def stderr(self) -> Any:
        """Take the child's stderr reader, or ``None`` if already taken."""

    @abstractmethod
    async def signal(self, signal: Signal) -> None:
        """Deliver ``signal`` to the child."""

    @abstractmethod
    async def wait(self) -> RunOutcome:
        """Wait for the child to exit."""


class RunnerPlugin(ABC):
    """Something able to start runner sessions."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Plugin name."""

    @abstractmethod
    async def start_session(self, args: RunnerStartArgs) -> RunnerSession:
        """Start a session for ``args``."""


class PolicyPlugin(ABC):
    """Something that judges tool requests."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Plugin name."""

    @abstractmethod
    async def check(self, event: Any) -> PolicyAction:
        """Return the verdict for a tool request event."""