"""Configuration and draft types used around memory injection and extraction."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


@dataclass
class CandidateDraft:
    """A knowledge candidate extracted from a run, before it is sent."""

    question: str
    answer: str
    tags: list[str] = field(default_factory=list)
    confidence: float = 0.0
    metadata: Any = None
    summary: Optional[str] = None
    source: Optional[str] = None


class InjectPlacement(Enum):
    """Where injected memory context goes in the conversation."""

    SYSTEM = "system"
    USER = "user"


@dataclass
class InjectConfig:
    """How memory items are rendered into a prompt."""

    placement: InjectPlacement = InjectPlacement.SYSTEM
    max_items: int = 3
    max_answer_chars: int = 900
    include_meta_line: bool = True


@dataclass
class CandidateExtractConfig:
    """Limits for heuristic candidate extraction."""

    max_candidates: int = 1
    max_answer_chars: int = 1200
    min_answer_chars: int = 200
    context_lines: int = 8
    tool_steps_max: int = 5
    tool_step_args_keys_max: int = 16
    tool_step_value_max_chars: int = 140
    redact: bool = True
    strict_secret_block: bool = True
    confidence: float = 0.45