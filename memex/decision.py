"""Data carried into and out of the gatekeeper."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Optional


@dataclass
class TaskGradeResult:
    """Grading of a task by the memory service."""

    task_level: str
    reason: str
    recommended_model: str
    recommended_model_provider: Optional[str] = None
    confidence: float = 0.0


@dataclass
class InjectItem:
    """A memory item chosen for injection into a prompt."""

    qa_id: str
    question: str
    answer: str
    summary: Optional[str] = None
    trust: float = 0.0
    validation_level: int = 0
    score: float = 0.0
    tags: list[str] = field(default_factory=list)


@dataclass
class SearchMatch:
    """One result returned by a memory search."""

    qa_id: str
    project_id: Optional[str] = None
    question: str = ""
    answer: str = ""
    tags: list[str] = field(default_factory=list)
    score: float = 0.0
    relevance: float = 0.0
    validation_level: int = 0
    level: Optional[str] = None
    trust: float = 0.0
    freshness: float = 0.0
    confidence: float = 0.0
    status: str = "active"
    summary: Optional[str] = None
    source: Optional[str] = None
    expiry_at: Optional[str] = None
    metadata: Any = None

    def to_inject_item(self) -> InjectItem:
        """Build the injectable view of this match."""
        return InjectItem(
            qa_id=self.qa_id,
            question=self.question,
            answer=self.answer,
            summary=self.summary,
            trust=self.trust,
            validation_level=self.validation_level,
            score=self.score,
            tags=list(self.tags),
        )


@dataclass
class HitRef:
    """Record that an item was shown to, or used by, the model."""

    qa_id: str
    shown: bool
    used: bool
    message_id: Optional[str] = None
    context: Optional[str] = None


@dataclass
class ValidatePlan:
    """A validation report to send for one item."""

    qa_id: str
    result: str
    signal_strength: str
    strong_signal: bool
    context: Optional[str] = None
    payload: Any = None


@dataclass
class GatekeeperDecision:
    """Everything the gatekeeper decided for one run."""

    inject_list: list[InjectItem] = field(default_factory=list)
    should_write_candidate: bool = True
    hit_refs: list[HitRef] = field(default_factory=list)
    validate_plans: list[ValidatePlan] = field(default_factory=list)
    reasons: list[str] = field(default_factory=list)
    signals: Any = None

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready dictionary of the decision."""
        return asdict(self)