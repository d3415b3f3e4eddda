"""Request payloads for the memory service."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Optional


def _without_none(obj: Any) -> dict[str, Any]:
    return {
        f.name: getattr(obj, f.name)
        for f in fields(obj)
        if getattr(obj, f.name) is not None
    }


@dataclass
class QASearchPayload:
    """Search request."""

    project_id: str
    query: str
    limit: int
    min_score: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "project_id": self.project_id,
            "query": self.query,
            "limit": self.limit,
            "min_score": self.min_score,
        }


@dataclass
class QAReferencePayload:
    """One item reference in a hit report."""

    qa_id: str
    shown: Optional[bool] = None
    used: Optional[bool] = None
    message_id: Optional[str] = None
    context: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return _without_none(self)


@dataclass
class QAHitsPayload:
    """Report of items shown or used during a run."""

    project_id: str
    references: list[QAReferencePayload] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "project_id": self.project_id,
            "references": [r.to_dict() for r in self.references],
        }


@dataclass
class QACandidatePayload:
    """A new knowledge candidate proposed to the service."""

    project_id: str
    question: str
    answer: str
    tags: list[str] = field(default_factory=list)
    confidence: float = 0.0
    metadata: Any = None
    summary: Optional[str] = None
    source: Optional[str] = None
    author: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "project_id": self.project_id,
            "question": self.question,
            "answer": self.answer,
        }
        if self.tags:
            out["tags"] = list(self.tags)
        out["confidence"] = self.confidence
        out["metadata"] = self.metadata
        for name in ("summary", "source", "author"):
            value = getattr(self, name)
            if value is not None:
                out[name] = value
        return out


@dataclass
class QAValidationPayload:
    """A validation signal for one item."""

    project_id: str
    qa_id: str
    result: Optional[str] = None
    signal_strength: Optional[str] = None
    success: Optional[bool] = None
    strong_signal: Optional[bool] = None
    source: Optional[str] = None
    context: Optional[str] = None
    client: Optional[str] = None
    ts: Optional[str] = None
    payload: Any = None

    def to_dict(self) -> dict[str, Any]:
        return _without_none(self)