"""Turn gatekeeper decisions and drafts into memory service payloads."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Sequence

from .decision import GatekeeperDecision
from .memory_models import (
    QACandidatePayload,
    QAHitsPayload,
    QAReferencePayload,
    QAValidationPayload,
)
from .memory_types import CandidateDraft

_SOURCE = "mem-codecli"


def build_hit_payload(project_id: str, decision: GatekeeperDecision) -> Optional[QAHitsPayload]:
    """Return the hit report for a decision, or ``None`` when nothing was hit."""
    if not decision.hit_refs:
        return None
    return QAHitsPayload(
        project_id=project_id,
        references=[
            QAReferencePayload(
                qa_id=ref.qa_id,
                shown=ref.shown,
                used=ref.used,
                message_id=ref.message_id,
                context=ref.context,
            )
            for ref in decision.hit_refs
        ],
    )


def build_validate_payloads(
    project_id: str, decision: GatekeeperDecision
) -> list[QAValidationPayload]:
    """Return one validation payload per validation plan, stamped with the current time."""
    return [
        QAValidationPayload(
            project_id=project_id,
            qa_id=plan.qa_id,
            result=plan.result,
            signal_strength=plan.signal_strength,
            strong_signal=plan.strong_signal,
            context=plan.context,
            ts=datetime.now(timezone.utc).isoformat(),
            payload=plan.payload,
            source=_SOURCE,
        )
        for plan in decision.validate_plans
    ]


def build_candidate_payloads(
    project_id: str, drafts: Sequence[CandidateDraft]
) -> list[QACandidatePayload]:
    """Return one candidate payload per draft."""
    return [
        QACandidatePayload(
            project_id=project_id,
            question=draft.question,
            answer=draft.answer,
            tags=list(draft.tags),
            confidence=draft.confidence,
            metadata=draft.metadata,
            summary=draft.summary,
            source=draft.source,
        )
        for draft in drafts
    ]