"""Tunable thresholds that drive the gatekeeper's selection logic."""

from __future__ import annotations

from dataclasses import dataclass, field


def _default_active_statuses() -> set[str]:
    return {"active", "verified"}


@dataclass
class GatekeeperConfig:
    """Limits and thresholds applied when choosing memory items to inject."""

    max_inject: int = 3
    min_level_inject: int = 2
    min_level_fallback: int = 1
    min_trust_show: float = 0.40
    block_if_consecutive_fail_ge: int = 3
    skip_if_top1_score_ge: float = 0.85
    exclude_stale_by_default: bool = True
    active_statuses: set[str] = field(default_factory=_default_active_statuses)
    digest_head_chars: int = 80
    digest_tail_chars: int = 80