"""Human-readable reasons summarising tool request/result correlation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Optional


@dataclass
class ToolCorrStats:
    """Per-tool correlation counts."""

    matched: int = 0
    request_only: int = 0
    result_only: int = 0
    request_missing_id: int = 0
    result_missing_id: int = 0
    failed: int = 0


@dataclass
class CorrelationStats:
    """Correlation counts between tool requests and tool results."""

    request_count: int = 0
    result_count: int = 0
    matched_pairs: int = 0
    unmatched_requests: int = 0
    unmatched_results: int = 0
    request_missing_id: int = 0
    result_missing_id: int = 0
    duplicate_request_ids: int = 0
    duplicate_result_ids: int = 0
    failed_results: int = 0
    by_tool: dict[str, ToolCorrStats] = field(default_factory=dict)
    last_pair: Optional[Any] = None


class _Kind(Enum):
    MISSING_ID = auto()
    UNMATCHED = auto()
    FAILED = auto()


def _score(kind: _Kind, s: ToolCorrStats) -> int:
    if kind is _Kind.MISSING_ID:
        return s.request_missing_id + s.result_missing_id
    if kind is _Kind.UNMATCHED:
        return s.request_only + s.result_only
    return s.failed


def _format_row(kind: _Kind, tool: str, score: int, s: ToolCorrStats) -> str:
    if kind is _Kind.MISSING_ID:
        return (
            f" - tool={tool} missing_id={score} "
            f"(req_missing={s.request_missing_id}, res_missing={s.result_missing_id})"
        )
    if kind is _Kind.UNMATCHED:
        return (
            f" - tool={tool} unmatched={score} "
            f"(request_only={s.request_only}, result_only={s.result_only})"
        )
    return (
        f" - tool={tool} failed={score} "
        f"(matched={s.matched}, request_only={s.request_only}, result_only={s.result_only})"
    )


def _top_tools_lines(by_tool: dict[str, ToolCorrStats], kind: _Kind, top_n: int) -> list[str]:
    rows = [
        (tool, _score(kind, s), s)
        for tool, s in sorted(by_tool.items())
        if _score(kind, s) > 0
    ]
    rows.sort(key=lambda row: row[1], reverse=True)
    return [_format_row(kind, tool, score, s) for tool, score, s in rows[:top_n]]


def summarize_tool_corr_anomalies(corr: CorrelationStats) -> list[str]:
    """Describe correlation totals and any anomalies, worst tools first."""
    reasons = [
        f"tool_corr: req={corr.request_count}, res={corr.result_count}, "
        f"matched={corr.matched_pairs}, unreq={corr.unmatched_requests}, "
        f"unres={corr.unmatched_results}, miss_req_id={corr.request_missing_id}, "
        f"miss_res_id={corr.result_missing_id}, dup_req_id={corr.duplicate_request_ids}, "
        f"dup_res_id={corr.duplicate_result_ids}, failed_res={corr.failed_results}"
    ]

    if corr.request_missing_id + corr.result_missing_id > 0:
        reasons.append(
            f"tool_corr anomaly: missing id (request={corr.request_missing_id}, "
            f"result={corr.result_missing_id})"
        )
        reasons.extend(_top_tools_lines(corr.by_tool, _Kind.MISSING_ID, 5))

    if corr.unmatched_requests + corr.unmatched_results > 0:
        reasons.append(
            f"tool_corr anomaly: unmatched (requests_only={corr.unmatched_requests}, "
            f"results_only={corr.unmatched_results})"
        )
        reasons.extend(_top_tools_lines(corr.by_tool, _Kind.UNMATCHED, 5))

    if corr.duplicate_request_ids + corr.duplicate_result_ids > 0:
        reasons.append(
            f"tool_corr anomaly: duplicate ids (req_dup={corr.duplicate_request_ids}, "
            f"res_dup={corr.duplicate_result_ids})"
        )

    if corr.failed_results > 0:
        reasons.append(f"tool_corr: failed_results={corr.failed_results}")
        reasons.extend(_top_tools_lines(corr.by_tool, _Kind.FAILED, 5))

    if corr.last_pair is not None:
        reasons.append("tool_corr: last_pair available")

    return reasons