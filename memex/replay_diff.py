"""Comparison of a recorded gatekeeper decision with a fresh evaluation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

_SIGNAL_KEYS = (
    "tool_events_total",
    "has_strong",
    "top1_score",
    "status_reject",
    "stale_reject",
    "fail_reject",
)


@dataclass
class DecisionDiff:
    """Outcome of comparing a baseline decision with a rerun."""

    has_baseline: bool
    changed: bool
    summary_lines: list[str] = field(default_factory=list)


def _quote(s: str) -> str:
    escaped = (
        s.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
        .replace("\0", "\\0")
    )
    return f'"{escaped}"'


def _debug_value(v: Any) -> str:
    if v is None:
        return "Null"
    if isinstance(v, bool):
        return f"Bool({str(v).lower()})"
    if isinstance(v, (int, float)):
        return f"Number({v!r})"
    if isinstance(v, str):
        return f"String({_quote(v)})"
    if isinstance(v, list):
        return "Array [" + ", ".join(_debug_value(x) for x in v) + "]"
    if isinstance(v, dict):
        inner = ", ".join(f"{_quote(str(k))}: {_debug_value(x)}" for k, x in v.items())
        return "Object {" + inner + "}"
    return repr(v)


def _debug_opt_value(present: bool, v: Any) -> str:
    return f"Some({_debug_value(v)})" if present else "None"


def _debug_opt_bool(v: Optional[bool]) -> str:
    return "None" if v is None else f"Some({str(v).lower()})"


def _debug_ids(ids: list[str]) -> str:
    return "[" + ", ".join(_quote(i) for i in ids) + "]"


def _same(a: Any, b: Any) -> bool:
    """JSON equality that keeps booleans, integers and floats apart."""
    if type(a) is not type(b):
        return False
    if isinstance(a, dict):
        return a.keys() == b.keys() and all(_same(a[k], b[k]) for k in a)
    if isinstance(a, list):
        return len(a) == len(b) and all(_same(x, y) for x, y in zip(a, b))
    return a == b


def _get(v: Any, key: str) -> tuple[bool, Any]:
    if isinstance(v, dict) and key in v:
        return True, v[key]
    return False, None


def _inject_ids(v: Any) -> list[str]:
    _, arr = _get(v, "inject_list")
    if not isinstance(arr, list):
        return []
    ids = []
    for item in arr:
        _, qa_id = _get(item, "qa_id")
        if isinstance(qa_id, str):
            ids.append(qa_id)
    return ids


def _bool(v: Any, key: str) -> Optional[bool]:
    _, value = _get(v, key)
    return value if isinstance(value, bool) else None


def diff_gatekeeper_decision(baseline: Any, rerun: Any) -> DecisionDiff:
    """Summarise how ``rerun`` differs from ``baseline`` (``None`` when absent)."""
    lines: list[str] = []

    r_inject = _inject_ids(rerun)
    r_candidate = _bool(rerun, "should_write_candidate")

    if baseline is None:
        lines.append(f"rerun inject_list: {_debug_ids(r_inject)}")
        lines.append(f"rerun should_write_candidate: {_debug_opt_bool(r_candidate)}")
        return DecisionDiff(has_baseline=False, changed=False, summary_lines=lines)

    b_inject = _inject_ids(baseline)
    b_candidate = _bool(baseline, "should_write_candidate")
    _, b_signals = _get(baseline, "signals")
    _, r_signals = _get(rerun, "signals")

    if b_inject != r_inject:
        lines.append(
            f"inject_list changed: baseline={_debug_ids(b_inject)} "
            f"rerun={_debug_ids(r_inject)}"
        )
    if b_candidate != r_candidate:
        lines.append(
            f"should_write_candidate changed: baseline={_debug_opt_bool(b_candidate)} "
            f"rerun={_debug_opt_bool(r_candidate)}"
        )
    for key in _SIGNAL_KEYS:
        b_has, bv = _get(b_signals, key)
        r_has, rv = _get(r_signals, key)
        if b_has != r_has or (b_has and not _same(bv, rv)):
            lines.append(
                f"signals.{key} changed: baseline={_debug_opt_value(b_has, bv)} "
                f"rerun={_debug_opt_value(r_has, rv)}"
            )

    return DecisionDiff(has_baseline=True, changed=bool(lines), summary_lines=lines)