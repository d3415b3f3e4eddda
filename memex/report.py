"""Summary report over replayed runs, as JSON data or plain text."""

from __future__ import annotations

import json
from typing import Any, Sequence

from .replay_model import ReplayRun


def build_report(runs: Sequence[ReplayRun]) -> dict[str, Any]:
    """Count what each run contains and collect the per-run entries."""
    run_items = [
        {
            "run_id": r.run_id,
            "tool_events": len(r.tool_events),
            "has_exit": r.runner_exit is not None,
            "has_drop": r.tee_drop is not None,
            "has_search": r.search_result is not None,
            "derived": r.derived,
        }
        for r in runs
    ]
    return {
        "totals": {
            "runs": len(runs),
            "tool_events": sum(item["tool_events"] for item in run_items),
            "runs_with_exit": sum(item["has_exit"] for item in run_items),
            "runs_with_drop": sum(item["has_drop"] for item in run_items),
            "runs_with_search": sum(item["has_search"] for item in run_items),
        },
        "runs": run_items,
    }


def _json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def _field(obj: Any, key: str) -> Any:
    return obj.get(key) if isinstance(obj, dict) else None


def format_text(report: Any) -> str:
    """Render a report built by ``build_report`` as readable text."""
    lines = ["Replay report"]

    totals = _field(report, "totals")
    if isinstance(report, dict) and "totals" in report:
        for key in ("runs", "tool_events", "runs_with_exit", "runs_with_drop", "runs_with_search"):
            lines.append(f"{key}: {_json(_field(totals, key))}")

    runs = _field(report, "runs")
    if isinstance(runs, list):
        for r in runs:
            lines.append(f"- run_id: {_json(_field(r, 'run_id'))}")
            for key in ("tool_events", "has_exit", "has_drop", "has_search"):
                lines.append(f"  {key}: {_json(_field(r, key))}")

            rerun = _field(_field(r, "derived"), "rerun_gatekeeper")
            if not (isinstance(_field(r, "derived"), dict) and "rerun_gatekeeper" in r["derived"]):
                continue
            diff = _field(rerun, "diff")
            lines.append(
                f"  rerun_gatekeeper: skipped={_json(_field(rerun, 'skipped'))} "
                f"changed={_json(_field(diff, 'changed'))} "
                f"reason={_json(_field(rerun, 'skip_reason'))}"
            )
            summary = _field(diff, "summary_lines")
            if isinstance(summary, list):
                items = [s for s in summary if isinstance(s, str)]
                if items:
                    lines.append(f"  rerun_diff: {' | '.join(items)}")

    return "\n".join(lines) + "\n"