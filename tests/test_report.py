from memex.replay_model import ReplayRun
from memex.report import build_report, format_text


def _runs():
    return [
        ReplayRun(
            run_id="r1",
            runner_exit={"type": "runner.exit"},
            search_result={"type": "memory.search.result"},
            tool_events=[{"type": "tool.request"}, {"type": "tool.result"}],
        ),
        ReplayRun(run_id="r2", tee_drop={"type": "tee.drop"}, tool_events=[{"type": "x"}]),
    ]


def test_totals_match_runs():
    runs = _runs()
    report = build_report(runs)
    totals = report["totals"]
    assert totals["runs"] == len(runs)
    assert totals["tool_events"] == sum(len(r.tool_events) for r in runs)
    assert totals["runs_with_exit"] == 1
    assert totals["runs_with_drop"] == 1
    assert totals["runs_with_search"] == 1


def test_run_items_in_order():
    report = build_report(_runs())
    assert [r["run_id"] for r in report["runs"]] == ["r1", "r2"]
    assert report["runs"][1]["has_drop"] is True
    assert report["runs"][1]["has_exit"] is False
    assert report["runs"][0]["derived"] is None


def test_empty_report():
    report = build_report([])
    assert report["runs"] == []
    assert all(v == 0 for v in report["totals"].values())


def test_format_text_layout():
    text = format_text(build_report(_runs()))
    lines = text.splitlines()
    assert lines[0] == "Replay report"
    assert "runs: 2" in lines
    assert '- run_id: "r1"' in lines
    assert "  has_exit: true" in lines
    assert "  has_drop: false" in lines
    assert text.endswith("\n")
    assert "rerun_gatekeeper" not in text


def test_format_text_rerun_section():
    run = ReplayRun(
        run_id="r3",
        derived={
            "rerun_gatekeeper": {
                "skipped": False,
                "skip_reason": None,
                "decision": {},
                "diff": {
                    "has_baseline": True,
                    "changed": True,
                    "summary_lines": ["first", "second"],
                },
            }
        },
    )
    lines = format_text(build_report([run])).splitlines()
    assert "  rerun_gatekeeper: skipped=false changed=true reason=null" in lines
    assert "  rerun_diff: first | second" in lines


def test_format_text_skipped_rerun_without_lines():
    run = ReplayRun(
        run_id="r4",
        derived={
            "rerun_gatekeeper": {
                "skipped": True,
                "skip_reason": "missing memory.search.result in events",
                "decision": None,
                "diff": {"has_baseline": False, "changed": False, "summary_lines": []},
            }
        },
    )
    text = format_text(build_report([run]))
    assert 'reason="missing memory.search.result in events"' in text
    assert "rerun_diff" not in text


def test_format_text_missing_fields_print_null():
    text = format_text({})
    assert text == "Replay report\n"
    text = format_text({"totals": {}, "runs": [{}]})
    assert "runs: null" in text.splitlines()
    assert "- run_id: null" in text.splitlines()