import json

from memex.decision import (
    GatekeeperDecision,
    HitRef,
    InjectItem,
    SearchMatch,
    ValidatePlan,
)


def _match():
    return SearchMatch(
        qa_id="qa-1",
        project_id="proj",
        question="How?",
        answer="Like so.",
        tags=["rust", "git"],
        score=0.7,
        validation_level=2,
        trust=0.9,
        summary="short",
        metadata={"consecutive_fail": 1},
    )


def test_to_inject_item_copies_fields():
    m = _match()
    item = m.to_inject_item()
    assert item.qa_id == m.qa_id
    assert item.question == m.question
    assert item.answer == m.answer
    assert item.summary == m.summary
    assert item.trust == m.trust
    assert item.score == m.score
    assert item.validation_level == m.validation_level
    assert item.tags == m.tags


def test_to_inject_item_tags_are_independent_copy():
    m = _match()
    item = m.to_inject_item()
    item.tags.append("extra")
    assert "extra" not in m.tags


def test_search_match_default_status_is_active():
    assert SearchMatch(qa_id="x").status == "active"


def test_decision_to_dict_is_json_serializable_and_nested():
    m = _match()
    decision = GatekeeperDecision(
        inject_list=[m.to_inject_item()],
        should_write_candidate=False,
        hit_refs=[HitRef(qa_id="qa-1", shown=True, used=False)],
        validate_plans=[
            ValidatePlan(
                qa_id="qa-1",
                result="pass",
                signal_strength="strong",
                strong_signal=True,
                payload={"exit_code": 0},
            )
        ],
        reasons=["r1"],
        signals={"k": 1},
    )
    d = decision.to_dict()
    restored = json.loads(json.dumps(d))
    assert restored["inject_list"][0]["qa_id"] == "qa-1"
    assert restored["should_write_candidate"] is False
    assert restored["hit_refs"][0] == {
        "qa_id": "qa-1",
        "shown": True,
        "used": False,
        "message_id": None,
        "context": None,
    }
    assert restored["validate_plans"][0]["payload"] == {"exit_code": 0}
    assert restored["reasons"] == ["r1"]
    assert restored["signals"] == {"k": 1}


def test_inject_item_default_tags_empty():
    item = InjectItem(qa_id="a", question="q", answer="a")
    assert item.tags == []