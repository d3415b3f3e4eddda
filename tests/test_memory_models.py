import json

from memex.memory_models import (
    QACandidatePayload,
    QAHitsPayload,
    QAReferencePayload,
    QASearchPayload,
    QAValidationPayload,
)


def test_search_payload_has_all_fields():
    p = QASearchPayload(project_id="p", query="q", limit=5, min_score=0.2)
    assert p.to_dict() == {"project_id": "p", "query": "q", "limit": 5, "min_score": 0.2}


def test_reference_omits_unset_fields():
    r = QAReferencePayload(qa_id="a", shown=True)
    assert r.to_dict() == {"qa_id": "a", "shown": True}


def test_reference_keeps_false_values():
    r = QAReferencePayload(qa_id="a", shown=False, used=False)
    assert r.to_dict() == {"qa_id": "a", "shown": False, "used": False}


def test_hits_payload_nests_references():
    refs = [QAReferencePayload(qa_id="a", used=True), QAReferencePayload(qa_id="b")]
    d = QAHitsPayload(project_id="p", references=refs).to_dict()
    assert d["project_id"] == "p"
    assert d["references"] == [r.to_dict() for r in refs]


def test_candidate_omits_empty_tags_but_keeps_confidence_and_metadata():
    d = QACandidatePayload(project_id="p", question="q", answer="a").to_dict()
    assert "tags" not in d
    assert d["confidence"] == 0.0
    assert "metadata" in d and d["metadata"] is None
    assert "summary" not in d and "source" not in d and "author" not in d


def test_candidate_includes_tags_and_optionals():
    d = QACandidatePayload(
        project_id="p", question="q", answer="a", tags=["x"], source="mem-codecli"
    ).to_dict()
    assert d["tags"] == ["x"]
    assert d["source"] == "mem-codecli"


def test_validation_payload_roundtrips_through_json():
    p = QAValidationPayload(
        project_id="p",
        qa_id="a",
        result="pass",
        strong_signal=False,
        payload={"exit_code": 0},
    )
    d = json.loads(json.dumps(p.to_dict()))
    assert d == {
        "project_id": "p",
        "qa_id": "a",
        "result": "pass",
        "strong_signal": False,
        "payload": {"exit_code": 0},
    }
    assert QAValidationPayload(**d) == p