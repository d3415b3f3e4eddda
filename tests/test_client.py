import json

import httpx
import pytest
import respx

from memex.client import MemoryClient
from memex.memory_models import (
    QACandidatePayload,
    QAHitsPayload,
    QAReferencePayload,
    QASearchPayload,
    QAValidationPayload,
)

BASE = "http://memory.test"


@pytest.mark.asyncio
async def test_search_posts_payload_with_bearer():
    with respx.mock(assert_all_called=True) as router:
        route = router.post(f"{BASE}/v1/qa/search").mock(
            return_value=httpx.Response(200, json=[{"qa_id": "q1"}])
        )
        async with MemoryClient(BASE + "/", "placeholder", 5000) as client:
            result = await client.search(
                QASearchPayload(project_id="p", query="how", limit=5, min_score=0.5)
            )
    assert result == [{"qa_id": "q1"}]
    request = route.calls.last.request
    assert request.headers["Authorization"] == "Bearer placeholder"
    assert json.loads(request.content) == {
        "project_id": "p",
        "query": "how",
        "limit": 5,
        "min_score": 0.5,
    }


@pytest.mark.asyncio
async def test_blank_api_key_sends_no_auth():
    with respx.mock(assert_all_called=True) as router:
        route = router.post(f"{BASE}/v1/task/grade").mock(
            return_value=httpx.Response(200, json={"task_level": "L1"})
        )
        async with MemoryClient(BASE, "  ", 5000) as client:
            result = await client.task_grade("fix the build")
    assert result == {"task_level": "L1"}
    request = route.calls.last.request
    assert "Authorization" not in request.headers
    assert json.loads(request.content) == {"prompt": "fix the build"}


@pytest.mark.asyncio
async def test_send_hit_omits_absent_fields():
    with respx.mock(assert_all_called=True) as router:
        route = router.post(f"{BASE}/v1/qa/hit").mock(
            return_value=httpx.Response(200, json={"ok": True})
        )
        async with MemoryClient(BASE, "", 5000) as client:
            result = await client.send_hit(
                QAHitsPayload(
                    project_id="p",
                    references=[QAReferencePayload(qa_id="a", shown=True, used=False)],
                )
            )
    assert result == {"ok": True}
    assert json.loads(route.calls.last.request.content) == {
        "project_id": "p",
        "references": [{"qa_id": "a", "shown": True, "used": False}],
    }


@pytest.mark.asyncio
async def test_candidate_and_validate_endpoints():
    with respx.mock(assert_all_called=True) as router:
        cand = router.post(f"{BASE}/v1/qa/candidates").mock(
            return_value=httpx.Response(200, json={"id": "c"})
        )
        val = router.post(f"{BASE}/v1/qa/validate").mock(
            return_value=httpx.Response(200, json={"id": "v"})
        )
        async with MemoryClient(BASE, "placeholder", 5000) as client:
            assert await client.send_candidate(
                QACandidatePayload(project_id="p", question="Q", answer="A")
            ) == {"id": "c"}
            assert await client.send_validate(
                QAValidationPayload(project_id="p", qa_id="q", result="pass")
            ) == {"id": "v"}
    cand_body = json.loads(cand.calls.last.request.content)
    assert cand_body["question"] == "Q"
    assert "tags" not in cand_body
    assert json.loads(val.calls.last.request.content) == {
        "project_id": "p",
        "qa_id": "q",
        "result": "pass",
    }


@pytest.mark.asyncio
async def test_non_json_response_raises():
    with respx.mock(assert_all_called=True) as router:
        router.post(f"{BASE}/v1/qa/search").mock(
            return_value=httpx.Response(500, text="not json")
        )
        async with MemoryClient(BASE, "", 5000) as client:
            with pytest.raises(ValueError):
                await client.search(
                    QASearchPayload(project_id="p", query="q", limit=1, min_score=0.0)
                )