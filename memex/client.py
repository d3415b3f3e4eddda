"""HTTP client for the memory service."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .memory_models import (
    QACandidatePayload,
    QAHitsPayload,
    QASearchPayload,
    QAValidationPayload,
)

_qa_log = logging.getLogger("memex.qa")
_task_log = logging.getLogger("memex.task")


class MemoryClient:
    """Asynchronous client for the memory service's JSON endpoints."""

    def __init__(self, base_url: str, api_key: str, timeout_ms: int) -> None:
        self.base_url = base_url
        self._api_key = api_key
        self._http = httpx.AsyncClient(timeout=timeout_ms / 1000.0)

    async def __aenter__(self) -> "MemoryClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._http.aclose()

    def _url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}{path}"

    def _headers(self) -> dict[str, str]:
        if not self._api_key.strip():
            return {}
        return {"Authorization": f"Bearer {self._api_key}"}

    async def _post(self, path: str, body: Any, log: logging.Logger, stage: str) -> Any:
        url = self._url(path)
        log.debug("memory.http.%s.in url=%s", stage, url)
        resp = await self._http.post(url, json=body, headers=self._headers())
        log.debug("memory.http.%s.out status=%s", stage, resp.status_code)
        return resp.json()

    async def search(self, payload: QASearchPayload) -> Any:
        """Search stored items; returns the decoded JSON response."""
        return await self._post("/v1/qa/search", payload.to_dict(), _qa_log, "search")

    async def send_hit(self, payload: QAHitsPayload) -> Any:
        """Report which items were shown or used."""
        return await self._post("/v1/qa/hit", payload.to_dict(), _qa_log, "hit")

    async def send_candidate(self, payload: QACandidatePayload) -> Any:
        """Propose a new knowledge candidate."""
        return await self._post("/v1/qa/candidates", payload.to_dict(), _qa_log, "candidate")

    async def send_validate(self, payload: QAValidationPayload) -> Any:
        """Send a validation signal for one item."""
        return await self._post("/v1/qa/validate", payload.to_dict(), _qa_log, "validate")

    async def task_grade(self, prompt: str) -> Any:
        """Ask the service to grade a task prompt."""
        return await self._post("/v1/task/grade", {"prompt": prompt}, _task_log, "task_grade")