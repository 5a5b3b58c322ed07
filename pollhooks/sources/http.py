"""HTTP work source - talks to a REST task service.

Endpoints (relative to base_url):
    GET  /tasks                  pending tasks
    GET  /messages               pending messages
    POST /tasks/{id}/claim       200 = claimed, 409 = held by someone else
    POST /tasks/{id}/complete    {"result": ...}
    POST /acks                   {"target": ..., "message": ...}
"""

import logging
import os
from typing import Any, Optional

import httpx

from ..config import HTTP_TIMEOUT_SECONDS
from ..models import Message, Task
from .base import TaskSource

logger = logging.getLogger(__name__)

WORK_SOURCE_URL = os.environ.get("POLLHOOKS_SOURCE_URL", "http://localhost:8080")
WORK_SOURCE_TOKEN = os.environ.get("POLLHOOKS_SOURCE_TOKEN", "")


def _unwrap(data: Any, key: str) -> list[dict]:
    """Accept either a bare JSON list or {key: [...]}."""
    if isinstance(data, dict):
        data = data.get(key, [])
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of {key}, got {type(data).__name__}")
    return data


class HttpTaskSource(TaskSource):
    """TaskSource backed by an HTTP API.

    Args:
        base_url: Service root, defaults to POLLHOOKS_SOURCE_URL
        token: Bearer token, defaults to POLLHOOKS_SOURCE_TOKEN
        timeout: Per-request timeout in seconds
        client: Pre-built AsyncClient (not closed by aclose())
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: float = HTTP_TIMEOUT_SECONDS,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = (base_url or WORK_SOURCE_URL).rstrip("/")
        token = WORK_SOURCE_TOKEN if token is None else token
        headers = {"Authorization": f"Bearer {token}"} if token else {}

        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=timeout,
        )

    async def __aenter__(self) -> "HttpTaskSource":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying client if this source created it."""
        if self._owns_client:
            await self._client.aclose()

    async def get_tasks(self) -> list[Task]:
        response = await self._client.get("/tasks")
        response.raise_for_status()
        return [Task.model_validate(item) for item in _unwrap(response.json(), "tasks")]

    async def get_messages(self) -> list[Message]:
        response = await self._client.get("/messages")
        response.raise_for_status()
        return [Message.model_validate(item) for item in _unwrap(response.json(), "messages")]

    async def claim(self, task_id: str) -> bool:
        response = await self._client.post(f"/tasks/{task_id}/claim")
        if response.status_code == httpx.codes.CONFLICT:
            logger.debug(f"Task {task_id} already claimed")
            return False
        response.raise_for_status()
        return True

    async def complete(self, task_id: str, result: Optional[Any] = None) -> None:
        response = await self._client.post(
            f"/tasks/{task_id}/complete",
            json={"result": result},
        )
        response.raise_for_status()

    async def ack(self, target: str, message: str) -> None:
        response = await self._client.post(
            "/acks",
            json={"target": target, "message": message},
        )
        response.raise_for_status()
