import logging
from types import TracebackType
from typing import Any, Type
from urllib.parse import quote
from aiohttp import ClientError, ClientSession, ContentTypeError

from src.client.exceptions import NetworkError, TaskApiError
from src.tasks.schemas import Task


logger = logging.getLogger(__name__)


class TaskApiClient:
    """JSON client for the `/api/tasks` endpoints.

    Requests are made once: there is no retry and no cancellation.
    """

    def __init__(self, *, base_url: str, session: ClientSession | None = None):
        self.base_url = base_url.rstrip("/")
        self.session: ClientSession = session or ClientSession(
            headers={"Content-Type": "application/json"}
        )

    async def __aenter__(self):
        return self

    async def __aexit__(
        self, exc_type: Type[Exception], exc: Exception, tb: TracebackType
    ):
        if self.session:
            await self.session.close()

    def _url(self, endpoint: str) -> str:
        path = endpoint if endpoint.startswith("/api") else f"/api{endpoint}"
        return f"{self.base_url}{path}"

    async def request(
        self, method: str, endpoint: str, json: dict[str, Any] | None = None
    ) -> Any:
        url = self._url(endpoint)
        try:
            async with self.session.request(method, url, json=json) as response:
                if response.status >= 400:
                    try:
                        body = await response.json()
                    except (ContentTypeError, ValueError):
                        body = {}
                    message = (body or {}).get("error") or (
                        f"HTTP error! status: {response.status}"
                    )
                    raise TaskApiError(message, response.status)
                return await response.json()
        except ClientError as e:
            logger.exception(f"Request to {url} failed")
            raise NetworkError(f"Request to {url} failed: {e}") from e

    async def list_tasks(self) -> list[Task]:
        data = await self.request("GET", "/tasks")
        return [Task.model_validate(item) for item in data]

    async def create_task(self, fields: dict[str, Any]) -> Task:
        data = await self.request("POST", "/tasks", json=fields)
        return Task.model_validate(data)

    async def update_task(self, task_id: str, fields: dict[str, Any]) -> Task:
        data = await self.request(
            "PUT", f"/tasks/{quote(task_id, safe='')}", json=fields
        )
        return Task.model_validate(data)

    async def delete_task(self, task_id: str) -> None:
        await self.request("DELETE", f"/tasks/{quote(task_id, safe='')}")
