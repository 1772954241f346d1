"""REST client for a remote Dependency Store."""

from __future__ import annotations

import logging
from typing import Any

import requests
from pydantic import TypeAdapter, ValidationError

from planner.types import Dependency, DependencyType, TaskRef
from store.base_store import DependencyStore
from store.errors import (
    DependencyNotFoundError,
    InvalidDependencyError,
    StoreError,
    StoreTransportError,
    TaskNotFoundError,
)

logger = logging.getLogger("depgraph.store.http")

_DEPENDENCY_LIST = TypeAdapter(list[Dependency])
_TASK_LIST = TypeAdapter(list[TaskRef])


class HTTPDependencyStore(DependencyStore):
    """Talks to ``/api/tasks/{id}/dependencies`` style endpoints."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 15.0,
        headers: dict[str, str] | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()
        if headers:
            self.session.headers.update(headers)

    def list_dependencies(self, task_id: str) -> list[Dependency]:
        payload = self._request("GET", f"/api/tasks/{task_id}/dependencies")
        return self._parse(_DEPENDENCY_LIST, payload or [])

    def create_dependency(
        self,
        task_id: str,
        depends_on_task_id: str,
        dependency_type: DependencyType | str = DependencyType.blocks,
    ) -> Dependency:
        try:
            dep_type = DependencyType(dependency_type)
        except ValueError as exc:
            raise InvalidDependencyError(f"Unknown dependency type: {dependency_type!r}") from exc
        body = {"dependsOnTaskId": depends_on_task_id, "dependencyType": dep_type.value}
        payload = self._request("POST", f"/api/tasks/{task_id}/dependencies", json=body)
        return self._parse(Dependency, payload)

    def delete_dependency(self, task_id: str, dependency_id: str) -> None:
        self._request("DELETE", f"/api/tasks/{task_id}/dependencies/{dependency_id}")

    def list_tasks(self) -> list[TaskRef]:
        payload = self._request("GET", "/api/tasks")
        if isinstance(payload, dict):
            payload = payload.get("tasks") or payload.get("data") or []
        return self._parse(_TASK_LIST, payload or [])

    def _request(self, method: str, path: str, json: dict[str, Any] | None = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.request(method, url, json=json, timeout=self.timeout_seconds)
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise StoreTransportError(f"{method} {url} failed: {exc}") from exc

        if resp.status_code >= 400:
            message = self._error_message(resp)
            logger.warning("%s %s returned %d: %s", method, url, resp.status_code, message)
            if resp.status_code == 404:
                if method == "DELETE":
                    raise DependencyNotFoundError(message)
                raise TaskNotFoundError(message)
            if resp.status_code in (400, 409, 422):
                raise InvalidDependencyError(message)
            raise StoreError(f"{method} {url} returned {resp.status_code}: {message}")

        if resp.status_code == 204 or not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            raise StoreTransportError(f"{method} {url} returned invalid JSON") from exc

    @staticmethod
    def _error_message(resp: requests.Response) -> str:
        try:
            data = resp.json()
        except ValueError:
            return resp.text or resp.reason or ""
        if isinstance(data, dict):
            return str(data.get("error") or data.get("message") or data)
        return str(data)

    @staticmethod
    def _parse(schema: Any, payload: Any) -> Any:
        try:
            if isinstance(schema, TypeAdapter):
                return schema.validate_python(payload)
            return schema.model_validate(payload)
        except ValidationError as exc:
            raise StoreTransportError(f"Unexpected payload from dependency store: {exc}") from exc
