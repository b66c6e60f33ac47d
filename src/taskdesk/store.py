"""HTTP client for the remote task collection resource."""

from __future__ import annotations

import json
from http.client import HTTPException
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.parse import quote
from urllib.request import Request, urlopen

from taskdesk import log
from taskdesk.config import Config
from taskdesk.errors import NetworkError, RemoteError
from taskdesk.tasks.model import Task, TaskStatus

_JSON_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}


class TaskStoreClient:
    """List, create, update and delete tasks against one collection URL.

    Single-item operations address ``<base>/<id>``. Every call is one round
    trip: no retry, no caching.
    """

    def __init__(self, cfg: Config) -> None:
        self._base_url = cfg.base_url
        self._timeout = cfg.timeout
        self._id_field = cfg.id_field

    def item_url(self, task_id: str) -> str:
        return f"{self._base_url.rstrip('/')}/{quote(str(task_id), safe='')}"

    # ── operations ───────────────────────────────────────────────

    def list_tasks(self) -> list[Task]:
        data = self._request("GET", self._base_url)
        if not isinstance(data, list):
            raise RemoteError(
                f"Expected a list of tasks from {self._base_url}, got {type(data).__name__}",
                method="GET",
                url=self._base_url,
            )

        tasks = [Task.from_record(record, self._id_field) for record in data]
        seen: set[str] = set()
        for task in tasks:
            if task.id in seen:
                raise RemoteError(
                    f"Duplicate task id in list response: {task.id}",
                    method="GET",
                    url=self._base_url,
                )
            seen.add(task.id)
        return tasks

    def create_task(
        self,
        title: str,
        description: str,
        status: TaskStatus | str = TaskStatus.TODO,
    ) -> Any:
        body = _fields(title, description, status)
        return self._request("POST", self._base_url, body)

    def update_task(
        self,
        task_id: str,
        title: str,
        description: str,
        status: TaskStatus | str,
    ) -> Any:
        body = _fields(title, description, status)
        return self._request("PUT", self.item_url(task_id), body)

    def delete_task(self, task_id: str) -> Any:
        return self._request("DELETE", self.item_url(task_id))

    # ── transport ────────────────────────────────────────────────

    def _request(self, method: str, url: str, body: dict[str, str] | None = None) -> Any:
        """Send one JSON request and return the decoded body (``None`` if empty)."""
        data = json.dumps(body).encode("utf-8") if body is not None else None
        req = Request(url, data=data, headers=dict(_JSON_HEADERS), method=method)

        log.request(method, url)
        try:
            with urlopen(req, timeout=self._timeout) as resp:
                status = getattr(resp, "status", 200)
                raw = resp.read()
        except HTTPError as exc:
            details = _read_error_body(exc)
            log.request(method, url, exc.code)
            raise RemoteError(
                f"{method} {url} returned {exc.code} {exc.reason}",
                status=exc.code,
                method=method,
                url=url,
                body=details,
            ) from None
        except URLError as exc:
            log.request(method, url, "failed")
            raise NetworkError(method, url, str(exc.reason)) from None
        except (OSError, HTTPException) as exc:
            # HTTPException covers malformed or truncated responses (BadStatusLine, IncompleteRead).
            log.request(method, url, "failed")
            raise NetworkError(method, url, str(exc) or type(exc).__name__) from None

        log.request(method, url, status)
        if not raw or not raw.strip():
            return None
        try:
            return json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError):
            raise RemoteError(
                f"{method} {url} returned a body that is not JSON",
                status=None,
                method=method,
                url=url,
                body=raw.decode("utf-8", errors="replace"),
            ) from None


def _fields(title: str, description: str, status: TaskStatus | str) -> dict[str, str]:
    return {
        "title": title,
        "description": description,
        "status": TaskStatus.parse(status).value,
    }


def _read_error_body(exc: HTTPError) -> str:
    try:
        return exc.read().decode("utf-8", errors="replace")
    except (OSError, HTTPException, AttributeError):
        return ""
