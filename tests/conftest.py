"""Shared fixtures for taskdesk tests.

HTTP in tests:
- Never hit the network. The ``remote`` fixture patches ``taskdesk.store.urlopen``
  with an in-memory task collection that answers like the real backend.
- ``remote.calls`` records every (method, url, body) the client sent.
"""

from __future__ import annotations

import io
import json
from typing import Any
from urllib.error import HTTPError
from urllib.parse import unquote
from urllib.request import Request

import pytest

from taskdesk import log
from taskdesk.config import Config
from taskdesk.store import TaskStoreClient
from taskdesk.tasks.model import Task, TaskStatus
from taskdesk.viewmodel import TaskBoard

BASE_URL = "http://tasks.test/tasks/"


class _FakeResponse:
    def __init__(self, payload: bytes, status: int = 200) -> None:
        self._payload = payload
        self.status = status

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        return False

    def read(self) -> bytes:
        return self._payload


def _json_response(data: Any, status: int = 200) -> _FakeResponse:
    return _FakeResponse(json.dumps(data).encode("utf-8"), status)


class FakeRemote:
    """In-memory task collection speaking the backend's JSON contract."""

    def __init__(self, base_url: str = BASE_URL, id_field: str = "_id") -> None:
        self.base_url = base_url
        self.id_field = id_field
        self.records: dict[str, dict[str, str]] = {}
        self.calls: list[tuple[str, str, dict | None]] = []
        self.timeouts: list[float | None] = []
        self.fail_with: BaseException | None = None
        self._next_id = 1

    def seed(self, title: str, description: str, status: str = "To-Do") -> str:
        task_id = self._new_id()
        self.records[task_id] = {
            "title": title,
            "description": description,
            "status": status,
        }
        return task_id

    def mutating_calls(self) -> list[tuple[str, str, dict | None]]:
        return [c for c in self.calls if c[0] != "GET"]

    def _new_id(self) -> str:
        task_id = f"64f0c2{self._next_id:04d}"
        self._next_id += 1
        return task_id

    def _record(self, task_id: str) -> dict[str, str]:
        return {self.id_field: task_id, **self.records[task_id]}

    def _http_error(self, url: str, code: int, msg: str) -> HTTPError:
        body = json.dumps({"message": msg}).encode("utf-8")
        return HTTPError(url, code, msg, None, io.BytesIO(body))

    def urlopen(self, req: Request, timeout: float | None = None) -> _FakeResponse:
        method = req.get_method()
        url = req.full_url
        body = json.loads(req.data.decode("utf-8")) if req.data else None
        self.calls.append((method, url, body))
        self.timeouts.append(timeout)

        if self.fail_with is not None:
            raise self.fail_with

        base = self.base_url.rstrip("/")
        if url.rstrip("/") == base:
            if method == "GET":
                return _json_response([self._record(tid) for tid in self.records])
            if method == "POST":
                task_id = self._new_id()
                self.records[task_id] = dict(body or {})
                return _json_response(self._record(task_id), 201)
            raise self._http_error(url, 405, "Method Not Allowed")

        prefix = base + "/"
        if not url.startswith(prefix):
            raise self._http_error(url, 404, "Not Found")

        task_id = unquote(url[len(prefix):])
        if task_id not in self.records:
            raise self._http_error(url, 404, "Task not found")
        if method == "PUT":
            self.records[task_id] = dict(body or {})
            return _json_response(self._record(task_id))
        if method == "DELETE":
            del self.records[task_id]
            return _json_response({"message": "Task deleted"})
        raise self._http_error(url, 405, "Method Not Allowed")


@pytest.fixture(autouse=True)
def _quiet_log():
    """CLI ``-v`` flips a module global; restore it after each test."""
    log.set_verbose(False)
    yield
    log.set_verbose(False)


@pytest.fixture
def remote(monkeypatch: pytest.MonkeyPatch) -> FakeRemote:
    fake = FakeRemote()
    monkeypatch.setattr("taskdesk.store.urlopen", fake.urlopen)
    return fake


@pytest.fixture
def cfg() -> Config:
    return Config(base_url=BASE_URL)


@pytest.fixture
def client(cfg: Config, remote: FakeRemote) -> TaskStoreClient:
    return TaskStoreClient(cfg)


@pytest.fixture
def board(client: TaskStoreClient) -> TaskBoard:
    return TaskBoard(client)


def _make_task(
    id: str,
    title: str = "",
    description: str = "",
    status: TaskStatus = TaskStatus.TODO,
) -> Task:
    return Task(
        id=id,
        title=title or f"Task {id}",
        description=description or f"Description of {id}",
        status=status,
    )


@pytest.fixture
def make_task():
    """Factory fixture that creates Task instances."""
    return _make_task
