"""Task and TaskForm data models used by the store client and view-model."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from taskdesk.errors import RemoteError, ValidationError


class TaskStatus(str, Enum):
    TODO = "To-Do"
    IN_PROGRESS = "In Progress"
    DONE = "Done"

    @classmethod
    def parse(cls, value: str | TaskStatus) -> TaskStatus:
        """Resolve a wire value or a short alias (``t``/``ip``/``d``)."""
        if isinstance(value, TaskStatus):
            return value
        key = (value or "").strip().lower()
        for status in cls:
            if status.value.lower() == key:
                return status
        alias = STATUS_ALIASES.get(key)
        if alias is None:
            allowed = ", ".join(s.value for s in cls)
            raise ValidationError(
                f"Invalid status '{value}'. Valid statuses: {allowed}.",
                fields=["status"],
            )
        return alias


STATUS_ALIASES: dict[str, TaskStatus] = {
    "t": TaskStatus.TODO,
    "todo": TaskStatus.TODO,
    "ip": TaskStatus.IN_PROGRESS,
    "in-progress": TaskStatus.IN_PROGRESS,
    "progress": TaskStatus.IN_PROGRESS,
    "d": TaskStatus.DONE,
    "done": TaskStatus.DONE,
}


@dataclass(frozen=True)
class Task:
    id: str
    title: str
    description: str
    status: TaskStatus = TaskStatus.TODO

    @classmethod
    def from_record(cls, record: Any, id_field: str = "_id") -> Task:
        """Build a task from one JSON record of the collection.

        The identifier is read from *id_field*, falling back to ``id``.
        """
        if not isinstance(record, dict):
            raise RemoteError(f"Task record is not an object: {record!r}")

        raw_id = record.get(id_field)
        if raw_id in (None, ""):
            raw_id = record.get("id")
        if raw_id in (None, ""):
            raise RemoteError(f"Task record has no '{id_field}' field: {record!r}")

        # Records must carry the exact wire value; aliases are for user input only.
        raw_status = record.get("status")
        try:
            status = TaskStatus(raw_status)
        except ValueError:
            allowed = ", ".join(s.value for s in TaskStatus)
            raise RemoteError(
                f"Task {raw_id}: Invalid status {raw_status!r}. Valid statuses: {allowed}."
            ) from None

        return cls(
            id=str(raw_id),
            title=str(record.get("title") or ""),
            description=str(record.get("description") or ""),
            status=status,
        )


@dataclass
class TaskForm:
    """Transient form fields; never persisted."""

    title: str = ""
    description: str = ""
    status: TaskStatus = TaskStatus.TODO

    @classmethod
    def from_task(cls, task: Task) -> TaskForm:
        return cls(title=task.title, description=task.description, status=task.status)

    def missing_fields(self) -> list[str]:
        missing: list[str] = []
        if not self.title.strip():
            missing.append("title")
        if not self.description.strip():
            missing.append("description")
        return missing
