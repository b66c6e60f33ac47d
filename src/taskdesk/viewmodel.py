"""Form/list view-model: sequences user actions into store calls."""

from __future__ import annotations

from typing import Any, Callable

from taskdesk import log
from taskdesk.errors import TaskDeskError, ValidationError
from taskdesk.store import TaskStoreClient
from taskdesk.tasks.model import Task, TaskForm, TaskStatus

SUBMIT_ADD = "Add Task"
SUBMIT_UPDATE = "Update Task"


class TaskBoard:
    """Owns the task list and the form, and keeps them in step with the remote.

    The remote collection is the only source of truth: every mutation is
    followed by a full reload, never by patching ``tasks`` in place.

    Usage::

        board = TaskBoard(client)
        board.fetch_tasks()               # initial load
        board.set_title("Buy milk")
        board.set_description("2%")
        board.submit()                    # create, reload, reset form
        board.edit_task(board.tasks[0])   # create -> edit mode
        board.set_status("Done")
        board.submit()                    # update, reload, back to create mode
        board.delete_task(board.tasks[0].id)

    A failed store call leaves ``tasks`` and ``form`` untouched, records a
    message in ``last_error`` and re-raises.
    """

    def __init__(self, store: TaskStoreClient, *, reset_on_delete: bool = False) -> None:
        self._store = store
        self._reset_on_delete = reset_on_delete

        self.tasks: list[Task] = []
        self.form = TaskForm()
        self.is_editing = False
        self.current_task: Task | None = None
        self.last_error: str | None = None

    # ── queries ──────────────────────────────────────────────────

    @property
    def submit_label(self) -> str:
        return SUBMIT_UPDATE if self.is_editing else SUBMIT_ADD

    def find_task(self, ref: str) -> Task:
        """Resolve *ref* as a task id, else as a 1-based list position."""
        ref = ref.strip()
        for task in self.tasks:
            if task.id == ref:
                return task
        if ref.isdigit():
            pos = int(ref)
            if 1 <= pos <= len(self.tasks):
                return self.tasks[pos - 1]
        raise ValidationError(f"No task matches '{ref}'.", fields=["task"])

    # ── form fields (local only) ─────────────────────────────────

    def set_title(self, text: str) -> None:
        self.form.title = text

    def set_description(self, text: str) -> None:
        self.form.description = text

    def set_status(self, value: str | TaskStatus) -> None:
        self.form.status = TaskStatus.parse(value)

    def reset_form(self) -> None:
        self.form = TaskForm()
        self.is_editing = False
        self.current_task = None

    # ── transitions ──────────────────────────────────────────────

    def fetch_tasks(self) -> list[Task]:
        """Replace the in-memory list with the remote collection."""
        tasks = self._call("Loading tasks", self._store.list_tasks)
        self.tasks = tasks
        log.debug(f"Loaded {len(tasks)} task(s)")
        return tasks

    def edit_task(self, task: Task) -> None:
        self.is_editing = True
        self.current_task = task
        self.form = TaskForm.from_task(task)
        log.debug(f"Task {task.id}: create -> edit")

    def cancel_edit(self) -> None:
        if self.current_task is not None:
            log.debug(f"Task {self.current_task.id}: edit -> create (cancelled)")
        self.reset_form()

    def submit(self) -> None:
        """Create or update from the form, then reset the form and reload.

        Nothing is sent when a required field is empty.
        """
        missing = self.form.missing_fields()
        if missing:
            exc = ValidationError(
                f"Required field(s) missing: {', '.join(missing)}.",
                fields=missing,
            )
            self.last_error = str(exc)
            raise exc

        form = self.form
        if self.is_editing and self.current_task is not None:
            task_id = self.current_task.id
            self._call(
                "Updating task",
                self._store.update_task,
                task_id,
                form.title,
                form.description,
                form.status,
            )
            log.debug(f"Task {task_id}: edit -> create (updated)")
        else:
            self._call(
                "Adding task",
                self._store.create_task,
                form.title,
                form.description,
                form.status,
            )

        self.reset_form()
        self.fetch_tasks()

    def delete_task(self, task_id: str) -> None:
        """Delete remotely, then reload.

        When the deleted task is open in the form, the form is left as is
        unless the board was built with ``reset_on_delete``.
        """
        self._call("Deleting task", self._store.delete_task, task_id)

        if self.current_task is not None and self.current_task.id == task_id:
            if self._reset_on_delete:
                log.debug(f"Task {task_id}: edit -> create (deleted)")
                self.reset_form()
            else:
                log.warn(
                    f"Task {task_id} was deleted while open in the form; "
                    "the form still holds its values."
                )

        self.fetch_tasks()

    # ── helpers ──────────────────────────────────────────────────

    def _call(self, action: str, fn: Callable[..., Any], *args: Any) -> Any:
        try:
            result = fn(*args)
        except TaskDeskError as exc:
            self.last_error = log.failure_text(exc, action)
            raise
        self.last_error = None
        return result
