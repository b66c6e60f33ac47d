"""Terminal rendering of the task form and list via Rich."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from taskdesk import log
from taskdesk.tasks.model import Task, TaskStatus
from taskdesk.viewmodel import TaskBoard

RULE = "[bold]============================================[/bold]"

_STATUS_STYLE: dict[TaskStatus, str] = {
    TaskStatus.TODO: "white",
    TaskStatus.IN_PROGRESS: "yellow",
    TaskStatus.DONE: "green",
}


def status_markup(status: TaskStatus) -> str:
    style = _STATUS_STYLE.get(status, "white")
    return f"[{style}]{escape(status.value)}[/{style}]"


def task_table(tasks: list[Task]) -> Table:
    """Build the list view: one row per task with its position for edit/delete."""
    table = Table(show_header=True, header_style="bold", expand=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Description")
    table.add_column("Status")
    table.add_column("ID", style="dim")
    for pos, task in enumerate(tasks, start=1):
        table.add_row(
            str(pos),
            escape(task.title),
            escape(task.description),
            status_markup(task.status),
            escape(task.id),
        )
    return table


def render_list(tasks: list[Task], console: Console | None = None) -> None:
    out = console or log.console
    if not tasks:
        out.print("[dim]No tasks.[/dim]")
        return
    out.print(task_table(tasks))


def render_form(board: TaskBoard, console: Console | None = None) -> None:
    out = console or log.console
    form = board.form
    if board.is_editing and board.current_task is not None:
        out.print(f"Editing task [cyan]{escape(board.current_task.id)}[/cyan]")
    out.print(f"  Title:       {escape(form.title) or '[dim](empty)[/dim]'}")
    out.print(f"  Description: {escape(form.description) or '[dim](empty)[/dim]'}")
    out.print(f"  Status:      {status_markup(form.status)}")
    out.print(f"  [bold]\\[ {board.submit_label} ][/bold]")


def render_board(board: TaskBoard, console: Console | None = None) -> None:
    out = console or log.console
    out.print("")
    out.print(RULE)
    out.print("[bold]TASK MANAGEMENT[/bold]")
    out.print(RULE)
    render_form(board, out)
    out.print("")
    render_list(board.tasks, out)
