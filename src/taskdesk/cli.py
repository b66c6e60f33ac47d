"""TASKDESK CLI — interactive task form/list plus one-shot subcommands.

Installed as ``taskdesk`` console_script via pipx / pip.
"""

from __future__ import annotations

import sys
from typing import Any, Callable

import click
from rich.markup import escape

from taskdesk import __version__
from taskdesk import log as glog
from taskdesk.config import Config, DEFAULT_ID_FIELD, DEFAULT_TIMEOUT
from taskdesk.errors import TaskDeskError, ValidationError
from taskdesk.render import render_board, render_list
from taskdesk.store import TaskStoreClient
from taskdesk.tasks.model import TaskStatus
from taskdesk.viewmodel import TaskBoard


CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])

SESSION_HELP = (
    ("title <text>", "Set the form title"),
    ("desc <text>", "Set the form description"),
    ("status <s>", "Set the form status: To-Do, In Progress, Done (aliases t/ip/d)"),
    ("submit", "Add the task, or update it when editing"),
    ("edit <n|id>", "Load a task into the form (list position or id)"),
    ("delete <n|id>", "Delete a task (alias: rm)"),
    ("cancel", "Leave edit mode and clear the form"),
    ("refresh", "Reload the list from the server (alias: ls)"),
    ("help", "Show this help"),
    ("exit", "Quit (alias: quit, Ctrl-D)"),
)


def _parse_status_option(
    ctx: click.Context, param: click.Parameter, value: str | None
) -> TaskStatus | None:
    if value is None:
        return None
    try:
        return TaskStatus.parse(value)
    except ValidationError as exc:
        raise click.BadParameter(str(exc)) from None


def _build_board(cfg: Config) -> TaskBoard:
    return TaskBoard(TaskStoreClient(cfg), reset_on_delete=cfg.reset_on_delete)


def _run_or_exit(fn: Callable[..., Any], *args: Any, action: str = "") -> Any:
    """Run one board action; report a failure as '<action> failed: ...' and exit 1."""
    try:
        return fn(*args)
    except TaskDeskError as exc:
        glog.failure(exc, action)
        sys.exit(1)


@click.group(invoke_without_command=True, context_settings=CONTEXT_SETTINGS)
@click.option("--base-url", default="", help="Task collection URL (env: TASKDESK_BASE_URL)")
@click.option(
    "--timeout",
    type=click.IntRange(min=1),
    default=DEFAULT_TIMEOUT,
    show_default=True,
    help="Seconds to wait for each request",
)
@click.option("--id-field", default=DEFAULT_ID_FIELD, show_default=True, help="Identifier field of task records")
@click.option("--reset-on-delete", is_flag=True, help="Clear the form when the task being edited is deleted")
@click.option("-v", "--verbose", is_flag=True, help="Show debug output")
@click.version_option(__version__, prog_name="taskdesk")
@click.pass_context
def main(
    ctx: click.Context,
    base_url: str,
    timeout: int,
    id_field: str,
    reset_on_delete: bool,
    verbose: bool,
) -> None:
    """TASKDESK — Task management against a remote task collection.

    Without a subcommand, opens an interactive session showing the task
    form and the task list.

    \b
    EXAMPLES:
      taskdesk                                   # Interactive form + list
      taskdesk list                              # Print all tasks
      taskdesk add "Buy milk" "2%"               # Create a To-Do task
      taskdesk update 1 --status done            # Update task #1 in the list
      taskdesk delete 64f0c2...                  # Delete by id
      taskdesk --base-url http://localhost:3000/tasks/ list
    """
    glog.set_verbose(verbose)

    cfg = Config(
        base_url=base_url,
        timeout=timeout,
        id_field=id_field,
        reset_on_delete=reset_on_delete,
        verbose=verbose,
    )
    ctx.obj = cfg

    if ctx.invoked_subcommand is not None:
        return

    _run_session(cfg)


# ── Subcommands ──────────────────────────────────────────────────


@main.command("list")
@click.pass_obj
def list_cmd(cfg: Config) -> None:
    """Print all tasks."""
    board = _build_board(cfg)
    _run_or_exit(board.fetch_tasks, action="Loading tasks")
    render_list(board.tasks)


@main.command()
@click.argument("title")
@click.argument("description")
@click.option(
    "--status",
    "-s",
    default=TaskStatus.TODO.value,
    show_default=True,
    callback=_parse_status_option,
    help="To-Do, In Progress or Done (aliases t/ip/d)",
)
@click.pass_obj
def add(cfg: Config, title: str, description: str, status: TaskStatus) -> None:
    """Create a task, then print the list."""
    board = _build_board(cfg)
    board.set_title(title)
    board.set_description(description)
    board.set_status(status)
    _run_or_exit(board.submit, action="Adding task")
    glog.success(f"Added task: {escape(title)}")
    render_list(board.tasks)


@main.command()
@click.argument("ref")
@click.option("--title", "-t", default=None, help="New title")
@click.option("--description", "-d", default=None, help="New description")
@click.option(
    "--status",
    "-s",
    default=None,
    callback=_parse_status_option,
    help="To-Do, In Progress or Done (aliases t/ip/d)",
)
@click.pass_obj
def update(
    cfg: Config,
    ref: str,
    title: str | None,
    description: str | None,
    status: TaskStatus | None,
) -> None:
    """Update the task REF (list position or id).

    Fields not given keep their stored values; the update always sends
    all three fields.
    """
    board = _build_board(cfg)
    _run_or_exit(board.fetch_tasks, action="Loading tasks")
    task = _run_or_exit(board.find_task, ref)

    board.edit_task(task)
    if title is not None:
        board.set_title(title)
    if description is not None:
        board.set_description(description)
    if status is not None:
        board.set_status(status)

    _run_or_exit(board.submit, action="Updating task")
    glog.success(f"Updated task {escape(task.id)}")
    render_list(board.tasks)


@main.command()
@click.argument("ref")
@click.pass_obj
def delete(cfg: Config, ref: str) -> None:
    """Delete the task REF (list position or id), then print the list."""
    board = _build_board(cfg)
    _run_or_exit(board.fetch_tasks, action="Loading tasks")
    task = _run_or_exit(board.find_task, ref)
    _run_or_exit(board.delete_task, task.id, action="Deleting task")
    glog.success(f"Deleted task {escape(task.id)}")
    render_list(board.tasks)


# ── Interactive session ──────────────────────────────────────────


def _print_session_help() -> None:
    glog.console.print("[bold]Commands:[/bold]")
    for usage, text in SESSION_HELP:
        glog.console.print(f"  {usage:<16} {text}")


def _require_arg(cmd: str, arg: str, usage: str) -> str:
    if not arg:
        raise ValidationError(f"Usage: {cmd} {usage}")
    return arg


def _dispatch(board: TaskBoard, cmd: str, arg: str) -> bool:
    """Apply one session command. Returns ``True`` when the board should be redrawn."""
    match cmd:
        case "title":
            board.set_title(arg)
        case "desc" | "description":
            board.set_description(arg)
        case "status":
            board.set_status(_require_arg(cmd, arg, "<To-Do|In Progress|Done|t|ip|d>"))
        case "submit" | "save":
            was_editing = board.is_editing
            board.submit()
            glog.success("Task updated" if was_editing else "Task added")
        case "edit":
            board.edit_task(board.find_task(_require_arg(cmd, arg, "<n|id>")))
        case "delete" | "rm":
            task = board.find_task(_require_arg(cmd, arg, "<n|id>"))
            board.delete_task(task.id)
            glog.success(f"Deleted task {escape(task.id)}")
        case "cancel":
            board.cancel_edit()
        case "refresh" | "ls" | "list":
            board.fetch_tasks()
        case "help":
            _print_session_help()
            return False
        case _:
            glog.warn("Unknown command. Type 'help' for instructions.")
            return False
    return True


def _run_session(cfg: Config) -> None:
    """Interactive loop: draw the form and list, read a command, repeat."""
    board = _build_board(cfg)
    glog.info(f"Collection: {cfg.base_url}")
    try:
        board.fetch_tasks()
    except TaskDeskError as exc:
        glog.failure(exc, "Loading tasks")

    redraw = True
    while True:
        if redraw:
            render_board(board)
        try:
            line = click.prompt(
                "taskdesk",
                prompt_suffix="> ",
                default="",
                show_default=False,
            )
        except click.Abort:
            break

        line = line.strip()
        if not line:
            redraw = False
            continue

        cmd, _, arg = line.partition(" ")
        cmd = cmd.lower()
        if cmd in ("exit", "quit"):
            break

        try:
            redraw = _dispatch(board, cmd, arg.strip())
        except TaskDeskError as exc:
            glog.failure(exc)
            redraw = False

    glog.console.print("Goodbye.")
