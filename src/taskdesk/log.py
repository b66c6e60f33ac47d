"""Terminal logging for taskdesk via Rich.

Status lines go to stdout, errors to stderr. ``debug`` (and so ``request``)
only prints after ``set_verbose(True)``, which the CLI's ``-v`` flag sets.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

console = Console(highlight=False)
_err_console = Console(highlight=False, stderr=True)

_verbose = False


def set_verbose(enabled: bool) -> None:
    global _verbose
    _verbose = enabled


def info(msg: str) -> None:
    console.print(f"[blue]\\[INFO][/blue] {msg}")


def success(msg: str) -> None:
    console.print(f"[green]\\[OK][/green] {msg}")


def warn(msg: str) -> None:
    console.print(f"[yellow]\\[WARN][/yellow] {msg}")


def error(msg: str) -> None:
    _err_console.print(f"[red]\\[ERROR][/red] {msg}", soft_wrap=True)


def debug(msg: str) -> None:
    if _verbose:
        console.print(f"[dim]\\[DEBUG] {msg}[/dim]", soft_wrap=True)


def request(method: str, url: str, outcome: int | str | None = None) -> None:
    """Trace one HTTP round trip: ``GET <url>`` before, ``GET <url> -> 200`` after."""
    line = f"{method} {url}" if outcome is None else f"{method} {url} -> {outcome}"
    debug(escape(line))


def failure_text(exc: BaseException, action: str = "") -> str:
    """``"<action> failed: <error>"``, or the bare error text without an action."""
    return f"{action} failed: {exc}" if action else str(exc)


def failure(exc: BaseException, action: str = "") -> str:
    """Print a failed action on stderr and return the plain message.

    The error text comes from the server or the user, so it is escaped
    before Rich sees it.
    """
    text = failure_text(exc, action)
    error(escape(text))
    return text
