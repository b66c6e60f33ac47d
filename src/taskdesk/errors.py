"""Error taxonomy shared by the store client, view-model and CLI."""

from __future__ import annotations

_BODY_EXCERPT_LEN = 200


class TaskDeskError(RuntimeError):
    """Base class for every failure surfaced to the user."""


class NetworkError(TaskDeskError):
    """The request could not be sent or no response was received."""

    def __init__(self, method: str, url: str, reason: str) -> None:
        self.method = method
        self.url = url
        self.reason = reason
        super().__init__(f"{method} {url} failed: {reason}")


class RemoteError(TaskDeskError):
    """The remote answered with a non-success status or an unusable body.

    ``status`` is ``None`` when the response arrived with a 2xx status but
    could not be interpreted (bad JSON, malformed task record).
    """

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        method: str = "",
        url: str = "",
        body: str = "",
    ) -> None:
        self.status = status
        self.method = method
        self.url = url
        self.body = excerpt(body)
        super().__init__(message)

    @property
    def is_not_found(self) -> bool:
        return self.status == 404


class ValidationError(TaskDeskError):
    """Form input that must not reach the remote store."""

    def __init__(self, message: str, fields: list[str] | None = None) -> None:
        self.fields = list(fields or [])
        super().__init__(message)


def excerpt(text: str, limit: int = _BODY_EXCERPT_LEN) -> str:
    """Collapse whitespace and clip *text* for one-line error messages."""
    single_line = " ".join((text or "").split())
    if len(single_line) > limit:
        return single_line[:limit].rstrip() + "..."
    return single_line
