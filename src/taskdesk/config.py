"""Configuration defaults, env vars, and runtime options for TASKDESK."""

from __future__ import annotations

import os
from dataclasses import dataclass


DEFAULT_BASE_URL = "https://todo-app-be-7tgv.onrender.com/tasks/"
DEFAULT_TIMEOUT = 15
DEFAULT_ID_FIELD = "_id"


@dataclass
class Config:
    """Runtime configuration — mirrors the CLI flags."""

    # Remote collection
    base_url: str = ""
    timeout: int = DEFAULT_TIMEOUT
    id_field: str = DEFAULT_ID_FIELD

    # Form behavior
    reset_on_delete: bool = False

    # Misc
    verbose: bool = False

    def __post_init__(self) -> None:
        if not self.base_url:
            self.base_url = os.environ.get("TASKDESK_BASE_URL") or DEFAULT_BASE_URL
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
