"""Core shared helpers for quizforge subcommands."""

from __future__ import annotations

from .ai import AIClientError, chat_completion, load_client, strip_fences
from .logging import JsonLogFormatter, configure_logger
from .store import JsonStore
from .tomlfile import (
    TomlFileError,
    overlay,
    packaged_text,
    read_table,
    write_template,
)
from .workspace import (
    SUBDIRECTORIES,
    WORKSPACE_ENV,
    WorkspaceError,
    WorkspaceLayout,
    ensure_workspace,
)

__all__ = [
    "AIClientError",
    "chat_completion",
    "load_client",
    "strip_fences",
    "JsonLogFormatter",
    "configure_logger",
    "JsonStore",
    "TomlFileError",
    "overlay",
    "packaged_text",
    "read_table",
    "write_template",
    "SUBDIRECTORIES",
    "WORKSPACE_ENV",
    "WorkspaceError",
    "WorkspaceLayout",
    "ensure_workspace",
]
