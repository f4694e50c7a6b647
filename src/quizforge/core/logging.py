"""JSON-lines logging shared by every quizforge command."""

from __future__ import annotations

import json
import logging
import sys
import tempfile
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

__all__ = [
    "JsonLogFormatter",
    "configure_logger",
]

_FILE_MARKER = "_quizforge_file"
_CONSOLE_MARKER = "_quizforge_console"

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_RECORD_FIELDS = frozenset(
    logging.LogRecord("quizforge", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}


def _json_default(value: Any) -> Any:
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=repr)
    return repr(value)


class JsonLogFormatter(logging.Formatter):
    """One JSON object per line: timestamp, level, logger, message, extras."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": created.isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        extra = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_FIELDS
        }
        if extra:
            entry["extra"] = extra
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            entry["stack"] = record.stack_info
        return json.dumps(entry, ensure_ascii=True, default=_json_default)


def configure_logger(
    name: str,
    *,
    log_dir: Path,
    level: str = "INFO",
    verbose: bool = False,
    max_bytes: int = 2 * 1024 * 1024,
    backup_count: int = 3,
    filename: str | None = None,
) -> tuple[logging.Logger, Path]:
    """Attach a rotating JSON file handler to ``name`` and return it with its path.

    The file lands in ``log_dir`` or, when that is not writable, in a
    ``quizforge-logs`` directory under the system temp dir. A logger that
    already has a quizforge file handler keeps it, so repeated CLI calls in
    one process do not duplicate output. ``verbose`` mirrors every record to
    stderr and drops the file threshold to DEBUG.
    """

    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    handler = _marked(logger, _FILE_MARKER)
    if handler is None:
        handler = _open_file_handler(
            filename or name.rsplit(".", 1)[-1] + ".log",
            log_dir,
            max_bytes=max_bytes,
            backup_count=backup_count,
        )
        handler.setFormatter(JsonLogFormatter())
        setattr(handler, _FILE_MARKER, True)
        logger.addHandler(handler)
    handler.setLevel(logging.DEBUG if verbose else _coerce_level(level))

    _sync_console(logger, enabled=verbose)
    return logger, Path(handler.baseFilename)


def _coerce_level(level: str) -> int:
    numeric = logging.getLevelName(level.strip().upper())
    return numeric if isinstance(numeric, int) else logging.INFO


def _marked(logger: logging.Logger, marker: str) -> Any:
    return next(
        (item for item in logger.handlers if getattr(item, marker, False)), None
    )


def _open_file_handler(
    filename: str, log_dir: Path, *, max_bytes: int, backup_count: int
) -> RotatingFileHandler:
    try:
        return _rotating_handler(log_dir / filename, max_bytes, backup_count)
    except PermissionError:
        fallback = _fallback_log_dir() / filename
        return _rotating_handler(fallback, max_bytes, backup_count)


def _rotating_handler(
    path: Path, max_bytes: int, backup_count: int
) -> RotatingFileHandler:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.touch(mode=0o600, exist_ok=True)
    return RotatingFileHandler(
        path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )


def _sync_console(logger: logging.Logger, *, enabled: bool) -> None:
    console = _marked(logger, _CONSOLE_MARKER)
    if enabled and console is None:
        console = logging.StreamHandler(stream=sys.stderr)
        console.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
        setattr(console, _CONSOLE_MARKER, True)
        logger.addHandler(console)
    elif not enabled and console is not None:
        logger.removeHandler(console)
        console.close()


def _fallback_log_dir() -> Path:
    return Path(tempfile.gettempdir()) / "quizforge-logs"
