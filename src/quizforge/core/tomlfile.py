"""Reading, layering and seeding the quizforge TOML file."""

from __future__ import annotations

import copy
import tomllib
from importlib import resources
from pathlib import Path
from typing import Any, Mapping

__all__ = [
    "TomlFileError",
    "read_table",
    "overlay",
    "packaged_text",
    "write_template",
]


class TomlFileError(RuntimeError):
    """Raised when a TOML file cannot be read, layered or written."""


def read_table(path: Path) -> dict[str, Any]:
    try:
        raw = path.read_bytes()
    except FileNotFoundError as exc:
        raise TomlFileError(f"Config file not found: {path}") from exc
    try:
        return tomllib.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
        raise TomlFileError(f"Failed to parse {path.name}: {exc}") from exc


def overlay(
    defaults: Mapping[str, Any],
    values: Mapping[str, Any],
    *,
    section: str = "",
) -> dict[str, Any]:
    """Return a copy of ``defaults`` with ``values`` laid over it.

    Only keys already present in ``defaults`` are accepted, and a key that
    holds a table in ``defaults`` must hold a table in ``values`` too. Both
    rules report the dotted key so the user can find the offending line.
    """

    result = copy.deepcopy(dict(defaults))
    for key, value in values.items():
        dotted = f"{section}.{key}" if section else key
        if key not in result:
            raise TomlFileError(f"Unknown configuration key '{dotted}'.")
        if isinstance(result[key], Mapping):
            if not isinstance(value, Mapping):
                kind = type(value).__name__
                raise TomlFileError(f"Expected table for '{dotted}', found {kind}.")
            result[key] = overlay(result[key], value, section=dotted)
        else:
            result[key] = value
    return result


def packaged_text(package: str, filename: str) -> str:
    try:
        return resources.files(package).joinpath(filename).read_text(
            encoding="utf-8"
        )
    except (FileNotFoundError, ModuleNotFoundError) as exc:
        raise TomlFileError(
            f"Packaged file '{filename}' missing from {package}."
        ) from exc


def write_template(path: Path, text: str, *, overwrite: bool = False) -> Path:
    """Seed ``path`` with ``text``; refuses to clobber unless ``overwrite``."""

    if path.exists() and not overwrite:
        raise TomlFileError(f"Config already exists: {path}")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    try:
        path.chmod(0o600)
    except OSError:  # pragma: no cover - filesystem dependent
        pass
    return path
