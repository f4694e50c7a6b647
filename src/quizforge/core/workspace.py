"""The quizforge data home: config, logs, quiz library and HTML exports."""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

WORKSPACE_ENV = "QUIZFORGE_DATA_HOME"
DEFAULT_WORKSPACE = Path.home() / ".quizforge-data"

SUBDIRECTORIES = ("config", "logs", "library", "exports")


class WorkspaceError(RuntimeError):
    """Raised when the data home cannot be used."""


@dataclass(frozen=True)
class WorkspaceLayout:
    """A resolved data home.

    ``created`` records, for ``"home"`` and every subdirectory, whether this
    call made the directory.
    """

    home: Path
    created: Mapping[str, bool]

    @property
    def directories(self) -> Mapping[str, Path]:
        return MappingProxyType({name: self.home / name for name in SUBDIRECTORIES})

    def path_for(self, name: str) -> Path:
        if name not in SUBDIRECTORIES:
            raise KeyError(f"Unknown workspace directory '{name}'.")
        return self.home / name

    def items(self) -> tuple[tuple[str, Path], ...]:
        return tuple((name, self.home / name) for name in SUBDIRECTORIES)


def resolve_home(
    env: Mapping[str, str], path: Path | None = None
) -> tuple[Path, bool]:
    """Pick the data home; the flag tells whether the user chose it."""

    if path is not None:
        return path.expanduser().resolve(), True
    from_env = (env.get(WORKSPACE_ENV) or "").strip()
    if from_env:
        return Path(from_env).expanduser().resolve(), True
    return DEFAULT_WORKSPACE.expanduser().resolve(), False


def ensure_workspace(
    *,
    env: Mapping[str, str] | None = None,
    path: Path | None = None,
    create: bool = True,
) -> WorkspaceLayout:
    """Resolve the data home and, unless ``create`` is off, build it.

    Only the default home falls back to a temp-dir location when it cannot
    be written; a home named by ``path`` or the environment fails instead.
    """

    home, chosen = resolve_home(os.environ if env is None else env, path)
    if not create:
        _check_layout(home)
        untouched = {name: False for name in ("home", *SUBDIRECTORIES)}
        return WorkspaceLayout(home=home, created=MappingProxyType(untouched))

    try:
        return _build_layout(home)
    except PermissionError as exc:
        if chosen:
            raise WorkspaceError(f"Unable to prepare workspace at {home}") from exc

    fallback = _fallback_base()
    try:
        return _build_layout(fallback)
    except PermissionError as exc:
        raise WorkspaceError(
            f"Unable to prepare workspace at {home} or {fallback}"
        ) from exc


def _fallback_base() -> Path:
    return Path(tempfile.gettempdir()) / "quizforge-data"


def _build_layout(home: Path) -> WorkspaceLayout:
    created = {"home": _ensure_dir(home)}
    for name in SUBDIRECTORIES:
        created[name] = _ensure_dir(home / name)
    return WorkspaceLayout(home=home, created=MappingProxyType(created))


def _check_layout(home: Path) -> None:
    for candidate in (home, *(home / name for name in SUBDIRECTORIES)):
        if candidate.exists() and not candidate.is_dir():
            raise WorkspaceError(f"Expected a directory at {candidate}")


def _ensure_dir(path: Path) -> bool:
    if path.is_dir():
        return False
    if path.exists():
        raise WorkspaceError(f"Expected a directory at {path}")
    path.mkdir(parents=True)
    try:
        path.chmod(0o700)
    except OSError:
        pass
    return True
