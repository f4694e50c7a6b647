from __future__ import annotations

from pathlib import Path

import pytest

from quizforge.core import workspace
from quizforge.core.workspace import SUBDIRECTORIES, WorkspaceError


def test_fresh_home_reports_everything_created(tmp_path):
    home = tmp_path / "data"

    layout = workspace.ensure_workspace(path=home)

    assert layout.home == home.resolve()
    assert [name for name, _ in layout.items()] == list(SUBDIRECTORIES)
    assert all((home / name).is_dir() for name in SUBDIRECTORIES)
    assert set(layout.created) == {"home", *SUBDIRECTORIES}
    assert all(layout.created.values())


def test_second_run_creates_nothing(tmp_path):
    workspace.ensure_workspace(path=tmp_path / "again")

    layout = workspace.ensure_workspace(path=tmp_path / "again")

    assert not any(layout.created.values())


def test_partial_home_only_fills_gaps(tmp_path):
    home = tmp_path / "partial"
    (home / "library").mkdir(parents=True)

    layout = workspace.ensure_workspace(path=home)

    assert layout.created["home"] is False
    assert layout.created["library"] is False
    assert layout.created["exports"] is True


@pytest.mark.parametrize(
    "env, explicit, expected, chosen",
    [
        ({}, None, workspace.DEFAULT_WORKSPACE, False),
        ({workspace.WORKSPACE_ENV: "  "}, None, workspace.DEFAULT_WORKSPACE, False),
        ({workspace.WORKSPACE_ENV: "/srv/qf"}, None, Path("/srv/qf"), True),
        ({workspace.WORKSPACE_ENV: "/srv/qf"}, Path("/opt/qf"), Path("/opt/qf"), True),
    ],
)
def test_resolve_home_precedence(env, explicit, expected, chosen):
    home, was_chosen = workspace.resolve_home(env, explicit)

    assert home == expected.expanduser().resolve()
    assert was_chosen is chosen


def test_environment_variable_is_honoured(tmp_path, monkeypatch):
    monkeypatch.setenv(workspace.WORKSPACE_ENV, str(tmp_path / "from-env"))

    layout = workspace.ensure_workspace()

    assert layout.home == (tmp_path / "from-env").resolve()
    assert layout.path_for("logs").is_dir()


def test_create_false_touches_nothing(tmp_path):
    home = tmp_path / "later"

    layout = workspace.ensure_workspace(path=home, create=False)

    assert not home.exists()
    assert not any(layout.created.values())
    assert layout.directories["exports"] == home.resolve() / "exports"


def test_create_false_still_rejects_files(tmp_path):
    home = tmp_path / "ws"
    home.mkdir()
    (home / "config").write_text("oops", encoding="utf-8")

    with pytest.raises(WorkspaceError, match="config"):
        workspace.ensure_workspace(path=home, create=False)


def test_home_that_is_a_file_is_rejected(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")

    with pytest.raises(WorkspaceError, match="Expected a directory"):
        workspace.ensure_workspace(path=blocker)


def test_path_for_rejects_unknown_names(tmp_path):
    layout = workspace.ensure_workspace(path=tmp_path / "ws", create=False)

    assert layout.path_for("library") == layout.home / "library"
    with pytest.raises(KeyError, match="attachments"):
        layout.path_for("attachments")


def test_default_home_falls_back_to_tempdir(tmp_path, monkeypatch):
    spare = tmp_path / "spare"
    monkeypatch.setattr(workspace, "_fallback_base", lambda: spare)
    default = workspace.DEFAULT_WORKSPACE.expanduser().resolve()
    original = workspace._ensure_dir

    def guarded(path: Path) -> bool:
        if path == default:
            raise PermissionError("read-only home")
        return original(path)

    monkeypatch.setattr(workspace, "_ensure_dir", guarded)

    layout = workspace.ensure_workspace(env={})

    assert layout.home == spare
    assert layout.path_for("config").is_dir()


def test_chosen_home_never_falls_back(tmp_path, monkeypatch):
    def refuse(path: Path) -> bool:
        raise PermissionError("read-only")

    monkeypatch.setattr(workspace, "_ensure_dir", refuse)

    with pytest.raises(WorkspaceError, match="Unable to prepare"):
        workspace.ensure_workspace(path=tmp_path / "chosen")
