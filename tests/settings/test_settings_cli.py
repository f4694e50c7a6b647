from __future__ import annotations

import json

import pytest
from rich.console import Console

from quizforge.settings import cli as settings_cli


def _console() -> Console:
    return Console(record=True, width=100, color_system=None)


def _stored(tmp_path) -> dict:
    path = tmp_path / "qf-home" / "config" / "preferences.json"
    return json.loads(path.read_text(encoding="utf-8"))


def test_show_defaults() -> None:
    console = _console()

    assert settings_cli.main(["show"], console=console) == 0

    text = console.export_text()
    assert "Forest" in text
    assert "16px" in text
    assert "sans-serif" in text
    assert "off" in text


def test_set_persists(tmp_path) -> None:
    console = _console()

    assert settings_cli.main(["set", "font-size", "20"], console=console) == 0

    assert "20px" in console.export_text()
    assert _stored(tmp_path)["fontSize"] == 20


def test_set_boolean(tmp_path) -> None:
    assert settings_cli.main(["set", "high-contrast", "on"], console=_console()) == 0

    assert _stored(tmp_path)["highContrast"] is True


def test_reset(tmp_path) -> None:
    settings_cli.main(["set", "theme", "light"], console=_console())
    console = _console()

    assert settings_cli.main(["reset"], console=console) == 0

    assert _stored(tmp_path)["theme"] == "forest"
    assert "Forest" in console.export_text()


@pytest.mark.parametrize(
    "argv",
    [
        ["set", "theme", "neon"],
        ["set", "font-size", "30"],
        ["set", "volume", "11"],
    ],
)
def test_set_invalid_exits(argv, capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        settings_cli.main(argv, console=_console())

    assert exc.value.code == 2
    assert "error:" in capsys.readouterr().err


def test_save_failure_warns(tmp_path, capsys) -> None:
    home = tmp_path / "qf-home"
    (home / "config").mkdir(parents=True)
    (home / "config" / "preferences.json").mkdir()

    code = settings_cli.main(["set", "theme", "light"], console=_console())

    assert code == 1
    assert "could not be saved" in capsys.readouterr().err
