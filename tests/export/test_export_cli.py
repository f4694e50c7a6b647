from __future__ import annotations

from pathlib import Path

import pytest

from fixtures import make_quiz
from quizforge.core.store import JsonStore
from quizforge.export import cli as export_cli
from quizforge.export.cli import parse_answers

QUIZ_ID = "20240101T000000000000Z"


@pytest.fixture
def seeded(tmp_path: Path) -> Path:
    store = JsonStore(tmp_path / "qf-home" / "library")
    store.save("library", [make_quiz().to_dict()])
    return tmp_path / "qf-home"


def test_parse_answers(quiz) -> None:
    answers = parse_answers(["0=1", "1=0,2", "1=3"], quiz)

    assert answers == {0: frozenset({1}), 1: frozenset({0, 2, 3})}


@pytest.mark.parametrize(
    "value, message",
    [
        ("01", "Expected Q=O"),
        ("a=1", "Non-numeric"),
        ("9=0", "Question index 9"),
        ("0=5", "Option index 5"),
    ],
)
def test_parse_answers_rejects(quiz, value, message) -> None:
    with pytest.raises(ValueError, match=message):
        parse_answers([value], quiz)


def test_export_template_command(seeded, capsys) -> None:
    code = export_cli.main(["template", QUIZ_ID])

    out = capsys.readouterr().out
    assert code == 0
    path = seeded.resolve() / "exports" / "python_basics_template.html"
    assert f"Wrote {path}" in out
    assert path.is_file()


def test_export_template_with_theme_and_dir(seeded, tmp_path, capsys) -> None:
    target = tmp_path / "custom"

    code = export_cli.main(
        ["template", QUIZ_ID, "--output-dir", str(target), "--theme", "light"]
    )

    assert code == 0
    document = (target / "python_basics_template.html").read_text("utf-8")
    assert 'data-theme="light"' in document


def test_export_uses_saved_preferences(seeded) -> None:
    JsonStore(seeded / "config").save(
        "preferences", {"theme": "dark-blue", "highContrast": True}
    )

    assert export_cli.main(["template", QUIZ_ID]) == 0

    document = (seeded / "exports" / "python_basics_template.html").read_text(
        "utf-8"
    )
    assert 'data-theme="dark-blue"' in document
    assert 'data-contrast="high"' in document


def test_export_results_command(seeded, capsys) -> None:
    code = export_cli.main(
        ["results", QUIZ_ID, "--answer", "0=1", "--answer", "1=0,2"]
    )

    out = capsys.readouterr().out
    assert code == 0
    assert "Score: 50%" in out
    document = (seeded / "exports" / "python_basics_results.html").read_text(
        "utf-8"
    )
    assert 'data-status="correct-selected"' in document


def test_export_results_bad_answer_exits(seeded) -> None:
    with pytest.raises(SystemExit) as exc:
        export_cli.main(["results", QUIZ_ID, "--answer", "7=0"])
    assert exc.value.code == 2


def test_export_rich_text_flag(seeded) -> None:
    assert export_cli.main(["template", QUIZ_ID, "--rich-text"]) == 0

    document = (seeded / "exports" / "python_basics_template.html").read_text(
        "utf-8"
    )
    assert ".highlight" in document


def test_export_unknown_quiz(capsys) -> None:
    assert export_cli.main(["template", "missing"]) == 1
    assert "No quiz with id 'missing'" in capsys.readouterr().err


def test_export_write_failure(seeded, tmp_path, capsys) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("file", encoding="utf-8")

    code = export_cli.main(["template", QUIZ_ID, "--output-dir", str(blocker)])

    assert code == 1
    assert "Could not write export" in capsys.readouterr().err
