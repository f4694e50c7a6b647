"""``quizforge export``: write standalone HTML artifacts for saved quizzes."""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

from quizforge.config import ConfigOverrides, QuizforgeConfigError
from quizforge.quiz.evaluator import format_score, grade
from quizforge.quiz.models import AnswerState, Quiz
from quizforge.runtime import Runtime, add_common_arguments, bootstrap
from quizforge.settings.preferences import Preferences

from .exporter import export_results, export_template
from .palette import PALETTES
from .render import build_renderer


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quizforge export",
        description=(
            "Export a saved quiz as a self-contained HTML file that works "
            "offline."
        ),
    )
    sub = parser.add_subparsers(dest="kind", required=True)

    sp_template = sub.add_parser(
        "template",
        help="Interactive copy that grades itself in the browser.",
    )
    _add_export_arguments(sp_template)

    sp_results = sub.add_parser(
        "results",
        help="Read-only copy showing a graded attempt.",
    )
    _add_export_arguments(sp_results)
    sp_results.add_argument(
        "--answer",
        action="append",
        default=[],
        metavar="Q=O[,O...]",
        help=(
            "Selected option indices for a question, zero-based "
            "(e.g. --answer 0=1 --answer 1=0,2). Repeat per question."
        ),
    )
    return parser


def _add_export_arguments(parser: argparse.ArgumentParser) -> None:
    add_common_arguments(parser)
    parser.add_argument("quiz_id", help="Id shown by `quizforge quiz list`.")
    parser.add_argument(
        "--output-dir",
        type=Path,
        help="Override the directory the HTML file is written to.",
    )
    parser.add_argument(
        "--rich-text",
        dest="rich_text",
        action="store_true",
        default=None,
        help="Render Markdown and highlight code in quiz text.",
    )
    parser.add_argument(
        "--theme",
        choices=sorted(PALETTES),
        help="Initial theme for the artifact (defaults to your preference).",
    )


def parse_answers(values: Sequence[str], quiz: Quiz) -> AnswerState:
    """Parse ``Q=O[,O...]`` pairs into an AnswerState for ``quiz``."""

    answers: dict[int, frozenset[int]] = {}
    for raw in values:
        question_part, sep, options_part = raw.partition("=")
        if not sep:
            raise ValueError(f"Expected Q=O[,O...], got '{raw}'.")
        try:
            index = int(question_part.strip())
            picks = frozenset(
                int(item) for item in options_part.split(",") if item.strip()
            )
        except ValueError as exc:
            raise ValueError(f"Non-numeric index in '{raw}'.") from exc
        if not 0 <= index < quiz.question_count:
            raise ValueError(
                f"Question index {index} is out of range "
                f"(0-{quiz.question_count - 1})."
            )
        option_count = len(quiz.questions[index].options)
        for pick in picks:
            if not 0 <= pick < option_count:
                raise ValueError(
                    f"Option index {pick} is out of range for question {index}."
                )
        answers[index] = answers.get(index, frozenset()) | picks
    return answers


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    overrides = ConfigOverrides(
        export_dir=args.output_dir, rich_text=args.rich_text
    )
    try:
        runtime = bootstrap(args, overrides=overrides)
    except QuizforgeConfigError as exc:
        parser.error(str(exc))

    quiz = runtime.library().get(args.quiz_id)
    if quiz is None:
        sys.stderr.write(
            f"No quiz with id '{args.quiz_id}'. Run `quizforge quiz list`.\n"
        )
        return 1

    preferences = _preferences_for(runtime, args.theme)
    renderer = build_renderer(runtime.config.rich_text)
    output_dir = runtime.config.export_dir

    try:
        if args.kind == "template":
            path = export_template(
                quiz,
                output_dir,
                preferences=preferences,
                renderer=renderer,
                logger=runtime.logger,
            )
        else:
            try:
                answers = parse_answers(args.answer, quiz)
            except ValueError as exc:
                parser.error(str(exc))
            result = grade(quiz, answers)
            path = export_results(
                quiz,
                result,
                output_dir,
                preferences=preferences,
                renderer=renderer,
                logger=runtime.logger,
            )
            sys.stdout.write(f"Score: {format_score(result.score)}\n")
    except OSError as exc:
        runtime.logger.error(
            "Export failed",
            extra={"quiz_id": quiz.id, "path": output_dir, "error": str(exc)},
        )
        sys.stderr.write(f"Could not write export: {exc}\n")
        return 1

    sys.stdout.write(f"Wrote {path}\n")
    return 0


def _preferences_for(runtime: Runtime, theme: Optional[str]) -> Preferences:
    current = runtime.preferences().current
    if theme is None:
        return current
    return replace(current, theme=theme)


if __name__ == "__main__":  # pragma: no cover - module CLI guard
    raise SystemExit(main())
