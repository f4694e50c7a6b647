"""``quizforge quiz``: generate, browse, delete and take quizzes."""

from __future__ import annotations

import argparse
import sys
from datetime import datetime, timezone
from typing import Optional, Sequence

from rich import box
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape as escape_markup
from rich.table import Table

from quizforge.config import ConfigOverrides, QuizforgeConfigError
from quizforge.core.ai import AIClientError, load_client
from quizforge.export.exporter import export_results
from quizforge.export.render import build_renderer
from quizforge.runtime import Runtime, add_common_arguments, bootstrap

from .generator import (
    GENERATION_RETRY_MESSAGE,
    MAX_QUESTIONS,
    MIN_QUESTIONS,
    generate,
)
from .hints import hint
from .models import (
    MAX_TIMER_MINUTES,
    ExamSettings,
    Question,
    QuestionType,
    Quiz,
)
from .session import HintProvider, InputProvider, run_exam_session

_TYPE_CHOICES = {
    "single": QuestionType.SINGLE_SELECT,
    "multi": QuestionType.MULTI_SELECT,
}


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quizforge quiz",
        description="Generate, list, inspect, delete and take quizzes.",
    )
    sub = parser.add_subparsers(dest="action", required=True)

    sp_gen = sub.add_parser(
        "generate", help="Generate a quiz about a topic and save it."
    )
    add_common_arguments(sp_gen)
    sp_gen.add_argument("topic", help="Subject of the quiz.")
    sp_gen.add_argument(
        "--count",
        type=int,
        default=5,
        help=f"Number of questions ({MIN_QUESTIONS}-{MAX_QUESTIONS}).",
    )
    sp_gen.add_argument(
        "--types",
        nargs="+",
        choices=sorted(_TYPE_CHOICES),
        default=sorted(_TYPE_CHOICES),
        help="Question types to include.",
    )
    sp_gen.add_argument(
        "--timer",
        type=int,
        default=10,
        help=f"Exam timer in minutes (0 disables, max {MAX_TIMER_MINUTES}).",
    )
    sp_gen.add_argument(
        "--no-assistant",
        dest="assistant",
        action="store_false",
        help="Disable the hint assistant while taking this quiz.",
    )
    sp_gen.add_argument("--model", help="Override the generation model.")

    sp_list = sub.add_parser("list", help="List saved quizzes.")
    add_common_arguments(sp_list)

    sp_show = sub.add_parser("show", help="Print a saved quiz.")
    add_common_arguments(sp_show)
    sp_show.add_argument("quiz_id")
    sp_show.add_argument(
        "--answers",
        action="store_true",
        help="Mark correct options and include explanations.",
    )

    sp_del = sub.add_parser("delete", help="Delete a saved quiz.")
    add_common_arguments(sp_del)
    sp_del.add_argument("quiz_id")

    sp_take = sub.add_parser("take", help="Take a saved quiz in the terminal.")
    add_common_arguments(sp_take)
    sp_take.add_argument("quiz_id")
    sp_take.add_argument(
        "--export",
        action="store_true",
        help="Write the results artifact after submitting.",
    )
    sp_take.add_argument(
        "--rich-text",
        dest="rich_text",
        action="store_true",
        default=None,
        help="Render Markdown in the exported results.",
    )
    return parser


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    console: Optional[Console] = None,
    input_provider: Optional[InputProvider] = None,
) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    console = console or Console()

    overrides = ConfigOverrides(
        model=getattr(args, "model", None),
        rich_text=getattr(args, "rich_text", None),
    )
    try:
        runtime = bootstrap(args, overrides=overrides)
    except QuizforgeConfigError as exc:
        parser.error(str(exc))
    runtime.logger.debug("quiz CLI invoked", extra={"action": args.action})

    if args.action == "generate":
        return _cmd_generate(args, parser, runtime, console)
    if args.action == "list":
        return _cmd_list(runtime, console)
    if args.action == "show":
        return _cmd_show(args, runtime, console)
    if args.action == "delete":
        return _cmd_delete(args, runtime, console)
    if args.action == "take":
        provider = input_provider or (lambda: console.input("[bold]> [/]"))
        return _cmd_take(args, runtime, console, provider)
    parser.print_help()  # pragma: no cover - argparse enforces choices
    return 2


def _cmd_generate(
    args: argparse.Namespace,
    parser: argparse.ArgumentParser,
    runtime: Runtime,
    console: Console,
) -> int:
    if not args.topic.strip():
        parser.error("topic must not be empty.")
    if not MIN_QUESTIONS <= args.count <= MAX_QUESTIONS:
        parser.error(
            f"--count must be between {MIN_QUESTIONS} and {MAX_QUESTIONS}."
        )
    try:
        settings = ExamSettings(
            timer_minutes=args.timer, assistant_enabled=args.assistant
        )
    except ValueError as exc:
        parser.error(str(exc))

    try:
        client = load_client()
    except AIClientError as exc:
        sys.stderr.write(f"{exc}\n")
        return 1

    ai = runtime.config.ai
    with console.status(f"Generating quiz about {args.topic!r}..."):
        question_set = generate(
            args.topic,
            args.count,
            {_TYPE_CHOICES[name] for name in args.types},
            client=client,
            model=ai.model,
            temperature=ai.temperature,
            max_tokens=ai.max_tokens,
        )
    if question_set is None:
        sys.stderr.write(GENERATION_RETRY_MESSAGE + "\n")
        return 1

    library = runtime.library()
    quiz = library.add(question_set, settings)
    console.print(
        f"Saved [bold]{escape_markup(quiz.title)}[/] "
        f"({quiz.question_count} questions) "
        f"as [cyan]{quiz.id}[/]"
    )
    if not library.last_save_ok:
        console.print(
            f"[yellow]Warning: the library could not be saved. "
            f"See {runtime.log_path}.[/]"
        )
    return 0


def _cmd_list(runtime: Runtime, console: Console) -> int:
    library = runtime.library()
    if not len(library):
        console.print("No quizzes saved yet. Run `quizforge quiz generate`.")
        return 1
    table = Table(box=box.SIMPLE_HEAVY)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title")
    table.add_column("Topic")
    table.add_column("Questions", justify="right")
    table.add_column("Timer", justify="right")
    table.add_column("Created")
    for quiz in library:
        timer = (
            f"{quiz.settings.timer_minutes} min"
            if quiz.settings.timer_minutes
            else "off"
        )
        table.add_row(
            quiz.id,
            escape_markup(quiz.title),
            escape_markup(quiz.topic),
            str(quiz.question_count),
            timer,
            _format_created(quiz.created_at),
        )
    console.print(table)
    return 0


def _cmd_show(
    args: argparse.Namespace, runtime: Runtime, console: Console
) -> int:
    quiz = _lookup(runtime, args.quiz_id)
    if quiz is None:
        return 1
    console.rule(f"[bold]{escape_markup(quiz.title)}[/]")
    console.print(f"Topic: {quiz.topic}", markup=False)
    assistant = "on" if quiz.settings.assistant_enabled else "off"
    timer = quiz.settings.timer_minutes or "off"
    console.print(f"Timer: {timer} | Assistant: {assistant}", style="dim")
    for index, question in enumerate(quiz.questions):
        _print_question(console, index, question, reveal=args.answers)
    return 0


def _cmd_delete(
    args: argparse.Namespace, runtime: Runtime, console: Console
) -> int:
    library = runtime.library()
    if not library.delete(args.quiz_id):
        sys.stderr.write(f"No quiz with id '{args.quiz_id}'.\n")
        return 1
    console.print(f"Deleted quiz {args.quiz_id}", markup=False)
    return 0


def _cmd_take(
    args: argparse.Namespace,
    runtime: Runtime,
    console: Console,
    input_provider: InputProvider,
) -> int:
    quiz = _lookup(runtime, args.quiz_id)
    if quiz is None:
        return 1
    hint_provider = (
        _hint_provider(runtime) if quiz.settings.assistant_enabled else None
    )
    outcome = run_exam_session(
        quiz, console, input_provider, hint_provider=hint_provider
    )
    runtime.logger.info(
        "Exam session finished",
        extra={
            "quiz_id": quiz.id,
            "exit_action": outcome.exit_action,
            "score": outcome.result.score if outcome.result else None,
        },
    )
    if outcome.result is None or not args.export:
        return 0
    try:
        path = export_results(
            quiz,
            outcome.result,
            runtime.config.export_dir,
            preferences=runtime.preferences().current,
            renderer=build_renderer(runtime.config.rich_text),
            logger=runtime.logger,
        )
    except OSError as exc:
        runtime.logger.error(
            "Export failed",
            extra={
                "quiz_id": quiz.id,
                "path": runtime.config.export_dir,
                "error": str(exc),
            },
        )
        sys.stderr.write(f"Could not write export: {exc}\n")
        return 1
    console.print(f"Exported results to {path}", markup=False)
    return 0


def _hint_provider(runtime: Runtime) -> HintProvider:
    try:
        client = load_client()
    except AIClientError as exc:
        runtime.logger.warning(
            "Hint assistant unavailable", extra={"error": str(exc)}
        )
        client = None
    ai = runtime.config.ai

    def provide(question: Question, text: str) -> str:
        return hint(
            question,
            text,
            client=client,
            model=ai.hint_model,
            max_tokens=ai.hint_max_tokens,
        )

    return provide


def _lookup(runtime: Runtime, quiz_id: str) -> Optional[Quiz]:
    quiz = runtime.library().get(quiz_id)
    if quiz is None:
        sys.stderr.write(
            f"No quiz with id '{quiz_id}'. Run `quizforge quiz list`.\n"
        )
    return quiz


def _print_question(
    console: Console, index: int, question: Question, *, reveal: bool
) -> None:
    console.print()
    console.print(
        f"[bold cyan]{index + 1}.[/] [dim]({question.type.label})[/]"
    )
    console.print(Markdown(question.text))
    for position, option in enumerate(question.options):
        marker = "✅" if reveal and option.is_correct else "  "
        console.print(f"  {marker} {position}. {option.text}", markup=False)
        if reveal and option.explanation:
            console.print(
                f"       {option.explanation}", style="dim italic", markup=False
            )


def _format_created(created_at: float) -> str:
    if not created_at:
        return "-"
    stamp = datetime.fromtimestamp(created_at, tz=timezone.utc)
    return stamp.strftime("%Y-%m-%d %H:%M UTC")

