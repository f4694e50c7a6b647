"""Rich-powered exam session for taking a quiz in the terminal.

The loop renders one question at a time, reads commands from an injectable
input provider, and returns an :class:`ExamOutcome`. Selection state lives in
:class:`ExamSession` so it can be driven and tested without a console. A
countdown (when the quiz has a timer) submits the attempt automatically
through the same path as a manual submit.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Literal, Optional

from rich import box
from rich.console import Console, Group
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .evaluator import classify_option, format_score, grade, question_outcomes
from .hints import GREETING
from .models import AnswerState, Question, QuestionType, Quiz, Result
from .timer import Countdown, format_remaining

InputProvider = Callable[[], str]
HintProvider = Callable[[Question, str], str]
ExitAction = Literal["submitted", "expired", "quit"]

__all__ = [
    "ExamOutcome",
    "ExamSession",
    "SessionCommand",
    "parse_session_command",
    "render_result",
    "run_exam_session",
]


@dataclass(frozen=True)
class SessionCommand:
    """Normalized user command parsed from console input."""

    type: Literal["select", "next", "prev", "submit", "quit", "hint"]
    option: Optional[int] = None
    text: str = ""


@dataclass(frozen=True)
class ExamOutcome:
    exit_action: ExitAction
    result: Optional[Result]


@dataclass
class ExamSession:
    """Mutable state of one attempt: the cursor and the growing AnswerState."""

    quiz: Quiz
    index: int = 0
    selections: dict[int, set[int]] = field(default_factory=dict)
    result: Optional[Result] = None

    @property
    def current(self) -> Question:
        return self.quiz.questions[self.index]

    @property
    def submitted(self) -> bool:
        return self.result is not None

    def answered_count(self) -> int:
        return sum(1 for picks in self.selections.values() if picks)

    def select(self, option_index: int) -> bool:
        """Select (single-select) or toggle (multi-select) an option."""

        if self.submitted:
            return False
        question = self.current
        if not 0 <= option_index < len(question.options):
            return False
        if question.type is QuestionType.SINGLE_SELECT:
            self.selections[self.index] = {option_index}
        else:
            picks = self.selections.setdefault(self.index, set())
            picks.symmetric_difference_update({option_index})
        return True

    def selected_for(self, index: Optional[int] = None) -> frozenset[int]:
        position = self.index if index is None else index
        return frozenset(self.selections.get(position, ()))

    def next(self) -> None:
        if self.index + 1 < self.quiz.question_count:
            self.index += 1

    def previous(self) -> None:
        if self.index > 0:
            self.index -= 1

    def answer_state(self) -> AnswerState:
        return {
            index: frozenset(picks)
            for index, picks in sorted(self.selections.items())
            if picks
        }

    def submit(self) -> Result:
        """Grade the attempt. Later calls return the first result unchanged."""

        if self.result is None:
            self.result = grade(self.quiz, self.answer_state())
        return self.result


def parse_session_command(raw: Optional[str]) -> Optional[SessionCommand]:
    if raw is None:
        return None
    text = raw.strip()
    if not text:
        return None
    lowered = text.lower()
    if lowered in {"n", "next"}:
        return SessionCommand("next")
    if lowered in {"p", "prev", "previous"}:
        return SessionCommand("prev")
    if lowered in {"s", "submit"}:
        return SessionCommand("submit")
    if lowered in {"q", "quit", "exit"}:
        return SessionCommand("quit")
    if lowered == "h" or lowered.startswith(("h ", "hint")):
        _, _, query = text.partition(" ")
        return SessionCommand("hint", text=query.strip())
    if text.isdigit() and int(text) > 0:
        return SessionCommand("select", option=int(text) - 1)
    return None


def run_exam_session(
    quiz: Quiz,
    console: Console,
    input_provider: InputProvider,
    *,
    hint_provider: Optional[HintProvider] = None,
    clock: Callable[[], float] = time.monotonic,
) -> ExamOutcome:
    """Run one attempt of ``quiz`` and return how it ended."""

    session = ExamSession(quiz)
    expired: list[bool] = []
    countdown: Optional[Countdown] = None
    if quiz.settings.timer_minutes > 0:
        countdown = Countdown(
            quiz.settings.timer_minutes * 60,
            lambda: expired.append(True),
            clock=clock,
        )
    assistant = hint_provider if quiz.settings.assistant_enabled else None

    exit_action: ExitAction = "quit"
    try:
        while True:
            if countdown is not None and countdown.tick():
                break
            _render_question(console, session, countdown, assistant is not None)
            try:
                raw = input_provider()
            except (EOFError, KeyboardInterrupt, StopIteration):
                console.print("\n[bold yellow]Session interrupted.[/]")
                break
            # Input that arrives after the deadline does not count.
            if countdown is not None and countdown.tick():
                break
            command = parse_session_command(raw)
            if command is None:
                console.print("[red]Unrecognized command. Try again.[/]")
                continue
            action = _apply_command(command, session, console, assistant)
            if action is not None:
                exit_action = action
                break
    finally:
        if countdown is not None:
            countdown.cancel()

    if expired:
        console.print("\n[bold yellow]Time is up. Submitting your answers.[/]")
        exit_action = "expired"
    if exit_action == "quit":
        console.print("[bold yellow]Ending session without submission.[/]")
        return ExamOutcome("quit", None)

    result = session.submit()
    render_result(console, quiz, result)
    return ExamOutcome(exit_action, result)


def _apply_command(
    command: SessionCommand,
    session: ExamSession,
    console: Console,
    assistant: Optional[HintProvider],
) -> Optional[ExitAction]:
    if command.type == "select" and command.option is not None:
        if not session.select(command.option):
            console.print(
                f"[red]{command.option + 1} is not an option for this question.[/]"
            )
        return None
    if command.type == "next":
        session.next()
        return None
    if command.type == "prev":
        session.previous()
        return None
    if command.type == "hint":
        _show_hint(command.text, session, console, assistant)
        return None
    if command.type == "submit":
        return "submitted"
    return "quit"


def _show_hint(
    query: str,
    session: ExamSession,
    console: Console,
    assistant: Optional[HintProvider],
) -> None:
    if assistant is None:
        console.print("[yellow]The assistant is disabled for this quiz.[/]")
        return
    if not query:
        console.print(Panel(GREETING, title="AI Assistant", border_style="cyan"))
        return
    console.print(
        Panel(
            Markdown(assistant(session.current, query)),
            title="AI Assistant",
            border_style="cyan",
        )
    )


def _render_question(
    console: Console,
    session: ExamSession,
    countdown: Optional[Countdown],
    assistant_enabled: bool,
) -> None:
    question = session.current
    total = session.quiz.question_count
    header = Text.assemble(
        (f"Question {session.index + 1}", "bold cyan"),
        (f" / {total}", "dim"),
    )
    if countdown is not None:
        header.append(f"  {format_remaining(countdown.remaining())}", "bold")
    console.print()
    console.rule(header)
    console.print(Text(question.type.label, style="dim"))
    console.print(Markdown(question.text))

    table = Table(show_header=False, box=box.SIMPLE, expand=True)
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Option")
    selected = session.selected_for()
    radio = question.type is QuestionType.SINGLE_SELECT
    for position, option in enumerate(question.options):
        chosen = position in selected
        if radio:
            indicator = "(•)" if chosen else "( )"
        else:
            indicator = "[x]" if chosen else "[ ]"
        label = Text(f"{indicator} ")
        label.append(option.text, style="bold green" if chosen else "")
        table.add_row(str(position + 1), label)
    console.print(table)

    commands = "number (choose), n (next), p (prev), submit, quit"
    if assistant_enabled:
        commands += ", hint <question>"
    console.print(
        Text(
            f"Answered {session.answered_count()}/{total} | Commands: {commands}",
            style="dim",
        )
    )


def render_result(console: Console, quiz: Quiz, result: Result) -> None:
    """Print the graded attempt: score, per-question outcome, explanations."""

    outcomes = question_outcomes(quiz, result.answer_state)
    console.print()
    console.rule(Text(f"Results for: {quiz.title}", style="bold magenta"))
    console.print(
        Text.assemble(
            ("Final Score: ", "bold"),
            (format_score(result.score), "bold cyan"),
            (f"  ({sum(outcomes)}/{quiz.question_count} correct)", "dim"),
        )
    )

    for index, question in enumerate(quiz.questions):
        selected = result.answer_state.get(index, frozenset())
        rows = []
        for position, option in enumerate(question.options):
            mark = classify_option(option.is_correct, position in selected)
            line = Text(f"{mark.marker or ' '} ", style="bold")
            style = ""
            if "correct" in mark.css_classes:
                style = "green"
            elif "incorrect" in mark.css_classes:
                style = "red"
            line.append(option.text, style=style)
            if option.explanation:
                line.append(f"\n    {option.explanation}", style="dim italic")
            rows.append(line)
        border = "green" if outcomes[index] else "red"
        console.print(
            Panel(
                Group(Markdown(question.text), *rows),
                title=f"Question {index + 1}",
                border_style=border,
            )
        )
