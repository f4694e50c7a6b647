"""Read-only results body for a graded attempt."""

from __future__ import annotations

from typing import Optional

from quizforge.quiz.evaluator import classify_option, format_score
from quizforge.quiz.models import Question, Quiz, Result

from .escape import escape
from .render import PlainRenderer, Renderer

__all__ = ["build_results"]


def build_results(
    quiz: Quiz, result: Result, *, renderer: Optional[Renderer] = None
) -> str:
    renderer = renderer or PlainRenderer()
    parts = [
        f"<h1>Results: {escape(quiz.title)}</h1>",
        f'<h2 class="topic">Topic: {escape(quiz.topic)}</h2>',
        '<div id="results-summary"><h2>Final Score: '
        f'<span class="score">{format_score(result.score)}</span></h2></div>',
    ]
    for index, question in enumerate(quiz.questions):
        selected = result.answer_state.get(index, frozenset())
        parts.append(_question_block(index, question, selected, renderer))
    return "\n".join(parts)


def _question_block(
    index: int,
    question: Question,
    selected: frozenset[int],
    renderer: Renderer,
) -> str:
    lines = [
        f'<section class="question" id="q{index}">',
        f'  <div class="question-text"><span class="number">{index + 1}.</span> '
        f"{renderer.render(question.text)}</div>",
        '  <div class="options">',
    ]
    for position, option in enumerate(question.options):
        mark = classify_option(option.is_correct, position in selected)
        classes = " ".join(("option", *mark.css_classes))
        lines.append(
            f'    <div class="{classes}" data-status="{mark.status.value}">'
            f'<span class="marker" aria-hidden="true">{mark.marker}</span>'
            f'<div><span class="option-text">{renderer.render_inline(option.text)}'
            f'</span><div class="explanation visible">'
            f"{renderer.render(option.explanation)}</div></div></div>"
        )
    lines.append("  </div>")
    lines.append("</section>")
    return "\n".join(lines)
