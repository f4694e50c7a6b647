"""Interactive template body: unanswered questions plus the grading data island."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

from quizforge.quiz.models import Question, QuestionType, Quiz

from .escape import escape
from .render import PlainRenderer, Renderer

__all__ = ["TemplateBody", "build_template", "question_data"]


@dataclass(frozen=True)
class TemplateBody:
    body: str
    data: List[dict[str, Any]]


def question_data(quiz: Quiz) -> List[dict[str, Any]]:
    """Grading data index-aligned with the questions; never the option text."""

    return [
        {
            "questionType": question.type.value,
            "options": [
                {"isCorrect": option.is_correct, "explanation": option.explanation}
                for option in question.options
            ],
        }
        for question in quiz.questions
    ]


def build_template(
    quiz: Quiz, *, renderer: Optional[Renderer] = None
) -> TemplateBody:
    renderer = renderer or PlainRenderer()
    parts = [
        f"<h1>{escape(quiz.title)}</h1>",
        f'<h2 class="topic">Topic: {escape(quiz.topic)}</h2>',
    ]
    for index, question in enumerate(quiz.questions):
        parts.append(_question_block(index, question, renderer))
    parts.append(
        '<div id="results-summary" class="hidden"></div>\n'
        '<div class="actions">\n'
        '  <button type="button" id="check-answers-btn" class="button">'
        "Check Answers</button>\n"
        '  <button type="button" id="reset-btn" class="button secondary hidden">'
        "Reset Quiz</button>\n"
        "</div>"
    )
    return TemplateBody(body="\n".join(parts), data=question_data(quiz))


def _question_block(index: int, question: Question, renderer: Renderer) -> str:
    kind = "radio" if question.type is QuestionType.SINGLE_SELECT else "checkbox"
    lines = [
        f'<section class="question" id="q{index}" '
        f'data-question-type="{question.type.value}">',
        f'  <div class="question-text"><span class="number">{index + 1}.</span> '
        f"{renderer.render(question.text)}</div>",
        '  <div class="options">',
    ]
    for position, option in enumerate(question.options):
        lines.append(
            '    <label class="option">'
            f'<input type="{kind}" name="q{index}" value="{position}">'
            '<span class="marker" aria-hidden="true"></span>'
            f'<div><span class="option-text">{renderer.render_inline(option.text)}'
            f'</span><div class="explanation">{renderer.render(option.explanation)}'
            "</div></div></label>"
        )
    lines.append("  </div>")
    lines.append("</section>")
    return "\n".join(lines)
