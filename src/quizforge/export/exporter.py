"""Write template and results artifacts for a quiz to disk."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from quizforge.quiz.models import Quiz, Result

from .document import synthesize
from .render import PlainRenderer, Renderer
from .results_body import build_results
from .template_body import build_template

if TYPE_CHECKING:
    from quizforge.settings.preferences import Preferences

__all__ = [
    "export_results",
    "export_template",
    "render_results_document",
    "render_template_document",
    "results_filename",
    "slugify",
    "template_filename",
]

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Lowercase ``text`` and collapse each non-alphanumeric run to ``_``."""

    return _NON_ALNUM_RE.sub("_", text.lower())


def template_filename(quiz: Quiz) -> str:
    return f"{slugify(quiz.topic)}_template.html"


def results_filename(quiz: Quiz) -> str:
    return f"{slugify(quiz.topic)}_results.html"


def render_template_document(
    quiz: Quiz,
    *,
    preferences: Preferences,
    renderer: Optional[Renderer] = None,
) -> str:
    renderer = renderer or PlainRenderer()
    template = build_template(quiz, renderer=renderer)
    return synthesize(
        f"{quiz.title} - Template",
        template.body,
        template.data,
        preferences=preferences,
        extra_css=renderer.stylesheet(),
    )


def render_results_document(
    quiz: Quiz,
    result: Result,
    *,
    preferences: Preferences,
    renderer: Optional[Renderer] = None,
) -> str:
    renderer = renderer or PlainRenderer()
    return synthesize(
        f"{quiz.title} - Results",
        build_results(quiz, result, renderer=renderer),
        preferences=preferences,
        extra_css=renderer.stylesheet(),
    )


def export_template(
    quiz: Quiz,
    output_dir: Path,
    *,
    preferences: Preferences,
    renderer: Optional[Renderer] = None,
    logger: Optional[logging.Logger] = None,
) -> Path:
    """Write the interactive template artifact and return its path."""

    document = render_template_document(
        quiz, preferences=preferences, renderer=renderer
    )
    return _write(output_dir / template_filename(quiz), document, quiz, logger)


def export_results(
    quiz: Quiz,
    result: Result,
    output_dir: Path,
    *,
    preferences: Preferences,
    renderer: Optional[Renderer] = None,
    logger: Optional[logging.Logger] = None,
) -> Path:
    """Write the read-only results artifact and return its path."""

    document = render_results_document(
        quiz, result, preferences=preferences, renderer=renderer
    )
    return _write(output_dir / results_filename(quiz), document, quiz, logger)


def _write(
    path: Path, document: str, quiz: Quiz, logger: Optional[logging.Logger]
) -> Path:
    log = logger or logging.getLogger(__name__)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(document, encoding="utf-8")
    log.info(
        "Exported quiz artifact",
        extra={"quiz_id": quiz.id, "path": path, "bytes": len(document)},
    )
    return path
