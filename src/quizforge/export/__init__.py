"""Standalone HTML export of quizzes and graded attempts."""

from .document import ARTIFACT_THEME_KEY, synthesize
from .escape import escape, escape_json_for_script
from .exporter import (
    export_results,
    export_template,
    render_results_document,
    render_template_document,
    slugify,
)
from .palette import DEFAULT_THEME, PALETTES, ThemePalette, palette_css
from .render import MarkdownRenderer, PlainRenderer, Renderer, build_renderer
from .results_body import build_results
from .template_body import TemplateBody, build_template

__all__ = [
    "ARTIFACT_THEME_KEY",
    "DEFAULT_THEME",
    "MarkdownRenderer",
    "PALETTES",
    "PlainRenderer",
    "Renderer",
    "TemplateBody",
    "ThemePalette",
    "build_renderer",
    "build_results",
    "build_template",
    "escape",
    "escape_json_for_script",
    "export_results",
    "export_template",
    "palette_css",
    "render_results_document",
    "render_template_document",
    "slugify",
    "synthesize",
]
