"""Text renderers used by the body builders.

A renderer turns untrusted question, option and explanation text into a
markup fragment that is safe to embed. :class:`PlainRenderer` only escapes.
:class:`MarkdownRenderer` interprets Markdown with raw HTML disabled and
highlights fenced code with Pygments.
"""

from __future__ import annotations

from typing import Protocol

from markdown_it import MarkdownIt
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import TextLexer, get_lexer_by_name
from pygments.util import ClassNotFound

from .escape import escape

__all__ = [
    "MarkdownRenderer",
    "PlainRenderer",
    "Renderer",
    "build_renderer",
]


class Renderer(Protocol):
    """Formatting capability threaded into the body builders."""

    def render(self, text: str) -> str:
        """Block-level fragment (question text, explanations)."""

    def render_inline(self, text: str) -> str:
        """Inline fragment (option labels)."""

    def stylesheet(self) -> str:
        """Extra CSS the rendered fragments need, or an empty string."""


class PlainRenderer:
    def render(self, text: str) -> str:
        return escape(text)

    def render_inline(self, text: str) -> str:
        return escape(text)

    def stylesheet(self) -> str:
        return ""


class MarkdownRenderer:
    """CommonMark renderer with escaped raw HTML and Pygments code blocks."""

    def __init__(self, *, style: str = "default") -> None:
        self._formatter = HtmlFormatter(style=style, nowrap=True)
        self._css_formatter = HtmlFormatter(style=style)
        self._md = MarkdownIt(
            "commonmark",
            options_update={"html": False, "highlight": self._highlight},
        )

    def render(self, text: str) -> str:
        return self._md.render(text or "").strip()

    def render_inline(self, text: str) -> str:
        return self._md.renderInline(text or "").strip()

    def stylesheet(self) -> str:
        return self._css_formatter.get_style_defs(".highlight")

    def _highlight(self, code: str, lang: str, attrs: str) -> str:
        try:
            lexer = get_lexer_by_name(lang) if lang else TextLexer()
        except ClassNotFound:
            lexer = TextLexer()
        spans = highlight(code, lexer, self._formatter)
        return f'<pre class="highlight"><code>{spans}</code></pre>\n'


def build_renderer(rich_text: bool) -> Renderer:
    return MarkdownRenderer() if rich_text else PlainRenderer()
