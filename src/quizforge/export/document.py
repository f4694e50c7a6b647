"""Assemble a standalone HTML document around a rendered body.

The document inlines everything it needs (palette variables, layout CSS,
optional highlight CSS, the grading data island and the behavior script) so
it opens from disk with no server and no network. Identical inputs produce
byte-identical output.
"""

from __future__ import annotations

from functools import lru_cache
from importlib import resources
from typing import TYPE_CHECKING, Any, Optional

from jinja2 import Environment, PackageLoader, Template
from markupsafe import Markup

from .escape import escape, escape_json_for_script
from .palette import PALETTES, palette_css

if TYPE_CHECKING:
    from quizforge.settings.preferences import Preferences

__all__ = ["ARTIFACT_THEME_KEY", "load_resource", "synthesize"]

# Must match THEME_KEY in resources/behavior.js.
ARTIFACT_THEME_KEY = "quizforge.artifact.theme"

_RESOURCE_PACKAGE = "quizforge.export"


@lru_cache(maxsize=None)
def load_resource(name: str) -> str:
    """Return the text of a packaged file under ``export/resources``."""

    resource = resources.files(_RESOURCE_PACKAGE).joinpath("resources", name)
    return resource.read_text(encoding="utf-8")


@lru_cache(maxsize=1)
def _document_template() -> Template:
    env = Environment(
        loader=PackageLoader(_RESOURCE_PACKAGE, "resources"),
        autoescape=True,
        keep_trailing_newline=True,
    )
    return env.get_template("document.html.j2")


def synthesize(
    title: str,
    body_fragment: str,
    embedded_data: Optional[Any] = None,
    *,
    preferences: Preferences,
    extra_css: str = "",
) -> str:
    """Render the complete document.

    ``body_fragment`` must already be escaped by a body builder.
    ``embedded_data`` becomes the ``questionsData`` JSON island when given.
    """

    data = None
    if embedded_data is not None:
        data = Markup(escape_json_for_script(embedded_data))
    return _document_template().render(
        title=Markup(escape(title)),
        preferences=preferences,
        font_family=Markup(preferences.font_stack),
        palettes=tuple(PALETTES.values()),
        palette_css=Markup(palette_css()),
        layout_css=Markup(load_resource("layout.css").rstrip()),
        extra_css=Markup(extra_css.strip()),
        body=Markup(body_fragment),
        data=data,
        script=Markup(load_resource("behavior.js").rstrip()),
    )
