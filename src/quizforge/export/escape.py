"""Escaping for user- and AI-authored text embedded in exported documents."""

from __future__ import annotations

import html
import json
from typing import Any

__all__ = ["escape", "escape_json_for_script"]

_SCRIPT_UNSAFE = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def escape(raw: object) -> str:
    """Neutralize ``& < > " '`` for element and attribute content."""

    return html.escape("" if raw is None else str(raw), quote=True)


def escape_json_for_script(payload: Any) -> str:
    """Serialize ``payload`` so it cannot close or break its ``<script>``."""

    text = json.dumps(
        payload, ensure_ascii=False, sort_keys=True, separators=(",", ":")
    )
    for char, replacement in _SCRIPT_UNSAFE.items():
        text = text.replace(char, replacement)
    return text
