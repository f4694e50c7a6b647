"""Static theme palettes shared by the settings view and exported artifacts."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

__all__ = [
    "DEFAULT_THEME",
    "PALETTES",
    "TOKENS",
    "ThemePalette",
    "get_palette",
    "palette_css",
]

TOKENS = (
    "accent",
    "surface",
    "on-surface",
    "bg-primary",
    "bg-secondary",
    "text-primary",
    "text-secondary",
    "border-color",
    "correct-bg",
    "correct-text",
    "incorrect-bg",
    "incorrect-text",
)

DEFAULT_THEME = "forest"


@dataclass(frozen=True)
class ThemePalette:
    """Named set of ``(token, color)`` pairs in :data:`TOKENS` order."""

    id: str
    name: str
    colors: tuple[tuple[str, str], ...]

    def __post_init__(self) -> None:
        if tuple(token for token, _ in self.colors) != TOKENS:
            raise ValueError(f"Palette '{self.id}' does not define every token.")

    @property
    def swatch(self) -> tuple[str, ...]:
        """Accent, surface and on-surface colors for the theme picker."""

        return tuple(color for _, color in self.colors[:3])

    def color(self, token: str) -> str:
        for name, value in self.colors:
            if name == token:
                return value
        raise KeyError(token)

    def css_block(self) -> str:
        lines = [f"html[data-theme='{self.id}'] {{"]
        lines.extend(f"  --{token}: {value};" for token, value in self.colors)
        lines.append("}")
        return "\n".join(lines)


def _palette(theme_id: str, name: str, values: tuple[str, ...]) -> ThemePalette:
    return ThemePalette(id=theme_id, name=name, colors=tuple(zip(TOKENS, values)))


PALETTES: Mapping[str, ThemePalette] = MappingProxyType(
    {
        "forest": _palette(
            "forest",
            "Forest",
            (
                "#8bc34a",
                "#283c3b",
                "#e4e5dc",
                "#1c2c2b",
                "#283c3b",
                "#e4e5dc",
                "#a1aaa2",
                "#3f5857",
                "#2e4b32",
                "#a4f1ac",
                "#5a3030",
                "#da6161",
            ),
        ),
        "light": _palette(
            "light",
            "Light",
            (
                "#3b82f6",
                "#ffffff",
                "#0f172a",
                "#f9fafb",
                "#ffffff",
                "#111827",
                "#4b5563",
                "#e5e7eb",
                "#dcfce7",
                "#166534",
                "#fee2e2",
                "#991b1b",
            ),
        ),
        "dark-blue": _palette(
            "dark-blue",
            "Dark Blue",
            (
                "#3b82f6",
                "#334155",
                "#f8fafc",
                "#1f2937",
                "#374151",
                "#f9fafb",
                "#9ca3af",
                "#4b5563",
                "#14532d",
                "#bbf7d0",
                "#7f1d1d",
                "#fecaca",
            ),
        ),
    }
)


def get_palette(theme_id: str) -> ThemePalette:
    try:
        return PALETTES[theme_id]
    except KeyError as exc:
        known = ", ".join(PALETTES)
        raise KeyError(f"Unknown theme '{theme_id}'. Expected one of: {known}.") from exc


def palette_css() -> str:
    """Every palette as a ``html[data-theme=...]`` custom-property block."""

    return "\n\n".join(palette.css_block() for palette in PALETTES.values())
