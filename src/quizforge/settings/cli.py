"""``quizforge settings``: view and change display preferences."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from quizforge.config import QuizforgeConfigError
from quizforge.export.palette import PALETTES
from quizforge.runtime import add_common_arguments, bootstrap

from .preferences import (
    FONT_FAMILIES,
    MAX_FONT_SIZE,
    MIN_FONT_SIZE,
    Preferences,
    PreferencesError,
    parse_preference,
)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quizforge settings",
        description="Show or change preferences used by sessions and exports.",
    )
    sub = parser.add_subparsers(dest="action", required=True)

    sp_show = sub.add_parser("show", help="Print current preferences.")
    add_common_arguments(sp_show)

    sp_set = sub.add_parser(
        "set",
        help="Change one preference.",
        description=(
            f"Names: theme ({', '.join(PALETTES)}), font-size "
            f"({MIN_FONT_SIZE}-{MAX_FONT_SIZE}), font-family "
            f"({', '.join(FONT_FAMILIES)}), high-contrast (on/off), "
            "reduce-motion (on/off)."
        ),
    )
    add_common_arguments(sp_set)
    sp_set.add_argument("name")
    sp_set.add_argument("value")

    sp_reset = sub.add_parser("reset", help="Restore default preferences.")
    add_common_arguments(sp_reset)
    return parser


def main(
    argv: Optional[Sequence[str]] = None, *, console: Optional[Console] = None
) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    console = console or Console()

    try:
        runtime = bootstrap(args)
    except QuizforgeConfigError as exc:
        parser.error(str(exc))
    store = runtime.preferences()

    if args.action == "set":
        try:
            name, value = parse_preference(args.name, args.value)
            current = store.update(**{name: value})
        except PreferencesError as exc:
            parser.error(str(exc))
        runtime.logger.info(
            "Preference updated", extra={"preference": name, "value": value}
        )
    elif args.action == "reset":
        current = store.reset()
        runtime.logger.info("Preferences reset")
    else:
        current = store.current

    _print_preferences(console, current)
    if not store.last_save_ok:
        sys.stderr.write(
            f"Warning: preferences could not be saved. See {runtime.log_path}.\n"
        )
        return 1
    return 0


def _print_preferences(console: Console, prefs: Preferences) -> None:
    table = Table(title="Preferences", box=box.SIMPLE, show_header=False)
    table.add_column("Name", style="cyan")
    table.add_column("Value")

    palette = PALETTES[prefs.theme]
    theme = Text(f"{palette.name} ")
    for color in palette.swatch:
        theme.append("■", style=color)
    table.add_row("theme", theme)
    table.add_row("font-size", f"{prefs.font_size}px")
    table.add_row("font-family", prefs.font_family)
    table.add_row("high-contrast", "on" if prefs.high_contrast else "off")
    table.add_row("reduce-motion", "on" if prefs.reduce_motion else "off")
    console.print(table)


if __name__ == "__main__":  # pragma: no cover - module CLI guard
    raise SystemExit(main())
