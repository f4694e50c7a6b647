"""``quizforge`` console entry point: routes to the per-area command modules."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from importlib import import_module, metadata
from typing import Callable, Mapping, Optional, Sequence

USAGE = "Usage: quizforge <command> [args...]"


@dataclass(frozen=True)
class Subcommand:
    """A subcommand backed by the ``main(argv)`` of ``module``."""

    name: str
    summary: str
    module: str
    interactive: bool = False

    @property
    def prog(self) -> str:
        return f"quizforge {self.name}"

    def run(self, argv: Sequence[str]) -> int:
        entry = getattr(import_module(self.module), "main")
        args = list(argv)
        saved = sys.argv
        sys.argv = [self.prog, *args]
        try:
            result = entry(args)
        except SystemExit as exc:
            return _exit_status(exc.code)
        finally:
            sys.argv = saved
        return result if isinstance(result, int) else 0


SUBCOMMANDS: tuple[Subcommand, ...] = (
    Subcommand(
        "init",
        "Create the data home and write quizforge.toml.",
        "quizforge.workspace.cli",
    ),
    Subcommand(
        "quiz",
        "Generate, list, show, delete and take quizzes.",
        "quizforge.quiz._main",
        interactive=True,
    ),
    Subcommand(
        "export",
        "Write a quiz or a graded attempt as standalone HTML.",
        "quizforge.export.cli",
    ),
    Subcommand(
        "settings",
        "Show or change theme, font and accessibility preferences.",
        "quizforge.settings.cli",
    ),
)

COMMANDS: Mapping[str, Subcommand] = {item.name: item for item in SUBCOMMANDS}


def format_command_table() -> str:
    width = max(len(item.name) for item in SUBCOMMANDS)
    rows = ["Available commands:"]
    for item in SUBCOMMANDS:
        marker = " (interactive)" if item.interactive else ""
        rows.append(f"  {item.name:<{width}}  {item.summary}{marker}")
    return "\n".join(rows)


def format_usage() -> str:
    return "\n".join(
        [
            USAGE,
            "Run `quizforge list` for commands or "
            "`quizforge help <name>` for details.",
            "",
            format_command_table(),
        ]
    )


def _out(text: str) -> None:
    sys.stdout.write(text + "\n")


def _err(text: str) -> None:
    sys.stderr.write(text + "\n")


def _unknown(name: str) -> int:
    _err(f"Unknown command '{name}'.")
    _err(format_command_table())
    return 2


def _show_usage(_: Sequence[str]) -> int:
    _out(format_usage())
    return 0


def _show_commands(_: Sequence[str]) -> int:
    _out(format_command_table())
    return 0


def _show_version(_: Sequence[str]) -> int:
    try:
        _out(metadata.version("quizforge"))
    except metadata.PackageNotFoundError:
        _out("unknown")
    return 0


def _show_help(argv: Sequence[str]) -> int:
    if not argv:
        return _show_usage(argv)
    item = COMMANDS.get(argv[0])
    if item is None:
        return _unknown(argv[0])
    _out(f"{item.name}: {item.summary}")
    _out(f"Run `{item.prog} --help` for command-specific options.")
    return 0


_BUILTINS: Mapping[str, Callable[[Sequence[str]], int]] = {
    "-h": _show_usage,
    "--help": _show_usage,
    "list": _show_commands,
    "help": _show_help,
    "version": _show_version,
    "--version": _show_version,
    "-V": _show_version,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        _out(format_usage())
        return 2

    head, rest = args[0], args[1:]
    if head in _BUILTINS:
        return _BUILTINS[head](rest)
    if head in COMMANDS:
        return COMMANDS[head].run(rest)
    return _unknown(head)


def _exit_status(code: object) -> int:
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    _err(str(code))
    return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
