"""``quizforge init``: create the data home and seed ``quizforge.toml``."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from quizforge import config as qf_config
from quizforge.core import workspace as workspace_mod


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quizforge init",
        description=(
            "Create the quizforge data home (config, logs, library, exports) "
            "and write a commented quizforge.toml into config/."
        ),
    )
    parser.add_argument(
        "--path",
        type=Path,
        help="Data home to prepare instead of QUIZFORGE_DATA_HOME.",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Replace an existing quizforge.toml with the packaged one.",
    )
    parser.add_argument("--quiet", action="store_true", help="Print nothing on success.")
    return parser


def _summary(
    layout: workspace_mod.WorkspaceLayout, config_path: Path, config_state: str
) -> str:
    def state(name: str) -> str:
        return "created" if layout.created.get(name) else "exists"

    width = max(len(name) for name in workspace_mod.SUBDIRECTORIES)
    rows = [f"Workspace ready at {layout.home} ({state('home')})", "Subdirectories:"]
    rows.extend(
        f"  {name:<{width}}  {directory} ({state(name)})"
        for name, directory in layout.items()
    )
    rows.append(f"Config: {config_path} ({config_state})")
    return "\n".join(rows) + "\n"


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(list(argv) if argv is not None else None)

    try:
        layout = workspace_mod.ensure_workspace(path=args.path)
        config_path = layout.path_for("config") / qf_config.CONFIG_FILENAME
        if config_path.exists() and not args.force:
            config_state = "exists"
        else:
            qf_config.write_default_config(config_path, overwrite=args.force)
            config_state = "written"
    except (workspace_mod.WorkspaceError, qf_config.QuizforgeConfigError) as exc:
        sys.stderr.write(f"{exc}\n")
        return 1

    if not args.quiet:
        sys.stdout.write(_summary(layout, config_path, config_state))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
