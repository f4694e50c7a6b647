"""Shared bootstrap for quizforge subcommands: config, logging and stores."""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from quizforge.config import (
    ConfigOverrides,
    LoadResult,
    QuizforgeConfig,
    load_config,
)
from quizforge.core.logging import configure_logger
from quizforge.core.store import JsonStore
from quizforge.quiz.library import QuizLibrary
from quizforge.settings.preferences import PreferenceStore

LOGGER_NAME = "quizforge"


@dataclass(frozen=True)
class Runtime:
    load_result: LoadResult
    logger: logging.Logger
    log_path: Path

    @property
    def config(self) -> QuizforgeConfig:
        return self.load_result.config

    def library(self) -> QuizLibrary:
        store = JsonStore(
            self.load_result.layout.path_for("library"), logger=self.logger
        )
        return QuizLibrary(store, logger=self.logger)

    def preferences(self) -> PreferenceStore:
        store = JsonStore(
            self.load_result.layout.path_for("config"), logger=self.logger
        )
        return PreferenceStore(store, logger=self.logger)


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        type=Path,
        help=(
            "Path to a TOML config file (defaults to the workspace config "
            "directory)."
        ),
    )
    parser.add_argument(
        "--workspace",
        type=Path,
        help="Override the workspace root used for config, logs and data.",
    )
    parser.add_argument(
        "--log-level",
        help="Set the logging level for the run (defaults to INFO).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Mirror log records to stderr.",
    )


def bootstrap(
    args: argparse.Namespace,
    *,
    overrides: Optional[ConfigOverrides] = None,
) -> Runtime:
    """Resolve config and configure logging.

    Raises ``QuizforgeConfigError``; callers report it with ``parser.error``.
    """

    base = overrides or ConfigOverrides()
    if getattr(args, "log_level", None):
        base = replace(base, log_level=args.log_level)
    load_result = load_config(
        config_path=getattr(args, "config", None),
        overrides=base,
        workspace_path=getattr(args, "workspace", None),
    )
    logger, log_path = configure_logger(
        LOGGER_NAME,
        log_dir=load_result.layout.path_for("logs"),
        level=load_result.config.log_level,
        verbose=bool(getattr(args, "verbose", False)),
    )
    return Runtime(load_result=load_result, logger=logger, log_path=log_path)
