"""Configuration loader shared by the quizforge commands."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, MutableMapping, Optional

from quizforge.core import tomlfile
from quizforge.core import workspace as workspace_mod

CONFIG_FILENAME = "quizforge.toml"
CONFIG_ENV = "QUIZFORGE_CONFIG"
ENV_PREFIX = "QUIZFORGE_"

_DEFAULT_MODEL = "gpt-4o-mini"
_DEFAULT_LOG_LEVEL = "INFO"


class QuizforgeConfigError(RuntimeError):
    """Raised when configuration parsing or validation fails."""


@dataclass(frozen=True)
class AISettings:
    model: str = _DEFAULT_MODEL
    hint_model: str = _DEFAULT_MODEL
    temperature: float = 0.4
    max_tokens: int = 6000
    hint_max_tokens: int = 300


@dataclass(frozen=True)
class QuizforgeConfig:
    """Fully resolved configuration for one command invocation."""

    ai: AISettings
    export_dir: Path
    rich_text: bool
    log_level: str


@dataclass(frozen=True)
class ConfigOverrides:
    """CLI-sourced overrides applied on top of env and file options."""

    model: Optional[str] = None
    export_dir: Optional[Path] = None
    rich_text: Optional[bool] = None
    log_level: Optional[str] = None


@dataclass(frozen=True)
class LoadResult:
    """Resolved configuration plus the workspace it was loaded from."""

    config: QuizforgeConfig
    layout: workspace_mod.WorkspaceLayout
    config_path: Optional[Path]


def load_config(
    *,
    config_path: Optional[Path] = None,
    overrides: Optional[ConfigOverrides] = None,
    env: Optional[Mapping[str, str]] = None,
    workspace_path: Optional[Path] = None,
) -> LoadResult:
    """Load configuration applying precedence CLI > env > TOML > defaults."""

    overrides = overrides or ConfigOverrides()
    env_map = os.environ if env is None else env

    try:
        layout = workspace_mod.ensure_workspace(env=env_map, path=workspace_path)
    except workspace_mod.WorkspaceError as exc:
        raise QuizforgeConfigError(str(exc)) from exc

    requested = _resolve_config_path(
        config_path=config_path,
        env_map=env_map,
        default_path=layout.path_for("config") / CONFIG_FILENAME,
    )

    table = _default_table()
    loaded_path: Optional[Path] = None
    if requested.exists():
        loaded_path = requested
        try:
            table = tomlfile.overlay(table, tomlfile.read_table(requested))
        except tomlfile.TomlFileError as exc:
            raise QuizforgeConfigError(str(exc)) from exc
    elif config_path is not None or (env_map.get(CONFIG_ENV) or "").strip():
        raise QuizforgeConfigError(f"Config file not found: {requested}")

    ai_table = table["ai"]
    ai = AISettings(
        model=_require_str(
            _pick_first(
                overrides.model, _env_string(env_map, "AI_MODEL"), ai_table["model"]
            ),
            "ai.model",
        ),
        hint_model=_require_str(ai_table["hint_model"], "ai.hint_model"),
        temperature=_require_number(ai_table["temperature"], "ai.temperature"),
        max_tokens=_require_int(ai_table["max_tokens"], "ai.max_tokens"),
        hint_max_tokens=_require_int(
            ai_table["hint_max_tokens"], "ai.hint_max_tokens"
        ),
    )

    export_dir = _resolve_export_dir(
        _pick_first(
            overrides.export_dir,
            _env_path(env_map, "EXPORT_DIR"),
            _coerce_optional_path(table["export"]["output_dir"]),
        ),
        layout=layout,
    )

    rich_text = _pick_first(overrides.rich_text, table["export"]["rich_text"])
    if not isinstance(rich_text, bool):
        raise QuizforgeConfigError("export.rich_text must be a boolean.")

    log_level = _require_str(
        _pick_first(
            overrides.log_level,
            _env_string(env_map, "LOG_LEVEL"),
            table["logging"]["level"],
        ),
        "logging.level",
    ).upper()

    config = QuizforgeConfig(
        ai=ai,
        export_dir=export_dir,
        rich_text=rich_text,
        log_level=log_level,
    )
    return LoadResult(config=config, layout=layout, config_path=loaded_path)


def default_config_text() -> str:
    """Return the commented ``quizforge.toml`` shipped with the package."""

    try:
        return tomlfile.packaged_text("quizforge", CONFIG_FILENAME)
    except tomlfile.TomlFileError as exc:
        raise QuizforgeConfigError(str(exc)) from exc


def write_default_config(path: Path, *, overwrite: bool = False) -> Path:
    try:
        return tomlfile.write_template(
            path, default_config_text(), overwrite=overwrite
        )
    except tomlfile.TomlFileError as exc:
        raise QuizforgeConfigError(str(exc)) from exc


def _default_table() -> MutableMapping[str, MutableMapping[str, object]]:
    defaults = AISettings()
    return {
        "ai": {
            "model": defaults.model,
            "hint_model": defaults.hint_model,
            "temperature": defaults.temperature,
            "max_tokens": defaults.max_tokens,
            "hint_max_tokens": defaults.hint_max_tokens,
        },
        "export": {"output_dir": None, "rich_text": False},
        "logging": {"level": _DEFAULT_LOG_LEVEL},
    }


def _resolve_config_path(
    *,
    config_path: Optional[Path],
    env_map: Mapping[str, str],
    default_path: Path,
) -> Path:
    if config_path is not None:
        return config_path.expanduser()
    env_candidate = (env_map.get(CONFIG_ENV) or "").strip()
    if env_candidate:
        return Path(env_candidate).expanduser()
    return default_path


def _resolve_export_dir(
    candidate: object, *, layout: workspace_mod.WorkspaceLayout
) -> Path:
    if candidate is None:
        return layout.path_for("exports")
    path = Path(candidate).expanduser()  # type: ignore[arg-type]
    if not path.is_absolute():
        path = layout.home / path
    return path.resolve()


def _coerce_optional_path(value: object) -> Optional[Path]:
    if value is None:
        return None
    if isinstance(value, str):
        return Path(value) if value.strip() else None
    raise QuizforgeConfigError("export.output_dir must be a string.")


def _require_str(value: object, key: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise QuizforgeConfigError(f"{key} must be a non-empty string.")
    return value.strip()


def _require_int(value: object, key: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise QuizforgeConfigError(f"{key} must be a positive integer.")
    return value


def _require_number(value: object, key: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise QuizforgeConfigError(f"{key} must be a number.")
    return float(value)


def _env_string(env_map: Mapping[str, str], key: str) -> Optional[str]:
    raw = env_map.get(f"{ENV_PREFIX}{key}")
    if raw is None:
        return None
    return raw.strip() or None


def _env_path(env_map: Mapping[str, str], key: str) -> Optional[Path]:
    raw = _env_string(env_map, key)
    return Path(raw).expanduser() if raw else None


def _pick_first(*candidates: object) -> object:
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None
