"""User display preferences and their persistence lifecycle.

Preferences are loaded once per session, merged over the defaults so keys
added in newer releases are filled in, and saved after every mutation.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, replace
from types import MappingProxyType
from typing import Any, Mapping, Optional

from quizforge.core.store import JsonStore
from quizforge.export.palette import DEFAULT_THEME, PALETTES

__all__ = [
    "FONT_FAMILIES",
    "MAX_FONT_SIZE",
    "MIN_FONT_SIZE",
    "PREFERENCES_KEY",
    "PreferenceStore",
    "Preferences",
    "PreferencesError",
    "parse_preference",
]

PREFERENCES_KEY = "preferences"
MIN_FONT_SIZE = 12
MAX_FONT_SIZE = 24

FONT_FAMILIES: Mapping[str, str] = MappingProxyType(
    {
        "sans-serif": "'Segoe UI', sans-serif",
        "serif": "'Georgia', serif",
        "monospace": "'Courier New', monospace",
    }
)

# Field name -> stored JSON key.
_KEYS = {
    "theme": "theme",
    "font_size": "fontSize",
    "font_family": "fontFamily",
    "high_contrast": "highContrast",
    "reduce_motion": "reduceMotion",
}


class PreferencesError(ValueError):
    """Raised for an unknown preference or an out-of-range value."""


@dataclass(frozen=True)
class Preferences:
    theme: str = DEFAULT_THEME
    font_size: int = 16
    font_family: str = "sans-serif"
    high_contrast: bool = False
    reduce_motion: bool = False

    def __post_init__(self) -> None:
        if self.theme not in PALETTES:
            raise PreferencesError(
                f"Unknown theme '{self.theme}'. "
                f"Expected one of: {', '.join(PALETTES)}."
            )
        if (
            isinstance(self.font_size, bool)
            or not isinstance(self.font_size, int)
            or not MIN_FONT_SIZE <= self.font_size <= MAX_FONT_SIZE
        ):
            raise PreferencesError(
                f"font_size must be an integer between {MIN_FONT_SIZE} and "
                f"{MAX_FONT_SIZE}."
            )
        if self.font_family not in FONT_FAMILIES:
            raise PreferencesError(
                f"Unknown font family '{self.font_family}'. "
                f"Expected one of: {', '.join(FONT_FAMILIES)}."
            )
        for name in ("high_contrast", "reduce_motion"):
            if not isinstance(getattr(self, name), bool):
                raise PreferencesError(f"{name} must be a boolean.")

    @property
    def font_stack(self) -> str:
        return FONT_FAMILIES[self.font_family]

    def to_dict(self) -> dict[str, Any]:
        return {_KEYS[name]: value for name, value in asdict(self).items()}

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        *,
        logger: Optional[logging.Logger] = None,
    ) -> "Preferences":
        """Merge stored values over the defaults, skipping invalid ones."""

        log = logger or logging.getLogger(__name__)
        merged = cls()
        for name, key in _KEYS.items():
            if key not in data:
                continue
            try:
                merged = replace(merged, **{name: data[key]})
            except PreferencesError as exc:
                log.warning(
                    "Ignored stored preference",
                    extra={"preference": key, "error": str(exc)},
                )
        return merged


def parse_preference(name: str, raw: str) -> tuple[str, Any]:
    """Map a CLI ``name``/``raw`` pair to a dataclass field and typed value."""

    field_name = name.strip().lower().replace("-", "_")
    if field_name not in _KEYS:
        raise PreferencesError(
            f"Unknown preference '{name}'. "
            f"Expected one of: {', '.join(k.replace('_', '-') for k in _KEYS)}."
        )
    value = raw.strip()
    if field_name == "font_size":
        try:
            return field_name, int(value)
        except ValueError as exc:
            raise PreferencesError("font-size must be an integer.") from exc
    if field_name in ("high_contrast", "reduce_motion"):
        lowered = value.lower()
        if lowered in ("1", "true", "yes", "on"):
            return field_name, True
        if lowered in ("0", "false", "no", "off"):
            return field_name, False
        raise PreferencesError(f"{name} expects on/off, true/false, or yes/no.")
    return field_name, value


class PreferenceStore:
    """Current :class:`Preferences` mirrored to a :class:`JsonStore`."""

    def __init__(
        self, store: JsonStore, *, logger: Optional[logging.Logger] = None
    ) -> None:
        self._store = store
        self._logger = logger or logging.getLogger(__name__)
        self.last_save_ok = True
        payload = store.load(PREFERENCES_KEY)
        if isinstance(payload, Mapping):
            self._current = Preferences.from_dict(payload, logger=self._logger)
        else:
            if payload is not None:
                self._logger.error(
                    "Stored preferences are not an object; using defaults",
                    extra={"type": type(payload).__name__},
                )
            self._current = Preferences()

    @property
    def current(self) -> Preferences:
        return self._current

    def update(self, **changes: Any) -> Preferences:
        unknown = set(changes) - set(_KEYS)
        if unknown:
            raise PreferencesError(
                f"Unknown preference(s): {', '.join(sorted(unknown))}."
            )
        self._current = replace(self._current, **changes)
        self._save()
        return self._current

    def reset(self) -> Preferences:
        self._current = Preferences()
        self._save()
        return self._current

    def _save(self) -> None:
        self.last_save_ok = self._store.save(
            PREFERENCES_KEY, self._current.to_dict()
        )
