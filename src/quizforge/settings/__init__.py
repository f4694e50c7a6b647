"""User preferences: theme, typography and accessibility toggles."""

from .preferences import (
    FONT_FAMILIES,
    PREFERENCES_KEY,
    PreferenceStore,
    Preferences,
    PreferencesError,
    parse_preference,
)

__all__ = [
    "FONT_FAMILIES",
    "PREFERENCES_KEY",
    "PreferenceStore",
    "Preferences",
    "PreferencesError",
    "parse_preference",
]
