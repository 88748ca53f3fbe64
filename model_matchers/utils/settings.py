"""Environment-driven settings for the matchers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Literal, Tuple, TypedDict, cast


SettingKey = Literal[
    "blank_message",
    "password_attribute",
    "password_digest_attributes",
    "none_is_blank",
    "log_level",
]


class SettingValues(TypedDict):
    blank_message: str
    password_attribute: str
    password_digest_attributes: Tuple[str, ...]
    none_is_blank: bool
    log_level: str


@dataclass(frozen=True)
class SettingDefinition:
    env_var: str
    default: object


_SETTING_DEFINITIONS: Dict[SettingKey, SettingDefinition] = {
    "blank_message": SettingDefinition("MODEL_MATCHERS_BLANK_MESSAGE", "can't be blank"),
    "password_attribute": SettingDefinition("MODEL_MATCHERS_PASSWORD_ATTRIBUTE", "password"),
    "password_digest_attributes": SettingDefinition(
        "MODEL_MATCHERS_PASSWORD_DIGEST_ATTRIBUTES",
        ("password_digest", "password_hash", "hashed_password"),
    ),
    "none_is_blank": SettingDefinition("MODEL_MATCHERS_NONE_IS_BLANK", True),
    "log_level": SettingDefinition("MODEL_MATCHERS_LOG_LEVEL", "WARNING"),
}

# Symbolic message keys accepted by default_message()
_MESSAGE_SETTINGS: Dict[str, SettingKey] = {
    "blank": "blank_message",
}


def _normalize_bool(value: str | None, default: bool = True) -> bool:
    """Return normalized boolean from environment-style value."""
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"", "0", "false", "no", "off"}:
        return False
    if normalized in {"1", "true", "yes", "on"}:
        return True
    return default


def _normalize_list(value: str | None, default: Tuple[str, ...]) -> Tuple[str, ...]:
    """Split a comma separated value, ignoring empty entries."""
    if value is None:
        return default
    items = tuple(part.strip() for part in value.split(",") if part.strip())
    return items or default


def _normalize_str(value: str | None, default: str) -> str:
    if value is None or not value.strip():
        return default
    return value.strip()


@lru_cache(maxsize=None)
def get_settings() -> SettingValues:
    """Return the cached settings sourced from the environment."""
    values: Dict[SettingKey, object] = {}
    for key, definition in _SETTING_DEFINITIONS.items():
        raw = os.getenv(definition.env_var)
        default = definition.default
        if isinstance(default, bool):
            values[key] = _normalize_bool(raw, default=default)
        elif isinstance(default, tuple):
            values[key] = _normalize_list(raw, default)
        else:
            values[key] = _normalize_str(raw, cast(str, default))
    return cast(SettingValues, values)


def get_setting(key: SettingKey):
    """Return a single setting value."""
    return get_settings()[key]


def default_message(key: str) -> str:
    """Resolve a symbolic message key such as ``"blank"`` to its text."""
    return cast(str, get_setting(_MESSAGE_SETTINGS[key]))


def refresh_settings_cache() -> None:
    """Invalidate cached settings (useful for tests)."""
    get_settings.cache_clear()
