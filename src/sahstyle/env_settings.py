"""Environment-based settings using pydantic-settings.

Environment variables are loaded automatically and validated. They take part
in theme resolution as the highest-priority preference source, above the
persisted ui.yaml preferences.

Usage:
    from sahstyle.env_settings import get_env_settings

    env = get_env_settings()
    print(env.ui.theme)  # From SAH_THEME env var

Environment Variables:
    Color:
        NO_COLOR - Disable color output (presence only, any value)
        FORCE_COLOR - Force color output even when not a TTY (presence only;
            "2"/"3" additionally request 256-color/truecolor)

    Preferences:
        SAH_THEME - Theme name (built-in "light"/"dark" or a custom theme)
        SAH_USE_EMOJIS - Unicode icons on/off (true/false/1/0)
        SAH_UI_CONFIG - Override path of the ui.yaml preferences file

    Application:
        SAH_LOG_LEVEL - Logging level (default: "WARNING")
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any, TypeVar

from dotenv import dotenv_values
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def parse_bool_flag(value: Any) -> bool | None:
    """Parse a boolean-like env value; None when it cannot be interpreted."""
    if value is None or isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    return None


_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_SettingsT = TypeVar("_SettingsT", bound="SahBaseSettings")


class SahBaseSettings(BaseSettings):
    """BaseSettings that can also be built from an explicit environment mapping."""

    @classmethod
    def from_environ(cls: type[_SettingsT], environ: Mapping[str, str]) -> _SettingsT:
        """Build from ``environ`` alone; ``os.environ`` is not consulted.

        Only the aliased variable names are picked up, with the same
        validation as when reading the process environment.
        """
        aliases = (field.validation_alias for field in cls.model_fields.values())
        values = {
            alias: environ[alias]
            for alias in aliases
            if isinstance(alias, str) and alias in environ
        }
        return cls.model_validate(values)


class UiEnvSettings(SahBaseSettings):
    """Terminal styling overrides from environment variables.

    Reads from NO_COLOR, FORCE_COLOR, SAH_THEME, SAH_USE_EMOJIS, SAH_UI_CONFIG.
    """

    model_config = SettingsConfigDict(
        extra="ignore",
        frozen=True,
    )

    no_color: str | None = Field(
        default=None,
        validation_alias="NO_COLOR",
        description="Disable color output when present",
    )
    force_color: str | None = Field(
        default=None,
        validation_alias="FORCE_COLOR",
        description="Force color output when present",
    )
    theme: str | None = Field(
        default=None,
        validation_alias="SAH_THEME",
        description="Theme name override",
    )
    use_emojis: bool | None = Field(
        default=None,
        validation_alias="SAH_USE_EMOJIS",
        description="Unicode icon override",
    )
    config_path: Path | None = Field(
        default=None,
        validation_alias="SAH_UI_CONFIG",
        description="Override path of ui.yaml",
    )

    @field_validator("theme", mode="before")
    @classmethod
    def blank_theme_is_unset(cls, v: Any) -> Any:
        """Treat an empty SAH_THEME as not set."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("use_emojis", mode="before")
    @classmethod
    def parse_use_emojis(cls, v: Any) -> bool | None:
        """Accept true/false/1/0; ignore anything else with a warning."""
        parsed = parse_bool_flag(v)
        if parsed is None and v is not None:
            logger.warning("Ignoring SAH_USE_EMOJIS=%r (expected true/false/1/0)", v)
        return parsed

    @property
    def no_color_set(self) -> bool:
        return self.no_color is not None

    @property
    def force_color_set(self) -> bool:
        return self.force_color is not None


class AppEnvSettings(SahBaseSettings):
    """Application-level settings from environment variables.

    Reads from SAH_LOG_LEVEL.
    """

    model_config = SettingsConfigDict(
        extra="ignore",
    )

    log_level: str = Field(
        default="WARNING",
        validation_alias="SAH_LOG_LEVEL",
        description="Logging level",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: Any) -> str:
        """Normalize the level name; unknown names fall back to WARNING with a warning."""
        upper = str(v).strip().upper()
        if upper not in _LOG_LEVELS:
            logger.warning(
                "Ignoring SAH_LOG_LEVEL=%r (expected one of %s)", v, ", ".join(_LOG_LEVELS)
            )
            return "WARNING"
        return upper


class EnvSettings(BaseSettings):
    """Combined environment settings.

    Use get_env_settings() to get a cached instance.

    Example:
        env = get_env_settings()
        print(env.ui.no_color_set)
        print(env.app.log_level)
    """

    model_config = SettingsConfigDict(
        extra="ignore",
    )

    ui: UiEnvSettings = Field(default_factory=UiEnvSettings)
    app: AppEnvSettings = Field(default_factory=AppEnvSettings)

    @classmethod
    def from_environ(cls, environ: Mapping[str, str]) -> EnvSettings:
        """Build both sections from an explicit environment mapping."""
        return cls.model_validate(
            {
                "ui": UiEnvSettings.from_environ(environ),
                "app": AppEnvSettings.from_environ(environ),
            }
        )


@lru_cache(maxsize=1)
def get_env_settings() -> EnvSettings:
    """Get cached environment settings.

    The cache is populated on first call; the environment is not re-read
    afterwards so all output within one invocation is consistent.
    """
    return EnvSettings()


def read_env_file(env_file: Path) -> dict[str, str]:
    """Variables assigned in a .env file (bare keys without a value are skipped)."""
    return {key: value for key, value in dotenv_values(env_file).items() if value is not None}


def clear_env_settings_cache() -> None:
    """Clear the cached environment settings.

    Useful for testing to ensure fresh settings are loaded.
    """
    get_env_settings.cache_clear()


def load_env_settings_from_file(
    env_file: Path, environ: Mapping[str, str] | None = None
) -> EnvSettings:
    """Load environment settings with a .env file layered on top.

    Variables in the file override those in ``environ``. Neither
    ``os.environ`` nor the ``get_env_settings()`` cache is modified.

    Args:
        env_file: Path to .env file to load.
        environ: Base environment (default: ``os.environ``).

    Returns:
        EnvSettings instance with configuration from the file.
    """
    base = os.environ if environ is None else environ
    return EnvSettings.from_environ({**base, **read_env_file(env_file)})
