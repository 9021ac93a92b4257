"""
Persisted UI preferences (ui.yaml).

The file is optional. When present it is validated with pydantic before any
value reaches the resolver:

    preferences:
      theme: dark            # built-in or custom theme name
      use_emojis: false
      color_output: auto     # auto | always | never
    custom_themes:
      - name: solarized
        palette:
          primary: "#268bd2"
          foreground: "#839496"
          background: "#002b36"
          error: "#dc322f"
        icons:
          success: {glyph: "✔", ascii: "[ok]"}

Every preference is optional; unset fields leave the decision to the
environment or terminal detection. Custom theme palettes may be partial:
optional slots are filled when the theme is built (see sahstyle.theme).
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from sahstyle.color import Color
from sahstyle.env_settings import parse_bool_flag
from sahstyle.exceptions import ConfigParseError, InvalidFormatError
from sahstyle.icons import Icon, is_printable_ascii
from sahstyle.paths import ui_config_path
from sahstyle.theme import ColorSlot

logger = logging.getLogger(__name__)

_SLOT_NAMES = frozenset(slot.value for slot in ColorSlot)
_ICON_NAMES = frozenset(icon.value for icon in Icon)
_ICON_KEYS = frozenset({"glyph", "ascii"})


class ColorOutputMode(str, Enum):
    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


class UiPreferences(BaseModel):
    """User preferences section of ui.yaml."""

    model_config = ConfigDict(extra="ignore")

    theme: str | None = Field(default=None, description="Preferred theme name")
    use_emojis: bool | None = Field(default=None, description="Unicode icons on/off")
    color_output: ColorOutputMode | None = Field(default=None, description="auto/always/never")

    @field_validator("theme")
    @classmethod
    def strip_theme(cls, v: str | None) -> str | None:
        """Blank theme names count as unset."""
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator("use_emojis", mode="before")
    @classmethod
    def coerce_use_emojis(cls, v: Any) -> bool | None:
        """Allow quoted booleans and 0/1 from YAML."""
        if v is None:
            return None
        parsed = parse_bool_flag(v)
        if parsed is None:
            raise ValueError(f"use_emojis must be a boolean, got {v!r}")
        return parsed

    @field_validator("color_output", mode="before")
    @classmethod
    def normalize_color_output(cls, v: Any) -> Any:
        """Case-insensitive mode names."""
        return v.strip().lower() if isinstance(v, str) else v


class CustomThemeSchema(BaseModel):
    """One entry of the custom_themes list."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., description="Theme name used by SAH_THEME / preferences.theme")
    palette: dict[str, str] = Field(default_factory=dict, description="Slot -> hex color")
    icons: dict[str, dict[str, str]] = Field(
        default_factory=dict, description="Icon id -> {glyph, ascii}"
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Ensure theme names are non-empty."""
        if not v.strip():
            raise ValueError("custom theme name is required but empty")
        return v.strip()

    @field_validator("palette")
    @classmethod
    def validate_palette(cls, v: dict[str, str]) -> dict[str, str]:
        """Check slot names and parse colors, normalizing to lowercase hex."""
        normalized: dict[str, str] = {}
        for slot, value in v.items():
            key = slot.lower()
            if key not in _SLOT_NAMES:
                raise ValueError(
                    f"Unknown palette slot '{slot}'. Must be one of: {sorted(_SLOT_NAMES)}"
                )
            try:
                normalized[key] = Color.from_hex(value).to_hex()
            except InvalidFormatError as e:
                raise ValueError(f"palette.{slot}: {e}") from None
        return normalized

    @field_validator("icons")
    @classmethod
    def validate_icons(cls, v: dict[str, dict[str, str]]) -> dict[str, dict[str, str]]:
        """Check icon ids, override keys and the override values themselves."""
        normalized: dict[str, dict[str, str]] = {}
        for icon_id, values in v.items():
            key = icon_id.lower()
            if key not in _ICON_NAMES:
                raise ValueError(f"Unknown icon '{icon_id}'")
            unexpected = set(values) - _ICON_KEYS
            if unexpected:
                raise ValueError(
                    f"icons.{icon_id}: unexpected keys {sorted(unexpected)} (use glyph/ascii)"
                )
            if "glyph" in values and not values["glyph"]:
                raise ValueError(f"icons.{icon_id}.glyph must not be empty")
            if "ascii" in values and not (
                values["ascii"] and is_printable_ascii(values["ascii"])
            ):
                raise ValueError(
                    f"icons.{icon_id}.ascii must be non-empty printable ASCII, "
                    f"got {values['ascii']!r}"
                )
            normalized[key] = dict(values)
        return normalized


class UiConfig(BaseModel):
    """Whole ui.yaml document."""

    model_config = ConfigDict(extra="ignore")

    preferences: UiPreferences = Field(default_factory=UiPreferences)
    custom_themes: list[CustomThemeSchema] = Field(default_factory=list)


def load_ui_config(path: Path | None = None) -> UiConfig | None:
    """Load and validate ui.yaml.

    Args:
        path: File to read (default: ``ui_config_path()``).

    Returns:
        The parsed config, or None when the file does not exist.

    Raises:
        ConfigParseError: If the file cannot be read, is not valid YAML, or
            does not match the schema.
    """
    config_path = (path or ui_config_path()).expanduser()
    if not config_path.exists():
        logger.debug("No UI config at %s, using defaults", config_path)
        return None

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        raise ConfigParseError(
            f"Failed to read UI config {config_path}: {e}", config_file=config_path
        ) from e

    if data is None:
        return UiConfig()
    if not isinstance(data, dict):
        raise ConfigParseError(
            f"UI config {config_path} must be a mapping, got {type(data).__name__}",
            config_file=config_path,
        )

    try:
        config = UiConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigParseError(
            f"Invalid UI config {config_path}: {e}", config_file=config_path
        ) from e

    logger.debug(
        "Loaded UI config from %s (%d custom themes)", config_path, len(config.custom_themes)
    )
    return config


def save_ui_config(config: UiConfig, path: Path | None = None) -> Path:
    """Write ui.yaml, omitting unset preferences.

    Returns:
        The path written.
    """
    config_path = path or ui_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(mode="json", exclude_none=True)
    with open(config_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True)

    logger.debug("Saved UI config to %s", config_path)
    return config_path
