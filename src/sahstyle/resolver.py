"""Preference resolution.

Merges environment overrides, persisted ui.yaml preferences and the terminal
detection into one immutable ``ResolvedSettings``. Precedence is an ordered list
of steps over a ``SettingsAccumulator``; each step may only fill fields that
are still unset, so earlier steps always win:

    1. NO_COLOR            -> color off (nothing below can turn it back on)
    2. FORCE_COLOR         -> color on, even without a TTY
    3. SAH_THEME           -> theme (unknown name: warn, use "dark")
    4. SAH_USE_EMOJIS      -> emoji on/off
    5. ui.yaml preferences -> theme, emoji, color_output always/never
    6. terminal detection  -> color = TTY with color support; theme from background
    7. terminal detection  -> emoji = unicode support

Usage:
    from sahstyle.capability import detect
    from sahstyle.config import load_ui_config
    from sahstyle.env_settings import get_env_settings
    from sahstyle.resolver import resolve

    settings = resolve(get_env_settings().ui, load_ui_config(), detect())
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from sahstyle.capability import Background, ColorDepth, RenderCapability
from sahstyle.config import ColorOutputMode, UiConfig
from sahstyle.env_settings import UiEnvSettings
from sahstyle.exceptions import UnknownThemeError
from sahstyle.theme import DARK_THEME, DEFAULT_THEME_NAME, LIGHT_THEME, ThemeRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedSettings:
    """Final rendering configuration. Every field is always defined."""

    theme_name: str
    color_depth: ColorDepth
    emoji_enabled: bool
    color_enabled: bool
    # Informational: non-fatal problems met while resolving.
    warnings: tuple[str, ...] = ()
    # Informational: (field, step) pairs recording which step decided each field.
    sources: tuple[tuple[str, str], ...] = ()

    def source_of(self, field_name: str) -> str | None:
        return dict(self.sources).get(field_name)


@dataclass
class ResolveInputs:
    env: UiEnvSettings
    config: UiConfig | None
    capability: RenderCapability
    registry: ThemeRegistry


@dataclass
class SettingsAccumulator:
    """Mutable scratch state; a field stays None until some step fixes it."""

    theme_name: str | None = None
    emoji_enabled: bool | None = None
    color_enabled: bool | None = None
    warnings: list[str] = field(default_factory=list)
    sources: dict[str, str] = field(default_factory=dict)

    def fill(self, name: str, value: object, source: str) -> bool:
        """Set a field if still unset. Returns True if it was set."""
        if getattr(self, name) is not None or value is None:
            return False
        setattr(self, name, value)
        self.sources[name] = source
        return True

    def warn(self, message: str) -> None:
        logger.warning(message)
        self.warnings.append(message)

    def freeze(self, capability: RenderCapability) -> ResolvedSettings:
        if self.theme_name is None or self.emoji_enabled is None or self.color_enabled is None:
            missing = [
                name
                for name in ("theme_name", "emoji_enabled", "color_enabled")
                if getattr(self, name) is None
            ]
            raise RuntimeError(f"Resolution left fields unset: {missing}")

        if self.color_enabled:
            depth = max(capability.color_depth, ColorDepth.ANSI16)
        else:
            depth = ColorDepth.NONE

        return ResolvedSettings(
            theme_name=self.theme_name,
            color_depth=depth,
            emoji_enabled=self.emoji_enabled,
            color_enabled=self.color_enabled,
            warnings=tuple(self.warnings),
            sources=tuple(self.sources.items()),
        )


ResolverStep = Callable[[SettingsAccumulator, ResolveInputs], None]


def _fill_theme(acc: SettingsAccumulator, inputs: ResolveInputs, name: str, source: str) -> None:
    if acc.theme_name is not None:
        return
    try:
        theme = inputs.registry.get(name)
    except UnknownThemeError as e:
        acc.warn(f"{e} (from {source}); falling back to '{DEFAULT_THEME_NAME}'")
        acc.fill("theme_name", DEFAULT_THEME_NAME, f"{source} fallback")
        return
    acc.fill("theme_name", theme.name, source)


# =============================================================================
# Steps, in precedence order
# =============================================================================


def no_color_step(acc: SettingsAccumulator, inputs: ResolveInputs) -> None:
    if inputs.env.no_color_set:
        acc.fill("color_enabled", False, "NO_COLOR")


def force_color_step(acc: SettingsAccumulator, inputs: ResolveInputs) -> None:
    if inputs.env.force_color_set:
        acc.fill("color_enabled", True, "FORCE_COLOR")


def env_theme_step(acc: SettingsAccumulator, inputs: ResolveInputs) -> None:
    if inputs.env.theme is not None:
        _fill_theme(acc, inputs, inputs.env.theme, "SAH_THEME")


def env_emoji_step(acc: SettingsAccumulator, inputs: ResolveInputs) -> None:
    acc.fill("emoji_enabled", inputs.env.use_emojis, "SAH_USE_EMOJIS")


def config_step(acc: SettingsAccumulator, inputs: ResolveInputs) -> None:
    if inputs.config is None:
        return
    prefs = inputs.config.preferences

    if prefs.theme is not None:
        _fill_theme(acc, inputs, prefs.theme, "config")
    acc.fill("emoji_enabled", prefs.use_emojis, "config")

    if prefs.color_output is ColorOutputMode.ALWAYS:
        acc.fill("color_enabled", True, "config")
    elif prefs.color_output is ColorOutputMode.NEVER:
        acc.fill("color_enabled", False, "config")


def capability_step(acc: SettingsAccumulator, inputs: ResolveInputs) -> None:
    capability = inputs.capability
    acc.fill(
        "color_enabled",
        capability.is_tty and capability.color_depth != ColorDepth.NONE,
        "terminal",
    )
    # Unknown backgrounds get dark: most terminal emulators default to dark.
    theme = LIGHT_THEME if capability.background is Background.LIGHT else DARK_THEME
    acc.fill("theme_name", theme.name, "terminal")


def emoji_default_step(acc: SettingsAccumulator, inputs: ResolveInputs) -> None:
    acc.fill("emoji_enabled", inputs.capability.unicode_supported, "terminal")


RESOLVER_STEPS: tuple[ResolverStep, ...] = (
    no_color_step,
    force_color_step,
    env_theme_step,
    env_emoji_step,
    config_step,
    capability_step,
    emoji_default_step,
)


def resolve(
    env: UiEnvSettings,
    config: UiConfig | None,
    capability: RenderCapability,
    *,
    registry: ThemeRegistry | None = None,
) -> ResolvedSettings:
    """Merge all preference sources into one ``ResolvedSettings``.

    Args:
        env: Environment overrides.
        config: Persisted preferences, or None when there is no ui.yaml.
        capability: Detected terminal capabilities.
        registry: Themes to validate names against (default: built-ins plus
            the custom themes declared in ``config``).

    Raises:
        IncompletePaletteError: If ``registry`` is not given and a custom theme
            in ``config`` cannot be built.
    """
    inputs = ResolveInputs(
        env=env,
        config=config,
        capability=capability,
        registry=registry if registry is not None else ThemeRegistry.from_config(config),
    )
    acc = SettingsAccumulator()
    for step in RESOLVER_STEPS:
        step(acc, inputs)

    settings = acc.freeze(capability)
    logger.debug("Resolved UI settings: %s", settings)
    return settings


__all__ = [
    "RESOLVER_STEPS",
    "ResolveInputs",
    "ResolvedSettings",
    "ResolverStep",
    "SettingsAccumulator",
    "resolve",
]
