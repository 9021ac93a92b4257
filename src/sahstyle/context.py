"""UiContext: one-call assembly of the styling pipeline.

    detect terminal -> read env -> load ui.yaml -> build theme registry
    -> resolve settings -> select theme -> StyleRenderer

Everything that can fail happens in ``UiContext.create()``. Once a context
exists, rendering through it cannot raise.

Usage:
    from sahstyle.context import UiContext

    ui = UiContext.create()
    print(ui.success("done"), ui.icon(Icon.ROCKET))
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import IO, Any

from rich.console import Console

from sahstyle.capability import ColorDepth, RenderCapability, detect
from sahstyle.config import UiConfig, load_ui_config
from sahstyle.env_settings import UiEnvSettings, get_env_settings, read_env_file
from sahstyle.exceptions import ConfigParseError
from sahstyle.icons import Icon
from sahstyle.paths import default_ui_config_path
from sahstyle.resolver import ResolvedSettings, resolve
from sahstyle.style import StyleRenderer
from sahstyle.theme import Theme, ThemeRegistry

logger = logging.getLogger(__name__)

_CONSOLE_COLOR_SYSTEMS: dict[ColorDepth, str] = {
    ColorDepth.ANSI16: "standard",
    ColorDepth.ANSI256: "256",
    ColorDepth.TRUECOLOR: "truecolor",
}


class UiContext:
    """Resolved theme, settings and renderer for one process/invocation."""

    def __init__(
        self,
        renderer: StyleRenderer,
        capability: RenderCapability | None = None,
        config: UiConfig | None = None,
    ) -> None:
        self._renderer = renderer
        self._capability = capability or RenderCapability()
        self._config = config

    @classmethod
    def create(
        cls,
        *,
        environ: Mapping[str, str] | None = None,
        stream: IO[Any] | None = None,
        env: UiEnvSettings | None = None,
        config_path: Path | None = None,
        env_file: Path | None = None,
        strict: bool = False,
    ) -> UiContext:
        """Build a context from the real environment.

        Args:
            environ: Environment for terminal detection and the env overrides
                (default: os.environ). When given, os.environ is not read.
            stream: Output stream whose TTY-ness is checked (default: stdout).
            env: Parsed env overrides (default: parsed from ``environ``, or the
                cached ``get_env_settings().ui`` when no ``environ`` is given).
            config_path: ui.yaml location (default: SAH_UI_CONFIG or
                ~/.swissarmyhammer/ui.yaml).
            env_file: .env file whose variables are layered over ``environ``.
            strict: Re-raise ConfigParseError instead of continuing without
                persisted preferences.

        Raises:
            ConfigParseError: Only when ``strict`` is True.
            IncompletePaletteError: If a custom theme in ui.yaml is unusable.
        """
        if env_file is not None:
            base = os.environ if environ is None else environ
            environ = {**base, **read_env_file(env_file)}

        capability = detect(environ, stream)
        if env is not None:
            env_settings = env
        elif environ is not None:
            env_settings = UiEnvSettings.from_environ(environ)
        else:
            env_settings = get_env_settings().ui

        try:
            config = load_ui_config(
                config_path or env_settings.config_path or default_ui_config_path()
            )
        except ConfigParseError as e:
            if strict:
                raise
            logger.warning("%s; continuing with default preferences", e)
            config = None

        registry = ThemeRegistry.from_config(config)
        settings = resolve(env_settings, config, capability, registry=registry)
        theme = registry.get(settings.theme_name)
        return cls(StyleRenderer(theme, settings), capability, config)

    @classmethod
    def with_theme(cls, theme: Theme, settings: ResolvedSettings | None = None) -> UiContext:
        """Context for an explicit theme, bypassing environment and config.

        Without settings, color and emoji are on at 256 colors.
        """
        if settings is None:
            settings = ResolvedSettings(
                theme_name=theme.name,
                color_depth=ColorDepth.ANSI256,
                emoji_enabled=True,
                color_enabled=True,
            )
        return cls(StyleRenderer(theme, settings))

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def renderer(self) -> StyleRenderer:
        return self._renderer

    @property
    def theme(self) -> Theme:
        return self._renderer.theme

    @property
    def settings(self) -> ResolvedSettings:
        return self._renderer.settings

    @property
    def capability(self) -> RenderCapability:
        return self._capability

    @property
    def config(self) -> UiConfig | None:
        return self._config

    # -------------------------------------------------------------------------
    # Rendering shortcuts
    # -------------------------------------------------------------------------

    def primary(self, text: str) -> str:
        return self._renderer.primary(text)

    def secondary(self, text: str) -> str:
        return self._renderer.secondary(text)

    def success(self, text: str) -> str:
        return self._renderer.success(text)

    def error(self, text: str) -> str:
        return self._renderer.error(text)

    def warning(self, text: str) -> str:
        return self._renderer.warning(text)

    def info(self, text: str) -> str:
        return self._renderer.info(text)

    def muted(self, text: str) -> str:
        return self._renderer.muted(text)

    def emphasis(self, text: str) -> str:
        return self._renderer.emphasis(text)

    def header(self, text: str) -> str:
        return self._renderer.header(text)

    def link(self, text: str) -> str:
        return self._renderer.link(text)

    def icon(self, icon_id: Icon | str) -> str:
        return self._renderer.icon(icon_id)

    # -------------------------------------------------------------------------
    # Rich console
    # -------------------------------------------------------------------------

    def console(self, *, stderr: bool = False, file: IO[str] | None = None) -> Console:
        """Rich console whose color behaviour matches the resolved settings."""
        settings = self.settings
        if settings.color_enabled:
            return Console(
                theme=self._renderer.rich_theme(),
                color_system=_CONSOLE_COLOR_SYSTEMS[settings.color_depth],  # type: ignore[arg-type]
                force_terminal=True,
                no_color=False,
                stderr=stderr,
                file=file,
            )
        return Console(
            theme=self._renderer.rich_theme(),
            color_system=None,
            no_color=True,
            stderr=stderr,
            file=file,
        )
