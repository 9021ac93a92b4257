"""Shared pytest fixtures and helpers for sahstyle tests."""

from __future__ import annotations

import os
from collections.abc import Iterator
from unittest import mock

import pytest

from sahstyle.capability import Background, ColorDepth, RenderCapability
from sahstyle.env_settings import UiEnvSettings, clear_env_settings_cache
from sahstyle.resolver import ResolvedSettings
from sahstyle.ui.core import reset_context


class FakeStream:
    """Minimal output stream with controllable TTY-ness and encoding."""

    def __init__(self, tty: bool = True, encoding: str | None = "utf-8") -> None:
        self._tty = tty
        self.encoding = encoding

    def isatty(self) -> bool:
        return self._tty

    def write(self, text: str) -> int:
        return len(text)

    def flush(self) -> None:
        pass


def make_env(**variables: str) -> UiEnvSettings:
    """Build UiEnvSettings from exactly the given environment variables."""
    with mock.patch.dict(os.environ, variables, clear=True):
        return UiEnvSettings()


def make_capability(
    color_depth: ColorDepth = ColorDepth.ANSI256,
    unicode_supported: bool = True,
    is_tty: bool = True,
    background: Background = Background.UNKNOWN,
) -> RenderCapability:
    return RenderCapability(
        color_depth=color_depth,
        unicode_supported=unicode_supported,
        is_tty=is_tty,
        background=background,
    )


def make_settings(
    theme_name: str = "dark",
    color_depth: ColorDepth = ColorDepth.TRUECOLOR,
    emoji_enabled: bool = True,
    color_enabled: bool = True,
) -> ResolvedSettings:
    if not color_enabled:
        color_depth = ColorDepth.NONE
    return ResolvedSettings(
        theme_name=theme_name,
        color_depth=color_depth,
        emoji_enabled=emoji_enabled,
        color_enabled=color_enabled,
    )


@pytest.fixture(autouse=True)
def _fresh_caches() -> Iterator[None]:
    """Never leak cached env settings or UI context between tests."""
    clear_env_settings_cache()
    reset_context()
    yield
    clear_env_settings_cache()
    reset_context()
