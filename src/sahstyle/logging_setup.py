"""Logging configuration for sahstyle.

Library modules only create ``logging.getLogger(__name__)`` loggers under the
``sahstyle`` namespace. An application calls ``setup_logging()`` once, at
startup, to decide where those records go:

    from sahstyle import setup_logging

    setup_logging()                      # level from SAH_LOG_LEVEL
    setup_logging("DEBUG", "sah.log")    # explicit level, plus a file

Console records are printed through the resolved UI context's stderr console,
so they follow NO_COLOR/FORCE_COLOR and use the active theme's colors for the
level names.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from rich.logging import RichHandler

from sahstyle.context import UiContext
from sahstyle.env_settings import get_env_settings

LOGGER_NAME = "sahstyle"

_FILE_FORMAT = logging.Formatter(
    "%(asctime)s | %(levelname)-5s | [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

# Console handler of the last setup_logging() call, for set_console_quiet().
_console_handler: logging.Handler | None = None
_console_level = logging.WARNING


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.WARNING


def _console_handler_for(ui: UiContext | None, rich_console: bool) -> logging.Handler:
    if not rich_console:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        return handler

    if ui is None:
        from sahstyle.ui.core import get_context

        ui = get_context()
    return RichHandler(
        console=ui.console(stderr=True),
        show_time=False,
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )


def setup_logging(
    log_level: str | None = None,
    log_file: Path | str | None = None,
    rich_console: bool = True,
    quiet_console: bool = False,
    ui: UiContext | None = None,
) -> logging.Logger:
    """
    Configure the ``sahstyle`` logger.

    Args:
        log_level: Logging level name (default: SAH_LOG_LEVEL, else WARNING).
            Unknown names fall back to WARNING.
        log_file: Optional file path; it always receives DEBUG and above
        rich_console: Print console records through a themed RichHandler
        quiet_console: If True, only show WARNING+ on console
        ui: Context whose console and theme the RichHandler uses
            (default: the shared context from ``sahstyle.ui``)

    Returns:
        The ``sahstyle`` logger
    """
    global _console_handler, _console_level
    if log_level is None:
        log_level = get_env_settings().app.log_level
    level = _level_from_name(log_level)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    console_handler = _console_handler_for(ui, rich_console)
    console_handler.setLevel(max(logging.WARNING, level) if quiet_console else level)
    logger.addHandler(console_handler)
    _console_handler = console_handler
    _console_level = level

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(_FILE_FORMAT)
        logger.addHandler(file_handler)
        # Records below the logger level never reach the file handler.
        logger.setLevel(logging.DEBUG)

    return logger


def set_console_quiet(quiet: bool = True) -> None:
    """
    Toggle quiet mode for console logging.

    When quiet, only WARNING and above are shown on console; otherwise the
    level given to the last setup_logging() call applies again.

    Args:
        quiet: If True, suppress INFO-level console output
    """
    if _console_handler is not None:
        quiet_level = max(logging.WARNING, _console_level)
        _console_handler.setLevel(quiet_level if quiet else _console_level)
