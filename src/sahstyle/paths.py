"""Location of the persisted UI preferences file."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

CONFIG_DIR_NAME = ".swissarmyhammer"
UI_CONFIG_FILE = "ui.yaml"


def _env_override(env_var: str, environ: Mapping[str, str] | None = None) -> Path | None:
    """Check for environment variable override.

    Args:
        env_var: Environment variable name to check
        environ: Environment to read (default: os.environ)

    Returns:
        Path from environment variable if set, None otherwise
    """
    v = (os.environ if environ is None else environ).get(env_var)
    return Path(v).expanduser() if v else None


def ui_config_path(environ: Mapping[str, str] | None = None) -> Path:
    """Get the path of the UI preferences file.

    Default: ~/.swissarmyhammer/ui.yaml

    Override with SAH_UI_CONFIG env var.

    Args:
        environ: Environment to read the override from (default: os.environ)

    Returns:
        Path to ui.yaml (does NOT auto-create)
    """
    return _env_override("SAH_UI_CONFIG", environ) or default_ui_config_path()


def default_ui_config_path() -> Path:
    """~/.swissarmyhammer/ui.yaml, ignoring any override."""
    return Path.home() / CONFIG_DIR_NAME / UI_CONFIG_FILE
