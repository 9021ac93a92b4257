"""Rich console output built on the resolved UI context.

Modules:
    core: Shared UiContext and Rich console instances
    messages: Simple print helpers (success, error, warning, info)

Usage:
    from sahstyle.ui import print_success, get_console
"""

from __future__ import annotations

from sahstyle.ui.core import (
    get_console,
    get_context,
    get_err_console,
    reset_context,
)
from sahstyle.ui.messages import (
    fatal_error,
    print_error,
    print_info,
    print_step,
    print_substep,
    print_success,
    print_warning,
)

__all__ = [
    # Core
    "get_console",
    "get_context",
    "get_err_console",
    "reset_context",
    # Messages
    "fatal_error",
    "print_error",
    "print_info",
    "print_step",
    "print_substep",
    "print_success",
    "print_warning",
]
