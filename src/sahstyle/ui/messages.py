"""Simple message printing helpers.

Each helper prints a themed icon followed by the message. The icon honours
the resolved emoji setting and the color honours the resolved color setting.
Pass ``ui`` to print through a specific context instead of the shared one.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from sahstyle.context import UiContext
from sahstyle.icons import Icon
from sahstyle.theme import ColorSlot
from sahstyle.ui.core import get_console, get_context, get_err_console


def _target(ui: UiContext | None, *, stderr: bool = False) -> tuple[UiContext, Console]:
    if ui is None:
        return get_context(), get_err_console() if stderr else get_console()
    return ui, ui.console(stderr=stderr)


def _print_labelled(
    icon_id: Icon, slot: ColorSlot, message: str, ui: UiContext | None, indent: str = "  "
) -> None:
    context, console = _target(ui)
    icon = escape(context.icon(icon_id))
    console.print(f"{indent}[{slot.value}]{icon}[/] {escape(message)}")


def print_step(step_num: int, total_steps: int, title: str, ui: UiContext | None = None) -> None:
    """Print a step header.

    Example:
        >>> print_step(1, 5, "Scanning library")
        Step 1/5: Scanning library
    """
    _, console = _target(ui)
    console.print(f"[header]Step {step_num}/{total_steps}:[/] {escape(title)}")


def print_substep(message: str, ui: UiContext | None = None) -> None:
    """Print an indented, muted bullet line."""
    _print_labelled(Icon.BULLET, ColorSlot.MUTED, message, ui)


def print_success(message: str, ui: UiContext | None = None) -> None:
    """Print a success message with checkmark.

    Example:
        >>> print_success("Upload complete")
          ✓ Upload complete
    """
    _print_labelled(Icon.SUCCESS, ColorSlot.SUCCESS, message, ui)


def print_error(message: str, ui: UiContext | None = None) -> None:
    """Print an error message with X.

    Example:
        >>> print_error("Connection failed")
          ✗ Connection failed
    """
    _print_labelled(Icon.ERROR, ColorSlot.ERROR, message, ui)


def print_warning(message: str, ui: UiContext | None = None) -> None:
    """Print a warning message."""
    _print_labelled(Icon.WARNING, ColorSlot.WARNING, message, ui)


def print_info(message: str, ui: UiContext | None = None) -> None:
    """Print an info message."""
    _print_labelled(Icon.INFO, ColorSlot.INFO, message, ui)


def fatal_error(message: str, hint: str | None = None, ui: UiContext | None = None) -> None:
    """Print a fatal error and an optional hint to stderr.

    Example:
        >>> fatal_error("Theme not found", "Run with SAH_THEME=dark")
    """
    _, err_console = _target(ui, stderr=True)
    err_console.print(f"\n[error]Error:[/] {escape(message)}")
    if hint:
        err_console.print(f"[muted]Hint: {escape(hint)}[/]")
