"""Process-wide UI context and Rich console instances.

The context is resolved once, on first use, and reused for the rest of the
process so every line of output within one invocation is styled the same way.
"""

from __future__ import annotations

from functools import lru_cache

from rich.console import Console

from sahstyle.context import UiContext

# =============================================================================
# Shared Context
# =============================================================================


@lru_cache(maxsize=1)
def get_context() -> UiContext:
    """Get the cached process-wide UiContext.

    A malformed ui.yaml is logged and ignored here; callers that want to fail
    on it should build their own context with ``UiContext.create(strict=True)``.
    """
    return UiContext.create()


def reset_context() -> None:
    """Drop the cached context and consoles (tests, or after changing ui.yaml)."""
    get_context.cache_clear()
    get_console.cache_clear()
    get_err_console.cache_clear()


# =============================================================================
# Console Instances
# =============================================================================


@lru_cache(maxsize=1)
def get_console() -> Console:
    """Primary console for normal output."""
    return get_context().console()


@lru_cache(maxsize=1)
def get_err_console() -> Console:
    """Error console for stderr output."""
    return get_context().console(stderr=True)
