"""Centralized error display for cheat.

Renders hook failures and configuration errors as Rich panels on stderr
so they never mix with sheet output on stdout.

Usage:
    from cheat.core.error_handler import CheatErrorHandler

    try:
        manager.run_on_start_hooks()
    except HookExecutionError as e:
        CheatErrorHandler.display_error(e, context="OnStart hooks")
"""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.text import Text
from rich.traceback import Traceback

from cheat.core.hooks.types import HookExecutionError

# Shared console instance
_console = Console(stderr=True)

COLORS = {
    "error": "#FF4444",
    "warning": "#FFB800",
    "muted": "#666666",
}


def _hook_failure_text(error: HookExecutionError) -> Text:
    content = Text()
    content.append("Hook: ", style=COLORS["muted"])
    content.append(f"{error.hook_name}\n", style="bold")
    content.append("Path: ", style=COLORS["muted"])
    content.append(f"{error.path}\n", style="bold")

    if error.timed_out:
        content.append("Timed out\n", style=COLORS["error"])
    elif error.exit_code is not None:
        content.append("Exit code: ", style=COLORS["muted"])
        content.append(f"{error.exit_code}\n", style=COLORS["error"])
    else:
        content.append(f"{error}\n", style=COLORS["error"])

    if error.stderr:
        content.append("\n------ STDERR ------\n", style=COLORS["muted"])
        content.append(error.stderr.rstrip("\n") + "\n", style="dim")
        content.append("--------------------", style=COLORS["muted"])
    return content


class CheatErrorHandler:
    """Centralized error handling with Rich formatting.

    Example:
        >>> try:
        ...     load_config(path)
        ... except ConfigError as e:
        ...     CheatErrorHandler.display_error(e, "Config")
    """

    @staticmethod
    def display_error(
        error: Exception,
        context: str = "Operation",
        show_traceback: bool = False,
        console: Console | None = None,
    ) -> None:
        """Display a formatted error panel.

        Args:
            error: The exception that occurred
            context: Description of what was happening (e.g., "OnStart hooks")
            show_traceback: Whether to show the full traceback
            console: Optional custom console (uses stderr if not provided)
        """
        con = console or _console

        content = Text()
        content.append(f"{type(error).__name__}\n", style=f"bold {COLORS['error']}")
        if isinstance(error, HookExecutionError):
            content.append_text(_hook_failure_text(error))
        else:
            content.append(str(error), style=COLORS["muted"])

        con.print(
            Panel(
                content,
                title=f"[{COLORS['error']}]{context} failed[/{COLORS['error']}]",
                border_style=COLORS["error"],
                padding=(1, 2),
            )
        )

        if show_traceback and error.__traceback__:
            con.print(
                Traceback.from_exception(
                    type(error),
                    error,
                    error.__traceback__,
                    show_locals=False,
                    max_frames=10,
                )
            )

    @staticmethod
    def display_warning(
        message: str, context: str = "Warning", console: Console | None = None
    ) -> None:
        """Display a formatted warning panel."""
        con = console or _console

        con.print(
            Panel(
                Text(message, style=COLORS["muted"]),
                title=f"[{COLORS['warning']}]{context}[/{COLORS['warning']}]",
                border_style=COLORS["warning"],
                padding=(0, 2),
            )
        )

    @staticmethod
    def format_error_message(error: Exception, context: str = "Error") -> str:
        """Format an error for logging without Rich markup."""
        return f"[{context}] {type(error).__name__}: {error}"


__all__ = ["COLORS", "CheatErrorHandler"]
