"""cheat CLI Entrypoint.

Main entry point for the cheat application. The CLI is the host of the
hook manager and decides which hook failures are fatal:

- config errors and invalid hooks abort startup (exit code 1);
- failing OnStart and ``*Pre`` hooks abort the command (exit code 2);
- failing ``*Post`` and OnStop hooks are reported, the command still
  succeeds.
"""

from __future__ import annotations

import argparse
from collections.abc import Callable
import logging
from pathlib import Path
import sys

from rich.console import Console
from rich.table import Table

from cheat.core.config import Cheatpath, Config, ConfigError, find_config_path, load_config
from cheat.core.error_handler import CheatErrorHandler
from cheat.core.hooks import (
    HookError,
    HookEvent,
    HookExecutionError,
    HookManager,
    name_to_event,
)
from cheat.core.sheet import Sheet, SheetError, load_sheet

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_HOOK_FAILED = 2


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog="cheat",
        description="cheat - view and manage cheatsheets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  cheat view ~/.config/cheat/cheatsheets/personal/tar
  cheat rm ~/.config/cheat/cheatsheets/personal/tar
  cheat hooks
  cheat fire OnSheetEditPost --sheet ~/.config/cheat/cheatsheets/personal/tar
        """,
    )
    parser.add_argument(
        "--config", type=Path, default=None, help="Path to conf.yml (overrides CHEAT_CONFIG_PATH)"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    view = subparsers.add_parser("view", help="Display a cheatsheet")
    view.add_argument("sheet", type=Path, help="Path of the sheet file")

    remove = subparsers.add_parser("rm", help="Remove a cheatsheet")
    remove.add_argument("sheet", type=Path, help="Path of the sheet file")

    subparsers.add_parser("hooks", help="List the configured hooks per event")

    fire = subparsers.add_parser("fire", help="Run the hooks of one event")
    fire.add_argument("event", help="Event name, e.g. OnStart")
    fire.add_argument("--sheet", type=Path, default=None, help="Sheet passed to sheet events")

    return parser.parse_args(argv)


def _cheatpath_for(config: Config, path: Path) -> Cheatpath | None:
    """Return the cheatpath containing the resolved ``path``; later cheatpaths win."""
    found = None
    for cheatpath in config.cheatpaths:
        if path.is_relative_to(Path(cheatpath.path).resolve()):
            found = cheatpath
    return found


def _load_sheet_for(config: Config, path: Path) -> Sheet:
    resolved = path.resolve()
    cheatpath = _cheatpath_for(config, resolved)
    if cheatpath is None:
        return load_sheet(resolved)

    title = str(resolved.relative_to(Path(cheatpath.path).resolve()))
    return load_sheet(
        resolved,
        title=title,
        cheatpath_tags=cheatpath.tags,
        read_only=cheatpath.read_only,
    )


def _run_required_hooks(run: Callable[[], None], context: str) -> bool:
    """Run a hook batch whose failure aborts the command."""
    try:
        run()
    except HookExecutionError as e:
        CheatErrorHandler.display_error(e, context=context)
        return False
    return True


def _run_reported_hooks(run: Callable[[], None], context: str) -> None:
    """Run a hook batch whose failure is only reported."""
    try:
        run()
    except HookExecutionError as e:
        logger.warning(CheatErrorHandler.format_error_message(e, context))
        CheatErrorHandler.display_error(e, context=context)


def cmd_view(args: argparse.Namespace, config: Config, manager: HookManager) -> int:
    try:
        sheet = _load_sheet_for(config, args.sheet)
    except SheetError as e:
        CheatErrorHandler.display_error(e, context="View")
        return EXIT_ERROR

    if not _run_required_hooks(
        lambda: manager.run_on_sheet_view_pre_hooks(sheet), "OnSheetViewPre hooks"
    ):
        return EXIT_HOOK_FAILED

    sys.stdout.write(sheet.text)
    sys.stdout.flush()

    _run_reported_hooks(
        lambda: manager.run_on_sheet_view_post_hooks(sheet), "OnSheetViewPost hooks"
    )
    return EXIT_OK


def cmd_remove(args: argparse.Namespace, config: Config, manager: HookManager) -> int:
    try:
        sheet = _load_sheet_for(config, args.sheet)
    except SheetError as e:
        CheatErrorHandler.display_error(e, context="Remove")
        return EXIT_ERROR

    if sheet.read_only:
        CheatErrorHandler.display_warning(
            f"cannot remove read-only sheet {sheet.path}", context="Remove"
        )
        return EXIT_ERROR

    if not _run_required_hooks(
        lambda: manager.run_on_sheet_remove_pre_hooks(sheet), "OnSheetRemovePre hooks"
    ):
        return EXIT_HOOK_FAILED

    try:
        Path(sheet.path).unlink()
    except OSError as e:
        CheatErrorHandler.display_error(e, context="Remove")
        return EXIT_ERROR

    _run_reported_hooks(
        lambda: manager.run_on_sheet_remove_post_hooks(sheet), "OnSheetRemovePost hooks"
    )
    return EXIT_OK


def cmd_hooks(args: argparse.Namespace, config: Config, manager: HookManager) -> int:
    table = Table(title=f"{manager.hook_count} configured hooks")
    table.add_column("Event", style="bold", no_wrap=True)
    table.add_column("Hook", no_wrap=True)
    table.add_column("Path", style="dim", overflow="fold")

    for event in HookEvent:
        for hook in manager.hooks_for(event):
            table.add_row(event.value, hook.name, hook.path)

    Console().print(table)
    return EXIT_OK


def cmd_fire(args: argparse.Namespace, config: Config, manager: HookManager) -> int:
    try:
        event = name_to_event(args.event)
        sheet = _load_sheet_for(config, args.sheet) if args.sheet else None
    except (HookError, SheetError) as e:
        CheatErrorHandler.display_error(e, context="Fire")
        return EXIT_ERROR

    try:
        manager.run(event, sheet)
    except HookExecutionError as e:
        CheatErrorHandler.display_error(e, context=f"{event} hooks")
        return EXIT_HOOK_FAILED
    except HookError as e:
        CheatErrorHandler.display_error(e, context="Fire")
        return EXIT_ERROR
    return EXIT_OK


# Commands wrapped in the OnStart/OnStop lifecycle.
LIFECYCLE_COMMANDS = {"view": cmd_view, "rm": cmd_remove}
TOOL_COMMANDS = {"hooks": cmd_hooks, "fire": cmd_fire}


def run(args: argparse.Namespace) -> int:
    """Run a parsed command and return the exit code."""
    try:
        config_path = args.config or find_config_path()
        config = load_config(config_path)
        manager = HookManager(config)
    except (ConfigError, HookError) as e:
        CheatErrorHandler.display_error(e, context="Startup")
        return EXIT_ERROR

    if args.command in TOOL_COMMANDS:
        return TOOL_COMMANDS[args.command](args, config, manager)

    if not _run_required_hooks(manager.run_on_start_hooks, "OnStart hooks"):
        return EXIT_HOOK_FAILED

    status = LIFECYCLE_COMMANDS[args.command](args, config, manager)

    if status == EXIT_OK:
        _run_reported_hooks(manager.run_on_stop_hooks, "OnStop hooks")
    return status


def main(argv: list[str] | None = None) -> None:
    """Main entry point for cheat."""
    args = parse_arguments(argv)

    if args.debug:
        logging.basicConfig(level=logging.DEBUG)

    sys.exit(run(args))


if __name__ == "__main__":
    main()
