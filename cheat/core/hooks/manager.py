"""Hook manager module.

Provides a high-level API for creating hooks from the configuration and
executing them at each point of the application lifecycle.
"""

from __future__ import annotations

import logging

from cheat.core.config import Config
from cheat.core.hooks.environment import build_environment
from cheat.core.hooks.executor import Hook
from cheat.core.hooks.types import (
    SHEET_EVENTS,
    HookDispatchError,
    HookEvent,
    event_to_name,
    name_to_event,
)
from cheat.core.sheet import Sheet

logger = logging.getLogger(__name__)


def sheet_arguments(sheet: Sheet) -> list[str]:
    """Build the arguments describing a sheet.

    The most relevant information comes first so hooks can read only the
    prefix they need: the path, then whether the sheet is read-only (e.g.
    only push read-write sheets to a remote), then title, syntax and the
    tags joined by ``,``.
    """
    return [
        sheet.path,
        "true" if sheet.read_only else "false",
        sheet.title,
        sheet.syntax,
        ",".join(sheet.tags),
    ]


class HookManager:
    """Manages hook creation and execution.

    All hooks are created when the manager is created. Hooks of one event
    run one after another in the order they are configured. The first
    failing hook stops the batch: later hooks may depend on the earlier
    ones, so they are not run.
    """

    def __init__(self, config: Config) -> None:
        """Initialize the hook manager.

        Args:
            config: Application configuration. Its cheatpaths and hooks are
                also exposed to the hooks as environment variables.

        Raises:
            HookPathInvalidError: If a hook path is missing or a directory.
            UnknownEventError: If a hook subscribes to an unknown event.
        """
        self.config = config
        self._hooks: dict[HookEvent, list[Hook]] = {}
        self._create_hooks_from_config()

    def _create_hooks_from_config(self) -> None:
        hooks: dict[HookEvent, list[Hook]] = {}
        for hook_config in self.config.hooks:
            hook = Hook(
                name=hook_config.name,
                path=hook_config.path,
                timeout=hook_config.timeout,
            )
            for event_name in hook_config.events:
                event = name_to_event(event_name)
                hooks.setdefault(event, []).append(hook)
                logger.debug(f"Registered hook '{hook.name}' for {event_name}")
        self._hooks = hooks

    @property
    def hook_count(self) -> int:
        """Number of configured hooks."""
        return len(self.config.hooks)

    def hooks_for(self, event: HookEvent) -> tuple[Hook, ...]:
        """Return the hooks registered for an event in execution order."""
        return tuple(self._hooks.get(event, ()))

    def run(self, event: HookEvent, sheet: Sheet | None = None) -> None:
        """Run all hooks registered for an event.

        Args:
            event: The lifecycle event.
            sheet: The sheet the event is about. Required for sheet events,
                not allowed for the others.

        Raises:
            HookDispatchError: If ``sheet`` does not match the kind of event.
            HookExecutionError: From the first hook that fails. The
                remaining hooks of the batch are not run.
        """
        if event in SHEET_EVENTS and sheet is None:
            raise HookDispatchError(event, "a sheet is required")
        if event not in SHEET_EVENTS and sheet is not None:
            raise HookDispatchError(event, "the event does not take a sheet")

        hooks = self._hooks.get(event)
        if not hooks:
            return

        args = [event_to_name(event)]
        if sheet is not None:
            args.extend(sheet_arguments(sheet))

        env = build_environment(self.config)

        logger.debug(f"Running {len(hooks)} hooks for {event}")
        for hook in hooks:
            hook.execute(args, env)

    def run_on_start_hooks(self) -> None:
        """Run OnStart hooks."""
        self.run(HookEvent.ON_START)

    def run_on_stop_hooks(self) -> None:
        """Run OnStop hooks."""
        self.run(HookEvent.ON_STOP)

    def run_on_sheet_view_pre_hooks(self, sheet: Sheet) -> None:
        self.run(HookEvent.ON_SHEET_VIEW_PRE, sheet)

    def run_on_sheet_view_post_hooks(self, sheet: Sheet) -> None:
        self.run(HookEvent.ON_SHEET_VIEW_POST, sheet)

    def run_on_sheet_edit_pre_hooks(self, sheet: Sheet) -> None:
        self.run(HookEvent.ON_SHEET_EDIT_PRE, sheet)

    def run_on_sheet_edit_post_hooks(self, sheet: Sheet) -> None:
        self.run(HookEvent.ON_SHEET_EDIT_POST, sheet)

    def run_on_sheet_remove_pre_hooks(self, sheet: Sheet) -> None:
        self.run(HookEvent.ON_SHEET_REMOVE_PRE, sheet)

    def run_on_sheet_remove_post_hooks(self, sheet: Sheet) -> None:
        self.run(HookEvent.ON_SHEET_REMOVE_POST, sheet)
