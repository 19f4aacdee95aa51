"""Hooks system for cheat.

This module provides a hooks system that allows users to run their own
programs at specific points of the application lifecycle.

Example configuration in conf.yml:

    hooks:
      - name: git-sync
        path: ~/.config/cheat/hooks/git-sync
        events: [OnSheetEditPost, OnSheetRemovePost]

Hook programs receive the event name as their first argument. For sheet
events the sheet path, read-only flag, title, syntax and comma-separated
tags follow. The configuration is exposed through ``CHEAT_CONF_*``
environment variables. A non-zero exit code marks the hook as failed.
"""
from __future__ import annotations

from cheat.core.hooks.environment import build_environment
from cheat.core.hooks.executor import Hook
from cheat.core.hooks.manager import HookManager, sheet_arguments
from cheat.core.hooks.types import (
    SHEET_EVENTS,
    HookDispatchError,
    HookError,
    HookEvent,
    HookExecutionError,
    HookIsDirectoryError,
    HookNotFoundError,
    HookPathInvalidError,
    UnknownEventError,
    event_to_name,
    name_to_event,
)

__all__ = [
    "SHEET_EVENTS",
    "Hook",
    "HookDispatchError",
    "HookError",
    "HookEvent",
    "HookExecutionError",
    "HookIsDirectoryError",
    "HookManager",
    "HookNotFoundError",
    "HookPathInvalidError",
    "UnknownEventError",
    "build_environment",
    "event_to_name",
    "name_to_event",
    "sheet_arguments",
]
