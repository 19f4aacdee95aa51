"""Type definitions for the hooks system.

Hooks are external programs that cheat runs at specific points of its
lifecycle, similar to git hooks. Every hook subscribes to one or more
events from the closed set defined here.
"""

from __future__ import annotations

from enum import StrEnum


class HookEvent(StrEnum):
    """Events that can trigger hooks.

    The value of each member is the canonical event name. It is the name
    used in the ``events`` list of a configured hook and the first
    positional argument passed to the hook process.
    """

    # Right after the config has been parsed and the hooks are initialized.
    ON_START = "OnStart"
    # Right before the application exits successfully. Not run on failure.
    ON_STOP = "OnStop"

    # The sheet file has already been read; the hook cannot alter the output.
    ON_SHEET_VIEW_PRE = "OnSheetViewPre"
    ON_SHEET_VIEW_POST = "OnSheetViewPost"
    # Runs after a read-only sheet has been copied to a writable cheatpath.
    ON_SHEET_EDIT_PRE = "OnSheetEditPre"
    # Only after the editor closed successfully.
    ON_SHEET_EDIT_POST = "OnSheetEditPost"
    ON_SHEET_REMOVE_PRE = "OnSheetRemovePre"
    # The file is gone, but the sheet metadata is still passed as arguments.
    ON_SHEET_REMOVE_POST = "OnSheetRemovePost"


SHEET_EVENTS: frozenset[HookEvent] = frozenset(
    {
        HookEvent.ON_SHEET_VIEW_PRE,
        HookEvent.ON_SHEET_VIEW_POST,
        HookEvent.ON_SHEET_EDIT_PRE,
        HookEvent.ON_SHEET_EDIT_POST,
        HookEvent.ON_SHEET_REMOVE_PRE,
        HookEvent.ON_SHEET_REMOVE_POST,
    }
)

_EVENTS_BY_NAME: dict[str, HookEvent] = {event.value: event for event in HookEvent}


def name_to_event(name: str) -> HookEvent:
    """Resolve a configured event name to its event.

    The match is exact and case-sensitive.

    Raises:
        UnknownEventError: If no event carries the given name.
    """
    try:
        return _EVENTS_BY_NAME[name]
    except KeyError:
        raise UnknownEventError(name) from None


def event_to_name(event: HookEvent) -> str:
    return event.value


class HookError(Exception):
    """Base class for all hook errors."""


class UnknownEventError(HookError):
    """Raised when a configured event name is not a known event."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'unknown event "{name}"')


class HookPathInvalidError(HookError):
    """Raised when a hook path cannot be used as a hook program."""

    def __init__(self, hook_name: str, path: str, message: str) -> None:
        self.hook_name = hook_name
        self.path = path
        super().__init__(f"Hook '{hook_name}' has an invalid path {path!r}: {message}")


class HookNotFoundError(HookPathInvalidError):
    """Raised when the hook path cannot be stat'ed."""


class HookIsDirectoryError(HookPathInvalidError):
    """Raised when the hook path is a directory."""


class HookDispatchError(HookError):
    """Raised when an event is dispatched with the wrong kind of arguments.

    Sheet events need a sheet, the other events must not get one.
    """

    def __init__(self, event: HookEvent, message: str) -> None:
        self.event = event
        super().__init__(f"cannot dispatch {event}: {message}")


class HookExecutionError(HookError):
    """Raised when a hook process fails.

    ``exit_code`` is ``None`` when the process could not be spawned or was
    killed after a timeout.
    """

    def __init__(
        self,
        hook_name: str,
        path: str,
        message: str,
        exit_code: int | None = None,
        stderr: str | None = None,
        timed_out: bool = False,
    ) -> None:
        self.hook_name = hook_name
        self.path = path
        self.exit_code = exit_code
        self.stderr = stderr
        self.timed_out = timed_out
        super().__init__(f"Hook '{hook_name}' failed: {message}")
