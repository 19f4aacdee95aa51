from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from cheat.core.config import Cheatpath, Config, HookConfig


@pytest.fixture
def call_log(tmp_path: Path) -> Path:
    """File every test hook appends one line per invocation to."""
    return tmp_path / "calls.log"


@pytest.fixture
def make_hook_script(tmp_path: Path, call_log: Path) -> Callable[..., Path]:
    """Create an executable hook script.

    The script records ``<name>|<arg1>|<arg2>...`` in ``call_log``, runs
    ``body`` and exits with ``exit_code``.
    """

    def _make(name: str, exit_code: int = 0, body: str = "") -> Path:
        script = tmp_path / "hooks" / name
        script.parent.mkdir(exist_ok=True)
        script.write_text(
            f"""#!/bin/sh
{{ printf '%s' '{name}'; for a in "$@"; do printf '|%s' "$a"; done; printf '\\n'; }} >> '{call_log}'
{body}
exit {exit_code}
"""
        )
        script.chmod(0o755)
        return script

    return _make


@pytest.fixture
def read_calls(call_log: Path) -> Callable[[], list[list[str]]]:
    """Return the recorded invocations, each split into name and arguments."""

    def _read() -> list[list[str]]:
        if not call_log.exists():
            return []
        return [line.split("|") for line in call_log.read_text().splitlines()]

    return _read


@pytest.fixture
def make_config() -> Callable[..., Config]:
    def _make(hooks: list[HookConfig] | None = None, **kwargs) -> Config:
        defaults = {
            "editor": "vim",
            "style": "bw",
            "formatter": "terminal16m",
            "cheatpaths": [
                Cheatpath(name="community", path="/a", read_only=True, tags=["community"]),
                Cheatpath(name="local", path="/b", read_only=False),
            ],
        }
        defaults.update(kwargs)
        return Config(hooks=hooks or [], **defaults)

    return _make
