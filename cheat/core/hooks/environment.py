"""Environment passed to hook processes.

The variable names are a public interface: hook scripts read them to
find out about the configured cheatpaths and hooks without parsing the
config file themselves.
"""

from __future__ import annotations

from cheat.core.config import Config

ENV_PREFIX = "CHEAT_CONF_"


def _flag(value: bool) -> str:
    return "true" if value else "false"


def build_environment(config: Config) -> dict[str, str]:
    """Build the ``CHEAT_CONF_*`` variables for a config.

    Cheatpaths and hooks are numbered from 0 in declaration order, e.g.
    ``CHEAT_CONF_CHEATPATHS_0_NAME`` or ``CHEAT_CONF_HOOKS_1_TYPES``.
    """
    env = {
        f"{ENV_PREFIX}EDITOR": config.editor,
        f"{ENV_PREFIX}FORMATTER": config.formatter,
        f"{ENV_PREFIX}STYLE": config.style,
        f"{ENV_PREFIX}CHEATPATHS_COUNT": str(len(config.cheatpaths)),
        f"{ENV_PREFIX}HOOKS_COUNT": str(len(config.hooks)),
    }

    for i, cheatpath in enumerate(config.cheatpaths):
        prefix = f"{ENV_PREFIX}CHEATPATHS_{i}_"
        env[f"{prefix}PATH"] = cheatpath.path
        env[f"{prefix}NAME"] = cheatpath.name
        env[f"{prefix}READONLY"] = _flag(cheatpath.read_only)
        env[f"{prefix}TAGS"] = ",".join(cheatpath.tags)

    for i, hook in enumerate(config.hooks):
        prefix = f"{ENV_PREFIX}HOOKS_{i}_"
        env[f"{prefix}PATH"] = hook.path
        env[f"{prefix}TYPES"] = ",".join(hook.events)

    return env
