"""Tests for the hook environment."""

from __future__ import annotations

from cheat.core.config import HookConfig
from cheat.core.hooks.environment import build_environment


class TestBuildEnvironment:
    def test_scalar_values(self, make_config) -> None:
        env = build_environment(make_config(editor="nvim", style="monokai"))

        assert env["CHEAT_CONF_EDITOR"] == "nvim"
        assert env["CHEAT_CONF_STYLE"] == "monokai"
        assert env["CHEAT_CONF_FORMATTER"] == "terminal16m"

    def test_cheatpaths(self, make_config) -> None:
        env = build_environment(make_config())

        assert env["CHEAT_CONF_CHEATPATHS_COUNT"] == "2"
        assert env["CHEAT_CONF_CHEATPATHS_0_NAME"] == "community"
        assert env["CHEAT_CONF_CHEATPATHS_0_READONLY"] == "true"
        assert env["CHEAT_CONF_CHEATPATHS_1_NAME"] == "local"
        assert env["CHEAT_CONF_CHEATPATHS_1_READONLY"] == "false"

    def test_cheatpath_tags_do_not_replace_path(self, make_config) -> None:
        env = build_environment(make_config())

        assert env["CHEAT_CONF_CHEATPATHS_0_PATH"] == "/a"
        assert env["CHEAT_CONF_CHEATPATHS_0_TAGS"] == "community"
        assert env["CHEAT_CONF_CHEATPATHS_1_PATH"] == "/b"
        assert env["CHEAT_CONF_CHEATPATHS_1_TAGS"] == ""

    def test_hooks(self, make_config) -> None:
        config = make_config(
            hooks=[
                HookConfig(name="sync", path="/h/sync", events=["OnSheetEditPost", "OnStop"]),
                HookConfig(path="/h/log", events=["OnStart"]),
            ]
        )

        env = build_environment(config)

        assert env["CHEAT_CONF_HOOKS_COUNT"] == "2"
        assert env["CHEAT_CONF_HOOKS_0_PATH"] == "/h/sync"
        assert env["CHEAT_CONF_HOOKS_0_TYPES"] == "OnSheetEditPost,OnStop"
        assert env["CHEAT_CONF_HOOKS_1_PATH"] == "/h/log"
        assert env["CHEAT_CONF_HOOKS_1_TYPES"] == "OnStart"

    def test_empty_config(self, make_config) -> None:
        env = build_environment(make_config(cheatpaths=[]))

        assert env["CHEAT_CONF_CHEATPATHS_COUNT"] == "0"
        assert env["CHEAT_CONF_HOOKS_COUNT"] == "0"
        assert not any(key.startswith("CHEAT_CONF_CHEATPATHS_0") for key in env)

    def test_deterministic(self, make_config) -> None:
        config = make_config(hooks=[HookConfig(path="/h/log", events=["OnStart"])])

        assert build_environment(config) == build_environment(config)

    def test_all_values_are_strings(self, make_config) -> None:
        env = build_environment(make_config())

        assert all(isinstance(value, str) for value in env.values())
