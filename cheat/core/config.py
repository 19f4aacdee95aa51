"""Configuration for cheat.

Handles loading ``conf.yml``, filling in defaults and locating the config
file on disk.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict
import yaml

logger = logging.getLogger(__name__)

DEFAULT_STYLE = "bw"
DEFAULT_FORMATTER = "terminal16m"
LOCAL_CHEATPATH_NAME = "cwd"
LOCAL_CHEATPATH_DIRNAME = ".cheat"


class ConfigError(Exception):
    """Raised when the configuration cannot be loaded."""


class Cheatpath(BaseModel):
    """A directory of cheatsheets."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: str
    path: str
    read_only: bool = Field(default=False, alias="readonly")
    tags: list[str] = Field(default_factory=list)

    @field_validator("tags", mode="before")
    @classmethod
    def _null_tags(cls, v: object) -> object:
        return [] if v is None else v


class HookConfig(BaseModel):
    """Configuration for a single hook.

    Attributes:
        name: Name shown in diagnostics. Defaults to the file name of ``path``.
        path: Path of the program to execute.
        events: Names of the events the hook subscribes to. They are
            validated when the hook manager is created, not here.
        timeout: Maximum execution time in seconds. Unbounded when unset.
            On expiry the hook and every process it started are killed.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = ""
    path: str
    events: list[str] = Field(default_factory=list)
    timeout: float | None = Field(default=None, gt=0)

    @field_validator("events", mode="before")
    @classmethod
    def _null_events(cls, v: object) -> object:
        return [] if v is None else v

    @model_validator(mode="after")
    def _default_name(self) -> HookConfig:
        if not self.name:
            self.name = os.path.basename(self.path) or self.path
        return self


class Config(BaseModel):
    """Top-level configuration loaded from ``conf.yml``."""

    model_config = ConfigDict(extra="forbid")

    colorize: bool = False
    editor: str = ""
    cheatpaths: list[Cheatpath] = Field(default_factory=list)
    style: str = ""
    formatter: str = ""
    hooks: list[HookConfig] = Field(default_factory=list)

    # A key left empty in YAML, such as a bare `hooks:`, loads as null.
    @field_validator("cheatpaths", "hooks", mode="before")
    @classmethod
    def _null_lists(cls, v: object) -> object:
        return [] if v is None else v

    @field_validator("editor", "style", "formatter", mode="before")
    @classmethod
    def _null_strings(cls, v: object) -> object:
        return "" if v is None else v


class CheatSettings(BaseSettings):
    """Settings loaded from environment variables"""

    model_config = SettingsConfigDict(env_prefix="CHEAT_", extra="ignore")

    config_path: Path | None = Field(
        default=None, description="Config file location (CHEAT_CONFIG_PATH)"
    )


def default_config_paths() -> list[Path]:
    """Return the locations searched for a config file, in priority order."""
    paths: list[Path] = []
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        paths.append(Path(xdg) / "cheat" / "conf.yml")
    home = Path.home()
    paths.append(home / ".config" / "cheat" / "conf.yml")
    paths.append(home / ".cheat" / "conf.yml")
    return paths


def find_config_path(settings: CheatSettings | None = None) -> Path:
    """Locate the config file.

    ``CHEAT_CONFIG_PATH`` wins over the default locations.

    Raises:
        ConfigError: If no config file can be found.
    """
    settings = settings or CheatSettings()
    if settings.config_path is not None:
        return settings.config_path.expanduser()

    for candidate in default_config_paths():
        if candidate.exists():
            return candidate

    raise ConfigError("could not locate config file")


def load_config(
    config_path: str | Path,
    *,
    resolve: bool = True,
    cwd: Path | None = None,
) -> Config:
    """Load and normalize the configuration.

    Args:
        config_path: The YAML file to read.
        resolve: Follow symlinks in cheatpaths. Resolution fails for paths
            that do not exist, so tests turn it off.
        cwd: Directory searched for a local ``.cheat`` cheatpath.

    Raises:
        ConfigError: If the file cannot be read or parsed, or no editor is
            configured.
    """
    path = Path(config_path)
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"could not read config file: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"could not unmarshal yaml: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"could not unmarshal yaml: expected a mapping in {path}")

    try:
        config = Config.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"invalid config file {path}: {e}") from e

    local = (cwd or Path.cwd()) / LOCAL_CHEATPATH_DIRNAME
    if local.exists():
        config.cheatpaths.append(
            Cheatpath(name=LOCAL_CHEATPATH_NAME, path=str(local), read_only=False)
        )

    for cheatpath in config.cheatpaths:
        expanded = os.path.expanduser(cheatpath.path)
        if resolve:
            try:
                expanded = str(Path(expanded).resolve(strict=True))
            except OSError as e:
                raise ConfigError(
                    f"failed to resolve symlink: {expanded}: {e}"
                ) from e
        cheatpath.path = expanded

    for hook in config.hooks:
        hook.path = os.path.expanduser(hook.path)

    if not config.editor:
        config.editor = os.environ.get("VISUAL") or os.environ.get("EDITOR") or ""
        if not config.editor:
            raise ConfigError("no editor set")

    if not config.style:
        config.style = DEFAULT_STYLE

    if not config.formatter:
        config.formatter = DEFAULT_FORMATTER

    logger.debug(
        f"Loaded config from {path}: {len(config.cheatpaths)} cheatpaths, "
        f"{len(config.hooks)} hooks"
    )
    return config
