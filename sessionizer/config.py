"""Configuration loading with environment fallbacks.

Reads `~/.config/sessionizer/config.toml` (or the file named by
`SESSIONIZER_CONFIG` / `--config`), validates it, and fills missing values
from the environment and built-in defaults.
"""

import os
import shlex
import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from sessionizer.constants import (
    CONFIG_ENV_VAR,
    CONFIG_PATH,
    DEFAULT_EDITOR,
    DEFAULT_EXCLUDE,
    DEFAULT_MENU_PROCESS,
    DEFAULT_PICKER,
    DEFAULT_SCAN_ROOTS,
    DEFAULT_TERMINAL,
    DEFAULT_WINDOW_NAMES,
)
from sessionizer.errors import ConfigError
from sessionizer.models import WindowSpec


class IndexEntry(BaseModel):
    model_config = ConfigDict(extra="forbid")

    depth: int = Field(ge=0)
    roots: list[str]

    @field_validator("roots")
    @classmethod
    def _roots_absolute(cls, roots: list[str]) -> list[str]:
        expanded = []
        for root in roots:
            path = os.path.expanduser(root)
            if not os.path.isabs(path):
                raise ValueError(f"scan root must be absolute: {root!r}")
            expanded.append(path)
        return expanded


class IndexerConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    exclude: list[str] = []


class BootstrapConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    editor: str = ""
    windows: list[str] = []

    @field_validator("windows")
    @classmethod
    def _unique_names(cls, windows: list[str]) -> list[str]:
        if any(not w.strip() for w in windows):
            raise ValueError("window names must be non-empty")
        if len(set(windows)) != len(windows):
            raise ValueError("window names must be unique")
        return windows


class PickerConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    command: str = ""


class LauncherConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    terminal: str = ""
    menu_process: str = ""


class SZConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    index: list[IndexEntry] = []
    indexer: IndexerConfig = IndexerConfig()
    bootstrap: BootstrapConfig = BootstrapConfig()
    picker: PickerConfig = PickerConfig()
    launcher: LauncherConfig = LauncherConfig()


class ResolvedConfig(BaseModel):
    """Flat config with all values guaranteed filled."""

    config_path: Path
    index: list[IndexEntry]
    exclude: list[str]
    windows: list[WindowSpec]
    picker_command: list[str]
    terminal: list[str]
    menu_process: str


def load_toml(path: Path) -> SZConfig:
    if not path.exists():
        return SZConfig()
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{path}: invalid TOML: {e}") from e
    except OSError as e:
        raise ConfigError(f"{path}: {e.strerror or e}") from e
    try:
        return SZConfig.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        raise ConfigError(f"{path}: {location}: {first['msg']}") from e


def _split_command(value: str, key: str) -> list[str]:
    try:
        argv = shlex.split(value)
    except ValueError as e:
        raise ConfigError(f"{key}: {e}") from e
    if not argv:
        raise ConfigError(f"{key}: command is empty")
    return argv


def _default_terminal() -> str:
    terminal = os.environ.get("TERMINAL", "").strip()
    if terminal:
        return f"{terminal} -e"
    return DEFAULT_TERMINAL


def build_windows(editor: str, names: list[str]) -> list[WindowSpec]:
    """The bootstrap template: the first window runs the editor, the rest are plain shells."""
    return [WindowSpec(name=name, command=editor if i == 0 else "") for i, name in enumerate(names)]


def load_config(config_path: Path | str | None = None) -> ResolvedConfig:
    """Load and resolve configuration.

    Args:
        config_path: Explicit config file. Falls back to $SESSIONIZER_CONFIG,
            then ~/.config/sessionizer/config.toml.
    """
    if config_path is None:
        config_path = os.environ.get(CONFIG_ENV_VAR) or CONFIG_PATH
    path = Path(config_path).expanduser()
    cfg = load_toml(path)

    index = cfg.index or [IndexEntry(depth=d, roots=r) for d, r in DEFAULT_SCAN_ROOTS.items()]
    # a configured editor command is used verbatim; fallbacks open the project root
    editor = cfg.bootstrap.editor or f"{os.environ.get('EDITOR', '').strip() or DEFAULT_EDITOR} ."

    return ResolvedConfig(
        config_path=path,
        index=index,
        exclude=cfg.indexer.exclude or list(DEFAULT_EXCLUDE),
        windows=build_windows(editor, cfg.bootstrap.windows or list(DEFAULT_WINDOW_NAMES)),
        picker_command=_split_command(cfg.picker.command or DEFAULT_PICKER, "picker.command"),
        terminal=_split_command(cfg.launcher.terminal or _default_terminal(), "launcher.terminal"),
        menu_process=cfg.launcher.menu_process or DEFAULT_MENU_PROCESS,
    )
