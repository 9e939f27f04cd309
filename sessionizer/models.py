import os
from collections.abc import Mapping
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from sessionizer.constants import MENU_SIGNAL_ENV_VAR
from sessionizer.errors import InvalidArgumentsError, InvalidTargetStateError


class InvocationMode(Enum):
    LIST = "list"
    MENU_SELECTION = "menu_selection"
    DIRECT = "direct"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "InvocationMode":
        """Read the menu script-mode signal. Unset means we were run from a terminal."""
        environ = os.environ if environ is None else environ
        value = environ.get(MENU_SIGNAL_ENV_VAR, "").strip()
        if not value:
            return cls.DIRECT
        if value == "0":
            return cls.LIST
        # 2 is a custom entry typed into the menu instead of picked from the list
        if value in ("1", "2"):
            return cls.MENU_SELECTION
        raise InvalidArgumentsError(f"Unsupported {MENU_SIGNAL_ENV_VAR} value: {value!r}")


def session_name_for(path: str) -> str:
    """Derive a tmux session name from a directory: basename with dots replaced."""
    basename = os.path.basename(path.rstrip(os.sep))
    name = basename.replace(".", "_")
    if not name:
        raise InvalidTargetStateError(f"Cannot derive a session name from path {path!r}")
    return name


class ResolvedTarget(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    path: str = ""

    @classmethod
    def cancelled(cls) -> "ResolvedTarget":
        return cls()

    @classmethod
    def session(cls, name: str) -> "ResolvedTarget":
        return cls(name=name)

    @classmethod
    def for_path(cls, path: str, name: str | None = None) -> "ResolvedTarget":
        return cls(name=name or session_name_for(path), path=path)

    @property
    def is_cancelled(self) -> bool:
        return not self.name and not self.path

    @property
    def is_session_only(self) -> bool:
        return bool(self.name) and not self.path

    @property
    def is_path_bound(self) -> bool:
        return bool(self.path)


class WindowSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    command: str = ""


class AttachCommand(BaseModel):
    session_name: str
    argv: list[str] = Field(default_factory=list)
    switch: bool = False
