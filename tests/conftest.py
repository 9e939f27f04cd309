from pathlib import Path

import pytest

import sessionizer.services.tmux as _tmux_mod
from sessionizer.config import IndexEntry, ResolvedConfig, build_windows
from sessionizer.models import WindowSpec


@pytest.fixture(autouse=True)
def _reset_tmux_server():
    """Reset the cached libtmux server between tests."""
    _tmux_mod._server = None
    yield
    _tmux_mod._server = None


class FakeRegistry:
    def __init__(self, sessions=None):
        self.sessions = list(sessions or [])
        self.calls = 0

    def list_sessions(self) -> list[str]:
        self.calls += 1
        return list(self.sessions)


class FakeIndexer:
    def __init__(self, directories=None):
        self.directories = list(directories or [])
        self.calls = 0

    def index(self) -> list[str]:
        self.calls += 1
        return list(self.directories)


class FakePicker:
    def __init__(self, choice: str = ""):
        self.choice = choice
        self.offered: list[list[str]] = []

    def pick(self, lines: list[str]) -> str:
        self.offered.append(list(lines))
        return self.choice


class FakeControl:
    """In-memory tmux: tracks sessions and every bootstrap it was asked to run."""

    def __init__(self, sessions=None, running: bool | None = None):
        self.sessions: dict[str, tuple[str, list[WindowSpec]]] = {name: ("", []) for name in sessions or []}
        self._running = running
        self.created: list[tuple[str, str, list[WindowSpec]]] = []

    def list_sessions(self) -> list[str]:
        return list(self.sessions)

    def server_running(self) -> bool:
        if self._running is not None:
            return self._running
        return bool(self.sessions)

    def has_session(self, name: str) -> bool:
        return name in self.sessions

    def create_session(self, name: str, path: str, windows: list[WindowSpec]) -> None:
        self.created.append((name, path, list(windows)))
        self.sessions[name] = (path, list(windows))
        self._running = True

    def attach_argv(self, name: str, switch: bool) -> list[str]:
        return ["tmux", "switch-client" if switch else "attach-session", "-t", f"={name}"]


@pytest.fixture()
def template() -> list[WindowSpec]:
    return build_windows("nvim .", ["code", "bash", "server"])


@pytest.fixture()
def fake_config(tmp_path: Path, template) -> ResolvedConfig:
    projects = tmp_path / "projects"
    projects.mkdir()
    return ResolvedConfig(
        config_path=tmp_path / "config.toml",
        index=[IndexEntry(depth=1, roots=[str(projects)])],
        exclude=[".git", "node_modules"],
        windows=template,
        picker_command=["fzf"],
        terminal=["alacritty", "-e"],
        menu_process="rofi",
    )
