import logging

import libtmux
from libtmux.exc import LibTmuxException

from sessionizer.errors import ExternalToolError
from sessionizer.models import WindowSpec

logger = logging.getLogger(__name__)

# libtmux.Server() is cheap, but keep a single instance per process.
_server: libtmux.Server | None = None


def _get_server() -> libtmux.Server:
    global _server
    if _server is None:
        _server = libtmux.Server()
    return _server


def server_running() -> bool:
    """Check whether a tmux server is up for the default socket."""
    return bool(_get_server().is_alive())


def list_sessions() -> list[str]:
    """Names of live tmux sessions, in tmux's order."""
    server = _get_server()
    if not server.is_alive():
        return []
    try:
        return [s.session_name for s in server.sessions]
    except LibTmuxException as e:
        raise ExternalToolError("tmux", str(e)) from e


def has_session(name: str) -> bool:
    """Exact-name check; tmux's own `has-session` would prefix-match."""
    return name in list_sessions()


def create_session(name: str, path: str, windows: list[WindowSpec]) -> None:
    """Create a detached session laid out from the window template.

    The first window comes with the session itself; the others are added in
    order. Windows with a command get it typed into their shell. On any
    failure the partially built session is killed before raising.
    """
    if not windows:
        raise ValueError("window template is empty")
    server = _get_server()
    first, *rest = windows
    try:
        session = server.new_session(
            session_name=name,
            start_directory=path,
            window_name=first.name,
            attach=False,
        )
    except LibTmuxException as e:
        raise ExternalToolError("tmux", f"failed to create session '{name}': {e}") from e

    try:
        if first.command:
            session.active_window.active_pane.send_keys(first.command)
        for spec in rest:
            window = session.new_window(window_name=spec.name, start_directory=path, attach=False)
            if spec.command:
                window.active_pane.send_keys(spec.command)
        session.select_window(first.name)
    except LibTmuxException as e:
        logger.debug("Bootstrap failed, removing partial session", extra={"session": name})
        try:
            session.kill()
        except LibTmuxException:
            logger.debug("Failed to kill partial session", extra={"session": name}, exc_info=True)
        raise ExternalToolError("tmux", f"failed to set up session '{name}': {e}") from e

    logger.info("Created tmux session", extra={"session": name, "path": path, "windows": [w.name for w in windows]})


def attach_argv(name: str, switch: bool) -> list[str]:
    """`=name` makes tmux match the session name exactly instead of by prefix."""
    verb = "switch-client" if switch else "attach-session"
    return ["tmux", verb, "-t", f"={name}"]


class TmuxControl:
    """Session registry and multiplexer control backed by the local tmux server."""

    def list_sessions(self) -> list[str]:
        return list_sessions()

    def server_running(self) -> bool:
        return server_running()

    def has_session(self, name: str) -> bool:
        return has_session(name)

    def create_session(self, name: str, path: str, windows: list[WindowSpec]) -> None:
        create_session(name, path, windows)

    def attach_argv(self, name: str, switch: bool) -> list[str]:
        return attach_argv(name, switch)
