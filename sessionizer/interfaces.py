"""Capabilities the selector and controller depend on.

The real implementations live in `sessionizer.services`; tests substitute
in-memory fakes.
"""

from typing import Protocol, runtime_checkable

from sessionizer.models import WindowSpec


@runtime_checkable
class DirectoryIndexer(Protocol):
    def index(self) -> list[str]:
        """Return sorted, unique absolute directory paths ending in a separator."""
        ...


@runtime_checkable
class SessionRegistry(Protocol):
    def list_sessions(self) -> list[str]:
        """Return names of live sessions, empty when no server is running."""
        ...


@runtime_checkable
class InteractivePicker(Protocol):
    def pick(self, lines: list[str]) -> str:
        """Let the user choose one line. Returns "" when the pick is cancelled."""
        ...


@runtime_checkable
class MultiplexerControl(Protocol):
    def server_running(self) -> bool: ...

    def has_session(self, name: str) -> bool: ...

    def create_session(self, name: str, path: str, windows: list[WindowSpec]) -> None:
        """Create a detached session with one window per spec, all rooted at path.

        Raises:
            ExternalToolError: If any step fails. No partial session is left behind.
        """
        ...

    def attach_argv(self, name: str, switch: bool) -> list[str]:
        """Command line that attaches to (or switches the current client to) a session."""
        ...
