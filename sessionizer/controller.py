import logging
import os
from enum import Enum

from sessionizer.errors import InvalidTargetStateError
from sessionizer.interfaces import MultiplexerControl
from sessionizer.models import AttachCommand, ResolvedTarget, WindowSpec

logger = logging.getLogger(__name__)


class SessionState(Enum):
    NO_SERVER = "no_server"
    SERVER_RUNNING_NO_SESSION = "server_running_no_session"
    SESSION_EXISTS = "session_exists"


class SessionController:
    """Decides whether a target needs a new session, then how to reach it."""

    def __init__(self, control: MultiplexerControl, windows: list[WindowSpec], inside_client: bool) -> None:
        self.control = control
        self.windows = windows
        self.inside_client = inside_client

    def state_of(self, name: str) -> SessionState:
        running = self.control.server_running()
        exists = self.control.has_session(name)
        if exists:
            return SessionState.SESSION_EXISTS
        if running:
            return SessionState.SERVER_RUNNING_NO_SESSION
        return SessionState.NO_SERVER

    def ensure_session(self, target: ResolvedTarget) -> str:
        """Make sure a session for the target exists and return its name.

        Raises:
            InvalidTargetStateError: The target is empty, or a session has to be
                created but there is no existing directory to root it at.
        """
        if target.is_cancelled or not target.name:
            raise InvalidTargetStateError("no session to open")

        state = self.state_of(target.name)
        logger.debug("Session state", extra={"session": target.name, "state": state.value})
        if state is SessionState.SESSION_EXISTS:
            return target.name

        if not target.path:
            raise InvalidTargetStateError(f"session '{target.name}' does not exist and no directory was chosen")
        if not os.path.isdir(os.path.expanduser(target.path)):
            raise InvalidTargetStateError(f"directory does not exist: {target.path}")

        self.control.create_session(target.name, os.path.expanduser(target.path), self.windows)
        return target.name

    def attach_command(self, name: str) -> AttachCommand:
        return AttachCommand(
            session_name=name,
            argv=self.control.attach_argv(name, switch=self.inside_client),
            switch=self.inside_client,
        )

    def open(self, target: ResolvedTarget) -> AttachCommand:
        return self.attach_command(self.ensure_session(target))
