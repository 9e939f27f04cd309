import logging
import os
import subprocess

from sessionizer.errors import ExternalToolError
from sessionizer.models import AttachCommand

logger = logging.getLogger(__name__)


class Launcher:
    """Runs the final attach/switch command where the user can see it.

    From a terminal the command replaces this process. From a graphical menu
    there is no terminal to attach in, so a terminal emulator is spawned to
    run it and the menu is closed.
    """

    def __init__(self, from_menu: bool, terminal: list[str], menu_process: str) -> None:
        self.from_menu = from_menu
        self.terminal = terminal
        self.menu_process = menu_process

    def dispatch(self, command: AttachCommand) -> None:
        if self.from_menu:
            self._spawn_terminal(command.argv)
            self._close_menu()
        else:
            self._exec(command.argv)

    def _exec(self, argv: list[str]) -> None:
        logger.info("Handing over to tmux", extra={"argv": argv})
        try:
            os.execvp(argv[0], argv)
        except OSError as e:
            raise ExternalToolError(argv[0], e.strerror or str(e)) from e

    def _spawn_terminal(self, argv: list[str]) -> None:
        cmd = [*self.terminal, *argv]
        logger.info("Opening terminal", extra={"argv": cmd})
        try:
            subprocess.Popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as e:
            raise ExternalToolError(self.terminal[0], e.strerror or str(e)) from e

    def _close_menu(self) -> None:
        try:
            result = subprocess.run(["pkill", "-x", self.menu_process], check=False)
        except OSError as e:
            raise ExternalToolError("pkill", e.strerror or str(e)) from e
        # 1 means no process matched; the menu may already be gone
        if result.returncode not in (0, 1):
            raise ExternalToolError("pkill", f"could not stop {self.menu_process} (status {result.returncode})")
