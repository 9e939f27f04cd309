import logging
import subprocess

from sessionizer.errors import ExternalToolError

logger = logging.getLogger(__name__)

# fzf: 1 = no match, 130 = interrupted with ctrl-c / esc
_CANCEL_CODES = {1, 130}


class FzfPicker:
    def __init__(self, command: list[str]) -> None:
        self.command = command

    def pick(self, lines: list[str]) -> str:
        """Run the picker over lines. Returns the chosen line, or "" if cancelled."""
        if not lines:
            logger.debug("Nothing to pick from")
            return ""
        tool = self.command[0]
        try:
            # stdin carries the candidates; fzf draws its UI on /dev/tty
            result = subprocess.run(
                self.command,
                input="\n".join(lines),
                text=True,
                stdout=subprocess.PIPE,
            )
        except FileNotFoundError:
            raise ExternalToolError(tool, "not found. Install it or pass NAME and PATH explicitly.")
        except OSError as e:
            raise ExternalToolError(tool, e.strerror or str(e)) from e

        if result.returncode in _CANCEL_CODES:
            logger.debug("Picker cancelled", extra={"returncode": result.returncode})
            return ""
        if result.returncode != 0:
            raise ExternalToolError(tool, f"exited with status {result.returncode}")
        return result.stdout.strip()
