class SessionizerError(Exception):
    """Base error. The CLI prints the message and exits with `exit_code`."""

    exit_code = 1


class ConfigError(SessionizerError):
    exit_code = 1


class InvalidArgumentsError(SessionizerError):
    exit_code = 2


class InvalidTargetStateError(SessionizerError):
    """Raised when a session would have to be created without a usable directory."""

    exit_code = 3


class ExternalToolError(SessionizerError):
    """Raised when tmux, the picker, the terminal or the menu fails or is missing."""

    exit_code = 4

    def __init__(self, tool: str, message: str) -> None:
        self.tool = tool
        super().__init__(f"{tool}: {message}")
