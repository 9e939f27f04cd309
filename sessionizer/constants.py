from pathlib import Path

CONFIG_PATH = Path.home() / ".config" / "sessionizer" / "config.toml"
CONFIG_ENV_VAR = "SESSIONIZER_CONFIG"

MENU_SIGNAL_ENV_VAR = "ROFI_RETV"
TMUX_ENV_VAR = "TMUX"

DEFAULT_SCAN_ROOTS = {1: ["~/projects"]}
DEFAULT_EXCLUDE = [
    ".git",
    ".hg",
    ".svn",
    "node_modules",
    ".venv",
    "venv",
    "__pycache__",
    ".mypy_cache",
    ".pytest_cache",
    ".tox",
    "*.egg-info",
]

DEFAULT_WINDOW_NAMES = ["code", "bash", "server"]
DEFAULT_EDITOR = "vim"
DEFAULT_PICKER = "fzf"
DEFAULT_TERMINAL = "x-terminal-emulator -e"
DEFAULT_MENU_PROCESS = "rofi"
