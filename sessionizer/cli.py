import logging
import os
import shutil
import sys
from pathlib import Path

import click

from sessionizer.config import ResolvedConfig, load_config
from sessionizer.constants import CONFIG_ENV_VAR, TMUX_ENV_VAR
from sessionizer.controller import SessionController
from sessionizer.errors import ExternalToolError, SessionizerError
from sessionizer.launcher import Launcher
from sessionizer.models import InvocationMode
from sessionizer.selector import Selector
from sessionizer.services.indexer import FilesystemIndexer, build_depth_spec
from sessionizer.services.picker import FzfPicker
from sessionizer.services.tmux import TmuxControl

logger = logging.getLogger(__name__)


def _check_prerequisites() -> None:
    """Verify tmux is available."""
    if not shutil.which("tmux"):
        raise ExternalToolError("tmux", "not found. Install via: brew install tmux (macOS) or apt install tmux (Linux)")


def _configure_logging(verbose: bool) -> None:
    # stdout is reserved for the candidate list in menu mode
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _print_config(config: ResolvedConfig) -> None:
    click.echo(f"Config: {config.config_path}{'' if config.config_path.exists() else ' (not found, using defaults)'}\n")
    click.echo("[index]")
    for entry in sorted(config.index, key=lambda e: e.depth):
        click.echo(f"  depth {entry.depth}: {', '.join(entry.roots)}")
    click.echo(f"  exclude = {config.exclude}")
    click.echo("\n[bootstrap]")
    for window in config.windows:
        click.echo(f"  {window.name:<8} {window.command or '(shell)'}")
    click.echo("\n[picker]")
    click.echo(f"  command = {' '.join(config.picker_command)}")
    click.echo("\n[launcher]")
    click.echo(f"  terminal     = {' '.join(config.terminal)}")
    click.echo(f"  menu_process = {config.menu_process}")


def _run(args: tuple[str, ...], list_only: bool, config_path: Path | None, show_config: bool) -> None:
    config = load_config(config_path)
    if show_config:
        _print_config(config)
        return

    _check_prerequisites()
    mode = InvocationMode.LIST if list_only else InvocationMode.from_env()
    control = TmuxControl()
    selector = Selector(
        mode,
        registry=control,
        indexer=FilesystemIndexer(build_depth_spec(config.index), config.exclude),
        picker=FzfPicker(config.picker_command),
    )

    if mode is InvocationMode.LIST:
        for candidate in selector.candidates():
            click.echo(candidate)
        return

    target = selector.resolve(args)
    if target.is_cancelled:
        logger.debug("Selection cancelled")
        return

    controller = SessionController(control, config.windows, inside_client=bool(os.environ.get(TMUX_ENV_VAR)))
    command = controller.open(target)
    launcher = Launcher(
        from_menu=mode is InvocationMode.MENU_SELECTION,
        terminal=config.terminal,
        menu_process=config.menu_process,
    )
    launcher.dispatch(command)


@click.command(context_settings={"ignore_unknown_options": True, "help_option_names": ["-h", "--help"]})
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.option("--list", "list_only", is_flag=True, help="Print sessions and project directories, one per line")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar=CONFIG_ENV_VAR,
    default=None,
    help="Config file (default: ~/.config/sessionizer/config.toml)",
)
@click.option("--show-config", is_flag=True, help="Print the resolved configuration and exit")
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
def cli(args: tuple[str, ...], list_only: bool, config_path: Path | None, show_config: bool, verbose: bool) -> None:
    """Switch to a tmux session, or start one in a project directory.

    \b
    sessionizer              pick a project directory with fzf
    sessionizer NAME         attach to NAME, or pick a directory for it
    sessionizer NAME PATH    attach to NAME, creating it in PATH if needed

    Also works as a rofi script: rofi -show p -modi p:sessionizer
    """
    _configure_logging(verbose)
    try:
        _run(args, list_only, config_path, show_config)
    except SessionizerError as e:
        click.echo(f"sessionizer: {e}", err=True)
        raise SystemExit(e.exit_code)
