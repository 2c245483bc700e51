"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import List, Tuple

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from switchtube_cli import __version__
from switchtube_cli.api.client import SwitchTubeAPIClient
from switchtube_cli.core.download_manager import DownloadManager
from switchtube_cli.exceptions import SwitchTubeCliError
from switchtube_cli.models.config import DownloadConfig
from switchtube_cli.models.stats import DownloadStats
from switchtube_cli.models.video import DownloadResult
from switchtube_cli.storage.config_manager import ConfigManager
from switchtube_cli.utils.path import is_absolute_url, parse_switchtube_url

from .formatters import (
    format_error_with_suggestions,
    print_config,
    print_failed_videos,
    print_summary_panel,
)
from .progress_manager import ProgressManager

console = Console()

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("switchtube_cli")

app = typer.Typer(
    name="switchtube-cli",
    help=(
        "Download whole channels from SwitchTube. Use 'switchtube-cli"
        " <command> --help' for more info."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


def get_config_dir() -> Path:
    if os.name == "nt":
        base_dir = Path(os.getenv("APPDATA", "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / "switchtube-cli"


CONFIG_DIR = get_config_dir()
CONFIG_FILE = CONFIG_DIR / "config.ini"


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-vv for debug).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
    show_config: bool = typer.Option(
        False, "--show-config", help="Display the current configuration."
    ),
):
    """SwitchTube Downloader CLI"""
    if version:
        console.print(f"[bold]switchtube-cli[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    log_level = "INFO"
    if verbose >= 2:
        log_level = "DEBUG"
    logging.getLogger("switchtube_cli").setLevel(log_level)

    if show_config:
        config_manager = ConfigManager(CONFIG_FILE)
        print_config(CONFIG_FILE, config_manager.get_config_as_dict())
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command()
def init(
    token: str = typer.Argument(
        ...,
        help="Personal access token from your SwitchTube profile.",
        metavar="<TOKEN>",
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite existing credentials without asking."
    ),
):
    """Store the access token in the configuration file."""
    if (
        CONFIG_FILE.exists()
        and not force
        and not typer.confirm(
            "Configuration file already exists. Overwrite the credentials?"
        )
    ):
        raise typer.Abort()

    config_manager = ConfigManager(CONFIG_FILE)
    settings = config_manager.get_config_as_dict()
    settings["token"] = token.strip()
    try:
        config_manager.save_new_config(settings)
    except SwitchTubeCliError as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    console.print(f"\n[bold green]✓ Configuration saved to '{CONFIG_FILE}'[/bold green]")
    console.print(
        "Ready to download! Try: "
        "[cyan]switchtube-cli download https://tube.switch.ch/channels/<ID>[/cyan]"
    )


async def _download_channel(
    config: DownloadConfig, channel_id: str
) -> Tuple[List[DownloadResult], DownloadStats]:
    """Runs a channel download and returns the failed results and the session stats."""
    api_client = SwitchTubeAPIClient(config.token, config.base_url)
    async with api_client:
        if config.show_progress:
            async with ProgressManager(console=console) as progress_manager:
                manager = DownloadManager(config, api_client, progress_manager)
                failed = await manager.download_channel(channel_id)
        else:
            manager = DownloadManager(config, api_client)
            failed = await manager.download_channel(channel_id)
    return failed, manager.stats


@app.command(name="download")
def download_command(
    url: str = typer.Argument(
        ..., help="SwitchTube URL, e.g. https://tube.switch.ch/channels/<ID>."
    ),
    token: str | None = typer.Option(
        None,
        "--token",
        envvar="TOKEN",
        help="Personal access token (overrides the configuration file).",
    ),
    output_dir: str | None = typer.Option(
        None,
        "-o",
        "--output-dir",
        help="Directory to save the videos in (default: current directory).",
    ),
    progress: bool | None = typer.Option(
        None,
        "--progress/--no-progress",
        help="Stream downloads with progress bars, or copy each file in one go.",
    ),
    base_url: str | None = typer.Option(
        None,
        "--base-url",
        help="SwitchTube instance to talk to.",
    ),
):
    """Download every video of a SwitchTube channel."""
    if not is_absolute_url(url):
        raise typer.BadParameter(
            f"'{url}' is not an absolute URL.", param_hint="'URL'"
        )

    url_info = parse_switchtube_url(url)
    if url_info is None:
        console.print("Not supported")
        return
    _, channel_id = url_info

    cli_options = {
        key: value
        for key, value in {
            "token": token,
            "output_dir": output_dir,
            "show_progress": progress,
            "base_url": base_url,
        }.items()
        if value is not None
    }

    try:
        config = ConfigManager(CONFIG_FILE).load_config(cli_options)
        failed, stats = asyncio.run(_download_channel(config, channel_id))
    except SwitchTubeCliError as e:
        console.print(format_error_with_suggestions(e))
        log.debug("Full traceback:", exc_info=True)
        raise typer.Exit(code=1) from e

    print_summary_panel(stats, stats.elapsed)

    if failed:
        print_failed_videos(failed)
        raise typer.Exit(code=1)
