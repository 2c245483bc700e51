"""
Functions for formatting and displaying data in the console using Rich.
"""

from pathlib import Path
from typing import Any, Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from switchtube_cli.models.stats import DownloadStats
from switchtube_cli.models.video import DownloadResult
from switchtube_cli.utils.formatting import format_duration, format_size


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "AuthenticationError": [
            "• Copy the token again from your SwitchTube profile.",
            "• Make sure no line break or space was pasted along with it.",
        ],
        "ConfigurationError": [
            "• Pass the token with --token or the TOKEN environment variable.",
            "• Or store it once with `switchtube-cli init <TOKEN>`.",
            "• Check the file shown by `switchtube-cli --show-config`.",
        ],
        "ChannelListingError": [
            "• Check that the channel URL is correct and the channel is visible to you.",
            "• Your token may have been revoked. Create a new one.",
            "• SwitchTube might be temporarily unavailable.",
        ],
        "ClientResponseError": [
            "• A network connection issue occurred.",
            "• The SwitchTube API might be temporarily unavailable.",
            "• Please try again in a few minutes.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    suggestion_text = Text("\n".join(suggestions))

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(suggestion_text)

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_config(config_path: Path, config_data: dict[str, Any]):
    """Displays the current configuration, hiding sensitive data."""
    console = Console()
    content = ""
    for key, value in config_data.items():
        if key == "token":
            value = "[hidden]" if value else "(not set)"
        content += f"{key} = {value}\n"

    console.print(
        Panel(
            Text(content.strip()),
            title=f"Configuration ([dim]{config_path}[/dim])",
            border_style="cyan",
        )
    )


def print_summary_panel(stats: DownloadStats, duration_s: float):
    """Displays a final summary of the channel download."""
    console = Console()

    stats_table = Table(show_header=False, box=None, padding=(0, 2))
    stats_table.add_column(style="bold cyan", justify="right", width=16)
    stats_table.add_column(style="white", justify="left")

    stats_table.add_row("Videos:", str(stats.videos_total))
    stats_table.add_row(
        "✓ Downloaded:", f"[bold green]{stats.videos_downloaded}[/bold green]"
    )
    if stats.videos_failed > 0:
        stats_table.add_row("✗ Failed:", f"[bold red]{stats.videos_failed}[/bold red]")

    stats_table.add_row("", "")

    stats_table.add_row(
        "Total Size:", f"[cyan]{format_size(stats.total_size_downloaded)}[/cyan]"
    )
    avg_speed = stats.total_size_downloaded / duration_s if duration_s > 0 else 0
    stats_table.add_row(
        "Avg. Speed:", f"[magenta]{format_size(int(avg_speed))}/s[/magenta]"
    )
    stats_table.add_row("Time Elapsed:", f"[blue]{format_duration(duration_s)}[/blue]")

    border_color = "green" if stats.videos_failed == 0 else "yellow"
    console.print()
    console.print(
        Panel(
            stats_table,
            title="📺 [bold]Download Complete[/bold]",
            border_style=border_color,
            box=box.DOUBLE,
            expand=False,
            padding=(1, 2),
        )
    )
    console.print()


def print_failed_videos(failed: Sequence[DownloadResult]):
    """Lists every video that could not be downloaded, one per line."""
    console = Console()
    console.print("The following videos failed to download:\n", style="bold red")
    for result in failed:
        console.print(
            result.video.display_title, markup=False, highlight=False, soft_wrap=True
        )
