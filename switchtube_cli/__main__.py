"""
Console entry point. Runs the Typer app and maps errors that escape it to exit codes.
"""

import asyncio
import logging
import os
import sys

from rich.console import Console

from switchtube_cli.cli.app import app
from switchtube_cli.cli.formatters import format_error_with_suggestions
from switchtube_cli.exceptions import SwitchTubeCliError

log = logging.getLogger("switchtube_cli")

EXIT_FAILURE = 1


def _use_utf8_streams() -> None:
    # Legacy Windows code pages cannot print the ✓/✗ status marks.
    if os.name != "nt":
        return
    for stream in (sys.stdout, sys.stderr):
        reconfigure = getattr(stream, "reconfigure", None)
        if reconfigure is not None:
            reconfigure(encoding="utf-8")


def _report(console: Console, error: Exception, context: dict | None = None) -> None:
    console.print()
    console.print(format_error_with_suggestions(error, context))


def main() -> None:
    _use_utf8_streams()
    console = Console(stderr=True)

    try:
        app()
    except (KeyboardInterrupt, asyncio.CancelledError):
        console.print(
            "\n[yellow]Download interrupted.[/yellow] "
            "Finished videos are kept, partial files are removed."
        )
        sys.exit(0)
    except SwitchTubeCliError as e:
        _report(console, e)
        sys.exit(EXIT_FAILURE)
    except Exception as e:
        log.debug("Unhandled error", exc_info=True)
        _report(console, e, {"type": "Unexpected"})
        sys.exit(EXIT_FAILURE)


if __name__ == "__main__":
    main()
