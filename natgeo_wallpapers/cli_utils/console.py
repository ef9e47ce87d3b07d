"""
natgeo-wallpapers console utilities

This module provides application-wide access to Rich Console objects for
writing to stdout and stderr, plus the append-only log file writer used by
the download and wallpaper commands.
"""

from datetime import datetime
from pathlib import Path

from rich.console import Console
from rich.theme import Theme

natgeo_theme = Theme(
    {
        "warning": "orange_red1",
        "fail": "bold red",
        "confirm": "green",
        "describe": "",
        "heading": "bold green",
        "highlight": "yellow",
    }
)

console = Console(theme=natgeo_theme)
error_console = Console(theme=natgeo_theme, stderr=True)

LOG_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


"""
Formatting helpers
"""


def heading(msg: str):
    """
    Print a section banner, e.g. "=== Download Complete ===".
    """

    console.print(f"=== {msg} ===", style="heading")


def warn(msg: str):
    """
    Format msg and print to stderr.
    """

    error_console.print(
        f":exclamation_mark-emoji: [bold]warning: [/] {msg}", style="warning"
    )


def describe(msg: str, **kwargs):
    """
    Format descriptive msg and print to stdout.
    """

    console.print(f"{msg}", style="describe", **kwargs)


def confirm_success(msg: str, **kwargs):
    """
    Format confirmation msg and print to stdout. Accept any additional kwargs that console.print from
    rich module exposes.
    """

    console.print(f":white_check_mark-emoji: {msg}", style="confirm", **kwargs)


def fail(msg: str):
    """
    Format failure msg and print to stderr.
    """

    error_console.print(f":x-emoji: failed. {msg}", style="fail")


def log(msg: str, log_path: Path):
    """
    Append msg to the log file at log_path as a single timestamped line, e.g.

        [2024-01-20 02:00:04] Downloaded photo: ~/Pictures/NationalGeographic/20-01-2024/Sunset.jpg

    The file is opened and closed for every record. Logging is best effort: an
    unwritable log never interrupts the caller.
    """

    timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
    try:
        log_path = Path(log_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        with log_path.open("a", encoding="utf-8") as file:
            file.write(f"[{timestamp}] {msg}\n")

    except OSError:
        pass
