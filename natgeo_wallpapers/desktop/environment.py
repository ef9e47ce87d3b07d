"""
Desktop environment detection

Works out which wallpaper tool to drive: Plasma 6 or 5 through qdbus when plasmashell is
running, then plasma-apply-wallpaperimage, gsettings and feh, in that order.
"""

from __future__ import annotations

from enum import Enum
import shutil
import subprocess
from typing import Callable, Optional


class UnsupportedEnvironmentError(RuntimeError):
    pass


class DesktopEnvironment(Enum):
    PLASMA6 = "KDE Plasma 6"
    PLASMA5 = "KDE Plasma 5"
    PLASMA_FALLBACK = "plasma-apply-wallpaperimage"
    GNOME = "GNOME"
    FEH = "feh"
    UNKNOWN = "unknown"

    @property
    def label(self) -> str:
        return self.value


PLASMA_SHELL = "plasmashell"

# (environment, required command, required running process); first match wins.
CLASSIFICATION_RULES: tuple[tuple[DesktopEnvironment, str, Optional[str]], ...] = (
    (DesktopEnvironment.PLASMA6, "qdbus6", PLASMA_SHELL),
    (DesktopEnvironment.PLASMA5, "qdbus", PLASMA_SHELL),
    (DesktopEnvironment.PLASMA_FALLBACK, "plasma-apply-wallpaperimage", None),
    (DesktopEnvironment.GNOME, "gsettings", None),
    (DesktopEnvironment.FEH, "feh", None),
)


def command_exists(command: str) -> bool:
    return shutil.which(command) is not None


def process_running(name: str) -> bool:
    try:
        result = subprocess.run(
            ["pgrep", "-x", name],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError:
        return False
    return result.returncode == 0


def classify(
    exists: Callable[[str], bool] = command_exists,
    is_running: Callable[[str], bool] = process_running,
) -> DesktopEnvironment:
    """Return the first environment whose command (and process, if any) is present."""
    running: dict[str, bool] = {}

    for environment, command, process in CLASSIFICATION_RULES:
        if not exists(command):
            continue
        if process is not None:
            if process not in running:
                running[process] = is_running(process)
            if not running[process]:
                continue
        return environment

    return DesktopEnvironment.UNKNOWN
