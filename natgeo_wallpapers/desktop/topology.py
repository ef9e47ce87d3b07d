"""Monitor and virtual desktop counts, queried from plasmashell over qdbus."""

from __future__ import annotations

from dataclasses import dataclass
import subprocess
from typing import Callable

from natgeo_wallpapers.desktop.environment import DesktopEnvironment

QDBUS_COMMANDS = {
    DesktopEnvironment.PLASMA6: "qdbus6",
    DesktopEnvironment.PLASMA5: "qdbus",
}

MONITOR_COUNT_SCRIPT = "var allDesktops = desktops(); print(allDesktops.length);"

Runner = Callable[..., "subprocess.CompletedProcess[bytes]"]


@dataclass(frozen=True)
class Topology:
    monitor_count: int = 1
    virtual_desktop_count: int = 1


def evaluate_script_command(qdbus: str, script: str) -> list[str]:
    return [
        qdbus,
        "org.kde.plasmashell",
        "/PlasmaShell",
        "org.kde.PlasmaShell.evaluateScript",
        script,
    ]


def _query_count(command: list[str], run: Runner) -> int:
    try:
        result = run(command, stdout=subprocess.PIPE, stderr=subprocess.DEVNULL, check=False)
    except OSError:
        return 1

    try:
        count = int(result.stdout.decode("utf-8").strip())
    except (UnicodeDecodeError, ValueError, AttributeError):
        return 1

    return count if count > 0 else 1


def monitor_count(kind: DesktopEnvironment, run: Runner = subprocess.run) -> int:
    qdbus = QDBUS_COMMANDS.get(kind)
    if qdbus is None:
        return 1
    return _query_count(evaluate_script_command(qdbus, MONITOR_COUNT_SCRIPT), run)


def virtual_desktop_count(kind: DesktopEnvironment, run: Runner = subprocess.run) -> int:
    # Only Plasma 6 supports per-virtual-desktop wallpapers reliably.
    if kind is not DesktopEnvironment.PLASMA6:
        return 1
    command = [
        QDBUS_COMMANDS[kind],
        "org.kde.KWin",
        "/VirtualDesktopManager",
        "org.kde.KWin.VirtualDesktopManager.count",
    ]
    return _query_count(command, run)


def probe(kind: DesktopEnvironment, run: Runner = subprocess.run) -> Topology:
    return Topology(
        monitor_count=monitor_count(kind, run),
        virtual_desktop_count=virtual_desktop_count(kind, run),
    )
