"""
Wallpaper backends

One backend per desktop environment. The Plasma backend builds a desktop script for
plasmashell, where the photo URI is embedded as a JSON string literal so paths with quotes
or backslashes stay intact.
"""

from __future__ import annotations

from dataclasses import dataclass
import json
from pathlib import Path
import subprocess
from typing import Protocol

from natgeo_wallpapers.desktop.environment import (
    DesktopEnvironment,
    UnsupportedEnvironmentError,
)
from natgeo_wallpapers.desktop.topology import QDBUS_COMMANDS, evaluate_script_command

GNOME_BACKGROUND_SCHEMA = "org.gnome.desktop.background"
GNOME_PICTURE_KEYS = ("picture-uri", "picture-uri-dark")


@dataclass(frozen=True)
class BackendResult:
    ok: bool
    error: str | None = None


class WallpaperBackend(Protocol):
    id: str
    single_target: bool

    def apply(self, photo_path: Path, monitor_index: int) -> BackendResult: ...


def file_uri(photo_path: Path) -> str:
    return f"file://{photo_path}"


def run_command(command: list[str]) -> BackendResult:
    try:
        result = subprocess.run(
            command,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.PIPE,
            check=False,
        )
    except OSError as exc:
        return BackendResult(ok=False, error=str(exc))

    if result.returncode != 0:
        stderr = (result.stderr or b"").decode("utf-8", errors="replace").strip()
        return BackendResult(
            ok=False,
            error=stderr or f"Command failed with exit code {result.returncode}: {command[0]}",
        )
    return BackendResult(ok=True)


def plasma_wallpaper_script(monitor_index: int, photo_path: Path) -> str:
    return (
        "var allDesktops = desktops();\n"
        f"if ({monitor_index} < allDesktops.length) {{\n"
        f"    d = allDesktops[{monitor_index}];\n"
        "    d.wallpaperPlugin = 'org.kde.image';\n"
        "    d.currentConfigGroup = Array('Wallpaper', 'org.kde.image', 'General');\n"
        f"    d.writeConfig('Image', {json.dumps(file_uri(photo_path))});\n"
        "}"
    )


class PlasmaScriptBackend:
    """Per-monitor wallpapers through the plasmashell scripting interface."""

    single_target = False

    def __init__(self, qdbus: str) -> None:
        self.qdbus = qdbus
        self.id = qdbus

    def apply(self, photo_path: Path, monitor_index: int) -> BackendResult:
        script = plasma_wallpaper_script(monitor_index, photo_path)
        return run_command(evaluate_script_command(self.qdbus, script))


class PlasmaApplyBackend:
    id = "plasma-apply-wallpaperimage"
    single_target = True

    def apply(self, photo_path: Path, monitor_index: int) -> BackendResult:
        return run_command(["plasma-apply-wallpaperimage", str(photo_path)])


class GnomeBackend:
    id = "gsettings"
    single_target = True

    def apply(self, photo_path: Path, monitor_index: int) -> BackendResult:
        uri = file_uri(photo_path)
        # light and dark variants
        for key in GNOME_PICTURE_KEYS:
            result = run_command(["gsettings", "set", GNOME_BACKGROUND_SCHEMA, key, uri])
            if not result.ok:
                return result
        return BackendResult(ok=True)


class FehBackend:
    id = "feh"
    single_target = True

    def apply(self, photo_path: Path, monitor_index: int) -> BackendResult:
        return run_command(["feh", "--bg-scale", str(photo_path)])


def backend_for(kind: DesktopEnvironment) -> WallpaperBackend:
    if kind in QDBUS_COMMANDS:
        return PlasmaScriptBackend(QDBUS_COMMANDS[kind])
    if kind is DesktopEnvironment.PLASMA_FALLBACK:
        return PlasmaApplyBackend()
    if kind is DesktopEnvironment.GNOME:
        return GnomeBackend()
    if kind is DesktopEnvironment.FEH:
        return FehBackend()
    raise UnsupportedEnvironmentError("No supported wallpaper tool found")
