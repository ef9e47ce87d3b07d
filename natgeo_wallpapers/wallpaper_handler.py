"""
Wallpaper Handler

This module wires the desktop engine together into the "set wallpapers" operation:

    find photos -> build the photo pool -> detect the desktop environment -> probe monitors and
    virtual desktops -> downgrade the mode to what the environment supports -> plan -> apply

prepare_wallpapers() does everything up to the plan without touching the desktop, so callers
can show the assignments before apply_wallpapers() writes them. Only an unsupported desktop
or an empty photo pool stop the operation; targets that fail to apply are reported in the
returned outcomes and the run still counts as a success.

The KDE lock screen is configured separately through kwriteconfig, see
set_lock_screen_wallpaper().
"""

import subprocess
from dataclasses import dataclass
from pathlib import Path

from natgeo_wallpapers.config import config
from natgeo_wallpapers.cli_utils.console import log
from natgeo_wallpapers.desktop import applier
from natgeo_wallpapers.desktop import environment
from natgeo_wallpapers.desktop import planner
from natgeo_wallpapers.desktop import topology
from natgeo_wallpapers.desktop.environment import DesktopEnvironment
from natgeo_wallpapers.desktop.environment import UnsupportedEnvironmentError
from natgeo_wallpapers.desktop.planner import WallpaperMode
from natgeo_wallpapers.desktop.topology import Topology
from natgeo_wallpapers import image_handler


KWRITECONFIG_COMMANDS = ("kwriteconfig6", "kwriteconfig5")


class WallpaperUpdateError(Exception):
    """
    Raised when an attempt to update a desktop or lock screen wallpaper fails.
    """

    pass


@dataclass
class WallpaperPlan:
    """
    Everything decided before any wallpaper is written: the detected environment, its
    topology, the requested and effective modes, the photo pool and the assignments.
    """

    kind: DesktopEnvironment
    topology: Topology
    requested_mode: WallpaperMode
    mode: WallpaperMode
    pool: list
    assignments: list

    @property
    def downgraded(self) -> bool:
        return self.mode is not self.requested_mode

    @property
    def reuses_photos(self) -> bool:
        return len(self.pool) < len(self.assignments)


def prepare_wallpapers(
    mode: WallpaperMode, path: Path = None, randomize: bool = False
) -> WallpaperPlan:
    """
    Build the WallpaperPlan for the photos at path (default: the PHOTO_DIR from config).

    Raise NoPhotosError when no photos are found and UnsupportedEnvironmentError when no
    wallpaper tool is available on this desktop.
    """

    photos = image_handler.find_photos(path)
    pool = planner.select_pool(photos, randomize)

    kind = environment.classify()
    if kind is DesktopEnvironment.UNKNOWN:
        raise UnsupportedEnvironmentError("No supported wallpaper tool found")

    display = topology.probe(kind)
    mode_in_effect = planner.effective_mode(kind, mode)
    assignments = planner.plan(
        mode_in_effect, pool, display.monitor_count, display.virtual_desktop_count
    )

    return WallpaperPlan(
        kind=kind,
        topology=display,
        requested_mode=mode,
        mode=mode_in_effect,
        pool=pool,
        assignments=assignments,
    )


def apply_wallpapers(plan: WallpaperPlan, log_path: Path = None) -> list:
    """
    Apply a WallpaperPlan and return one ApplyOutcome per applied assignment. Progress is
    appended to the wallpaper log (default: wallpaper.log in the LOG_DIR from config).
    """

    log_path = Path(log_path) if log_path else config.wallpaper_log

    log(f"Starting wallpaper set with mode: {plan.requested_mode}", log_path)
    outcomes = applier.apply(
        plan.assignments,
        plan.mode,
        plan.kind,
        plan.topology.monitor_count,
        log_path=log_path,
    )
    log("Wallpaper setting completed", log_path)

    return outcomes


def set_wallpapers(
    mode: WallpaperMode = WallpaperMode.MONITORS,
    path: Path = None,
    randomize: bool = False,
    log_path: Path = None,
) -> list:
    """Prepare and apply wallpapers in one go."""

    return apply_wallpapers(prepare_wallpapers(mode, path, randomize), log_path)


def set_lock_screen_wallpaper(photo: Path) -> str:
    """
    Point the KDE Plasma lock screen at photo by writing the Greeter wallpaper key of
    kscreenlockerrc. The change is picked up the next time the screen locks. Returns the
    kwriteconfig tool that was used.

    Raise WallpaperUpdateError if kwriteconfig is missing (i.e. not a Plasma desktop) or
    the write fails.
    """

    kwriteconfig = next(
        (cmd for cmd in KWRITECONFIG_COMMANDS if environment.command_exists(cmd)), None
    )
    if kwriteconfig is None:
        raise WallpaperUpdateError("kwriteconfig not found (KDE Plasma required)")

    command = [
        kwriteconfig,
        "--file",
        "kscreenlockerrc",
        "--group",
        "Greeter",
        "--group",
        "Wallpaper",
        "--group",
        "org.kde.image",
        "--group",
        "General",
        "--key",
        "Image",
        f"file://{Path(photo)}",
    ]

    try:
        subprocess.run(
            command,
            check=True,
            text=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )

    except subprocess.CalledProcessError as error:
        raise WallpaperUpdateError(
            f"Failed to set lock screen wallpaper: {(error.stderr or '').strip() or error}"
        )

    except OSError as error:
        raise WallpaperUpdateError(f"Failed to set lock screen wallpaper: {error}")

    return kwriteconfig


def newest_photo(path: Path = None) -> Path:
    """The first photo find_photos() returns, i.e. the most recent download."""

    return image_handler.find_photos(path)[0]
