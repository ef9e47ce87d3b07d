"""
Wallpaper planner

Pairs photos with wallpaper targets for a given mode. Only Plasma 6 can target virtual
desktops as well as monitors; every other desktop falls back to per-monitor wallpapers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
import random
from typing import Sequence

from natgeo_wallpapers.desktop.environment import DesktopEnvironment


class NoPhotosError(RuntimeError):
    pass


class WallpaperMode(Enum):
    MONITORS = "monitors"
    VIRTUAL_DESKTOPS = "virtual-desktops"
    BOTH = "both"

    def __str__(self) -> str:
        return self.value


MODE_CHOICES = tuple(mode.value for mode in WallpaperMode)


@dataclass(frozen=True)
class WallpaperAssignment:
    location: str
    photo_path: Path
    is_primary: bool


def select_pool(
    photos: Sequence[Path], randomize: bool, rng: random.Random | None = None
) -> list[Path]:
    if not photos:
        raise NoPhotosError("No photos to choose wallpapers from")

    pool = list(photos)
    if randomize:
        (rng or random).shuffle(pool)
    return pool


def effective_mode(kind: DesktopEnvironment, requested: WallpaperMode) -> WallpaperMode:
    """Only Plasma 6 exposes per-monitor and per-virtual-desktop wallpapers together."""
    if kind is DesktopEnvironment.PLASMA6:
        return requested
    return WallpaperMode.MONITORS


def plan(
    mode: WallpaperMode,
    pool: Sequence[Path],
    monitor_count: int,
    vd_count: int,
) -> list[WallpaperAssignment]:
    """
    Pair every wallpaper target with a photo. Photos are reused cyclically when
    there are more targets than photos; the first target is the primary one.
    """
    if not pool:
        raise NoPhotosError("No photos to choose wallpapers from")

    if mode is WallpaperMode.MONITORS:
        return [
            WallpaperAssignment(f"Monitor {i + 1}", pool[i % len(pool)], i == 0)
            for i in range(monitor_count)
        ]

    if mode is WallpaperMode.VIRTUAL_DESKTOPS:
        return [
            WallpaperAssignment(f"Virtual Desktop {i + 1}", pool[i % len(pool)], i == 0)
            for i in range(vd_count)
        ]

    assignments: list[WallpaperAssignment] = []
    idx = 0
    for vd in range(vd_count):
        for mon in range(monitor_count):
            assignments.append(
                WallpaperAssignment(
                    f"Monitor {mon + 1}, VD {vd + 1}", pool[idx % len(pool)], idx == 0
                )
            )
            idx += 1
    return assignments
