"""
Desktop environment detection and wallpaper assignment.

classify() -> topology.probe() -> planner.effective_mode() -> planner.plan() -> applier.apply()
"""

from natgeo_wallpapers.desktop.applier import ApplyOutcome, apply
from natgeo_wallpapers.desktop.environment import (
    DesktopEnvironment,
    UnsupportedEnvironmentError,
    classify,
)
from natgeo_wallpapers.desktop.planner import (
    MODE_CHOICES,
    NoPhotosError,
    WallpaperAssignment,
    WallpaperMode,
    effective_mode,
    plan,
    select_pool,
)
from natgeo_wallpapers.desktop.topology import Topology, probe

__all__ = [
    "ApplyOutcome",
    "DesktopEnvironment",
    "MODE_CHOICES",
    "NoPhotosError",
    "Topology",
    "UnsupportedEnvironmentError",
    "WallpaperAssignment",
    "WallpaperMode",
    "apply",
    "classify",
    "effective_mode",
    "plan",
    "probe",
    "select_pool",
]
