"""Apply a wallpaper plan through a backend and collect one outcome per target."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Sequence

from natgeo_wallpapers.cli_utils.console import log
from natgeo_wallpapers.desktop.backends import WallpaperBackend, backend_for
from natgeo_wallpapers.desktop.environment import DesktopEnvironment
from natgeo_wallpapers.desktop.planner import WallpaperAssignment, WallpaperMode


@dataclass(frozen=True)
class ApplyOutcome:
    location: str
    photo_path: Path
    ok: bool
    error: str | None = None


def monitor_targets(
    assignments: Sequence[WallpaperAssignment],
    mode: WallpaperMode,
    monitor_count: int,
    single_target: bool,
) -> Iterator[tuple[WallpaperAssignment, list[int]]]:
    """Yield each assignment to apply together with the monitor indices it is written to."""
    if single_target:
        if assignments:
            yield assignments[0], [0]
        return

    for i, assignment in enumerate(assignments):
        if mode is WallpaperMode.VIRTUAL_DESKTOPS:
            # the desktop switch itself is KWin's job; write the photo to every monitor
            yield assignment, list(range(monitor_count))
        elif mode is WallpaperMode.BOTH:
            yield assignment, [i % monitor_count]
        else:
            yield assignment, [i]


def apply(
    assignments: Sequence[WallpaperAssignment],
    mode: WallpaperMode,
    kind: DesktopEnvironment,
    monitor_count: int,
    log_path: Path | None = None,
    backend: WallpaperBackend | None = None,
) -> list[ApplyOutcome]:
    """
    Apply every assignment through the backend for kind. A failed target is
    recorded and never stops the remaining ones.
    """
    if backend is None:
        backend = backend_for(kind)

    outcomes: list[ApplyOutcome] = []
    for assignment, monitors in monitor_targets(
        assignments, mode, monitor_count, backend.single_target
    ):
        errors = []
        for monitor_index in monitors:
            result = backend.apply(assignment.photo_path, monitor_index)
            if not result.ok:
                errors.append(result.error or "unknown error")

        if errors:
            outcome = ApplyOutcome(
                assignment.location, assignment.photo_path, ok=False, error="; ".join(errors)
            )
            message = f"Failed to set {assignment.location}: {outcome.error}"
        else:
            outcome = ApplyOutcome(assignment.location, assignment.photo_path, ok=True)
            message = f"Set {assignment.location} to: {assignment.photo_path}"

        if log_path is not None:
            log(message, log_path)
        outcomes.append(outcome)

    return outcomes
