"""
Set Command

Set downloaded photos as desktop wallpapers. The desktop environment decides what is possible:

    KDE Plasma 6    one photo per monitor, per virtual desktop, or per monitor on every desktop
    KDE Plasma 5    one photo per monitor
    GNOME / feh     one photo for the whole desktop

A mode the desktop cannot honour falls back to "monitors". Targets that fail are reported and
skipped; the command still finishes with the remaining targets applied.
"""

from pathlib import Path

import click
from rich.markup import escape

from natgeo_wallpapers import wallpaper_handler
from natgeo_wallpapers.config import config
from natgeo_wallpapers.desktop import DesktopEnvironment, MODE_CHOICES, WallpaperMode
from natgeo_wallpapers.cli_utils.console import *
from natgeo_wallpapers.cli_utils.decorators import catch_errors


def describe_environment(plan: wallpaper_handler.WallpaperPlan):
    kind = plan.kind
    display = plan.topology

    if kind is DesktopEnvironment.PLASMA6:
        confirm_success(
            f"Detected {kind.label}: {display.monitor_count} monitor(s), "
            f"{display.virtual_desktop_count} virtual desktop(s)"
        )
    elif kind is DesktopEnvironment.PLASMA5:
        confirm_success(f"Detected {kind.label}: {display.monitor_count} monitor(s)")
    elif kind is DesktopEnvironment.PLASMA_FALLBACK:
        warn("Using plasma-apply-wallpaperimage (single wallpaper mode)")
    elif kind is DesktopEnvironment.GNOME:
        confirm_success("Detected GNOME, using gsettings")
    else:
        confirm_success("Using feh for X11")

    if plan.downgraded:
        warn(
            f"'{plan.requested_mode}' mode is not supported on {kind.label}, "
            f"falling back to {plan.mode}"
        )


def describe_assignments(plan: wallpaper_handler.WallpaperPlan):
    describe(f"\nWallpapers needed: {len(plan.assignments)}")
    if plan.reuses_photos:
        warn(f"Only {len(plan.pool)} photos available, will reuse as needed")

    describe("\n[highlight]Wallpaper assignments:[/]")
    for assignment in plan.assignments:
        photo = Path(assignment.photo_path)
        newest = " [highlight](newest)[/]" if assignment.is_primary else ""
        describe(
            f"  {assignment.location}: [confirm]{escape(photo.parent.name)}[/] - {escape(photo.stem)}{newest}",
            highlight=False,
        )


@click.command(name="set")
@click.option(
    "--mode",
    "-m",
    type=click.Choice(MODE_CHOICES),
    default=WallpaperMode.MONITORS.value,
    show_default=True,
    help="Assign photos per monitor, per virtual desktop, or per monitor on every virtual desktop.",
)
@click.option(
    "--lock-screen",
    "-l",
    is_flag=True,
    help="Also set the KDE lock screen wallpaper to the newest photo.",
)
@click.option(
    "--path",
    "-p",
    type=click.Path(path_type=Path),
    default=None,
    help="Photo file or directory to pick wallpapers from. Defaults to the download directory.",
)
@click.option(
    "--random",
    "-r",
    "randomize",
    is_flag=True,
    help="Pick photos in random order instead of newest first.",
)
@catch_errors
def cli(mode: str, lock_screen: bool, path: Path, randomize: bool):
    """
    Set downloaded photos as your desktop wallpaper.
    """

    mode = WallpaperMode(mode)

    heading("National Geographic Wallpaper")
    describe(f"Mode: [highlight]{mode}[/]\n")

    if path:
        confirm_success(f"Using path: {path}")
    if randomize:
        confirm_success("Random selection enabled")

    plan = wallpaper_handler.prepare_wallpapers(mode, path, randomize)
    confirm_success(f"Found {len(plan.pool)} photo(s)\n")

    describe_environment(plan)
    describe_assignments(plan)

    describe("\n[highlight]Applying wallpapers...[/]\n")
    outcomes = wallpaper_handler.apply_wallpapers(plan)

    for outcome in outcomes:
        if outcome.ok:
            describe(f"[confirm]✓[/] {outcome.location}")
        else:
            describe(f"[fail]✗[/] Failed: {outcome.location} - {escape(outcome.error or '')}")

    describe("")
    heading("Completed")
    describe(f"\nLog file: {config.wallpaper_log}")

    if lock_screen:
        describe("\n[highlight]Setting lock screen wallpaper...[/]")
        wallpaper_handler.set_lock_screen_wallpaper(wallpaper_handler.newest_photo(path))
        confirm_success("Lock screen wallpaper set")
        describe("  [highlight]Note: Changes apply on next lock screen activation[/]")

    return outcomes
