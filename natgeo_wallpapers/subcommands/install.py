"""
Install Command

Install (or remove) a systemd user timer that downloads the photo of the day and sets it as the
wallpaper on a schedule. Without --time the schedule is picked from a short menu.
"""

from pathlib import Path

import click

from natgeo_wallpapers import scheduler
from natgeo_wallpapers.scheduler import Schedule
from natgeo_wallpapers.cli_utils.console import *
from natgeo_wallpapers.cli_utils.decorators import catch_errors


SCHEDULE_MENU = """When would you like the wallpaper to update?
  1) Daily at 02:00 (recommended for daily photo)
  2) Every hour (good for random rotation)
  3) Every 30 minutes
  4) Custom time (HH:MM)
  5) Custom interval (e.g., 2h, 15m)
  6) Cancel
"""

PRESET_SCHEDULES = {
    "1": Schedule(scheduler.DAILY, "02:00"),
    "2": Schedule(scheduler.INTERVAL, "1h"),
    "3": Schedule(scheduler.INTERVAL, "30m"),
}


def prompt_for_schedule() -> Schedule:
    """
    Ask for a schedule until a valid one is given. Raise click.Abort when cancelled.
    """

    describe("[highlight]Setting up systemd timer...[/]\n")
    describe(SCHEDULE_MENU, highlight=False)

    while True:
        choice = click.prompt("Enter choice [1-6]", type=str).strip()

        if choice in PRESET_SCHEDULES:
            return PRESET_SCHEDULES[choice]

        if choice == "4":
            time = click.prompt("Enter time (HH:MM, 24-hour format)", type=str).strip()
            if scheduler.is_valid_time(time):
                return Schedule(scheduler.DAILY, time)
            warn("Invalid time format. Use HH:MM (e.g., 22:45)")

        elif choice == "5":
            interval = click.prompt("Enter interval (e.g., 2h, 15m, 1h30m)", type=str).strip()
            if scheduler.is_valid_interval(interval):
                return Schedule(scheduler.INTERVAL, interval)
            warn("Invalid interval format. Use formats like 2h, 15m, 1h30m")

        elif choice == "6":
            warn("Cancelled")
            raise click.Abort()

        else:
            warn("Invalid choice, please enter 1-6")


def uninstall():
    heading("Uninstalling Systemd Timer")
    describe("")

    removed = scheduler.uninstall_timer()
    confirm_success("Stopped and disabled timer")
    for path in removed:
        confirm_success(f"Removed {path}")
    confirm_success("Reloaded systemd daemon")

    describe("")
    heading("Uninstall Complete")


@click.command(name="install")
@click.option(
    "--time",
    "-t",
    "time_arg",
    type=str,
    default=None,
    help="Daily time (HH:MM) or repeating interval (e.g. 1h, 30m). Prompts when omitted.",
)
@click.option("--uninstall", "remove", is_flag=True, help="Remove the installed timer.")
@click.option(
    "--random",
    "-r",
    "randomize",
    is_flag=True,
    help="Pick photos in random order on every run.",
)
@click.option(
    "--path",
    "-p",
    type=click.Path(path_type=Path),
    default=None,
    help="Photo file or directory the timer picks wallpapers from.",
)
@click.option(
    "--lock-screen",
    "-l",
    is_flag=True,
    help="Also update the KDE lock screen wallpaper on every run.",
)
@click.pass_context
@catch_errors
def cli(ctx: click.Context, time_arg: str, remove: bool, randomize: bool, path: Path, lock_screen: bool):
    """
    Install a systemd user timer that updates the wallpaper automatically.
    """

    if remove:
        uninstall()
        return

    if time_arg:
        schedule = scheduler.parse_schedule(time_arg)
    else:
        schedule = prompt_for_schedule()

    heading("Systemd Timer Setup")
    describe("")

    set_args = scheduler.build_set_args(randomize, path, lock_screen)
    installed = scheduler.install_timer(schedule, set_args)

    confirm_success(f"Created {installed['service']}")
    confirm_success(f"Created {installed['timer']}")
    confirm_success("Reloaded systemd daemon")

    if installed["enabled"]:
        confirm_success("Enabled timer")
    else:
        warn("Failed to enable timer")

    if installed["started"]:
        confirm_success("Started timer")
    else:
        warn("Failed to start timer")

    describe("")
    heading("Timer Setup Complete")
    describe(f"\nSchedule: [highlight]{schedule.describe()}[/]")
    if randomize:
        describe("Random selection: [confirm]enabled[/]")
    if path:
        describe(f"Photo path: [confirm]{path}[/]")
    if lock_screen:
        describe("Lock screen: [confirm]enabled[/]")

    describe("\n[highlight]Downloading today's photo and setting wallpaper...[/]\n")

    group = ctx.parent.command
    ctx.invoke(group.get_command(ctx.parent, "download"))
    describe("")
    ctx.invoke(
        group.get_command(ctx.parent, "set"),
        path=path,
        randomize=randomize,
        lock_screen=lock_screen,
    )

    describe("\nUseful commands:")
    describe(
        f"  [confirm]systemctl --user status {scheduler.TIMER_FILE}[/] - Check timer status"
    )
    describe(
        f"  [confirm]journalctl --user -u {scheduler.SERVICE_FILE}[/] - View logs"
    )
    describe("  [confirm]natgeo-wallpapers install --uninstall[/] - Uninstall")
