"""
Scheduler

Writes and removes the systemd user units that run "download" followed by "set" on a
schedule. Two schedule shapes are supported:

    daily at a fixed time     HH:MM, e.g. 02:00       -> OnCalendar=*-*-* 02:00:00
    repeating interval        e.g. 1h, 30m, 2h30m     -> OnUnitActiveSec=2h30m

The service retries the download-and-set cycle three times, one minute apart, which covers
the network not being up yet right after boot.
"""

import shutil
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path

from natgeo_wallpapers.config import config


UNIT_NAME = "natgeo-wallpaper"
SERVICE_FILE = f"{UNIT_NAME}.service"
TIMER_FILE = f"{UNIT_NAME}.timer"
EXECUTABLE = "natgeo-wallpapers"

DAILY = "daily"
INTERVAL = "interval"


class SchedulerError(Exception):
    """Raised when a schedule is invalid or the systemd units cannot be managed."""

    pass


@dataclass(frozen=True)
class Schedule:
    kind: str
    value: str

    def describe(self) -> str:
        if self.kind == DAILY:
            return f"{self.value} daily"
        return f"every {self.value}"


def is_valid_time(time: str) -> bool:
    """Validate a 24 hour HH:MM time, e.g. 22:45."""

    if len(time) != 5:
        return False

    hour, sep, minute = time.partition(":")
    if not sep or not hour.isdigit() or not minute.isdigit():
        return False

    return int(hour) < 24 and int(minute) < 60


def is_valid_interval(interval: str) -> bool:
    """
    Validate an interval made of <number>h and/or <number>m groups, e.g. 1h, 30m or 2h30m.
    """

    interval = interval.lower()
    if not interval or ("h" not in interval and "m" not in interval):
        return False

    has_value = False
    for char in interval:
        if char.isdigit():
            has_value = True
        elif char in "hm":
            if not has_value:
                return False
            has_value = False
        else:
            return False

    return not has_value


def parse_schedule(text: str) -> Schedule:
    if is_valid_time(text):
        return Schedule(DAILY, text)
    if is_valid_interval(text):
        return Schedule(INTERVAL, text)

    raise SchedulerError(
        f"Invalid time/interval format: {text}. "
        "Use HH:MM for daily time or intervals like 1h, 30m"
    )


def executable_command() -> str:
    """
    Command line the service should run: the installed console script when it is on PATH,
    otherwise the current interpreter running the package as a module.
    """

    script = shutil.which(EXECUTABLE)
    if script:
        return script
    return f"{sys.executable} -m natgeo_wallpapers"


def double_quote(value: str) -> str:
    """
    Quote value for /bin/sh with double quotes. The whole ExecStart script sits inside single
    quotes, so single quotes cannot be used here.
    """

    for char in ("\\", "\"", "$", "`"):
        value = value.replace(char, f"\\{char}")
    return f'"{value}"'


def build_set_args(randomize: bool = False, path: str = None, lock_screen: bool = False) -> str:
    set_args = "set"
    if randomize:
        set_args += " --random"
    if path:
        set_args += f" --path {double_quote(str(path))}"
    if lock_screen:
        set_args += " --lock-screen"
    return set_args


def service_unit(command: str, set_args: str) -> str:
    return f"""[Unit]
Description=Download and set National Geographic Photo of the Day as wallpaper
After=network-online.target network.target
Wants=network-online.target

[Service]
Type=oneshot
ExecStart=/bin/sh -c 'for i in 1 2 3; do {command} download && {command} {set_args} && exit 0 || sleep 60; done; exit 1'
"""


def timer_unit(schedule: Schedule) -> str:
    if schedule.kind == DAILY:
        timing = f"OnCalendar=*-*-* {schedule.value}:00\nOnBootSec=2min"
    else:
        timing = f"OnBootSec=1min\nOnUnitActiveSec={schedule.value}"

    return f"""[Unit]
Description=National Geographic Photo of the Day wallpaper update

[Timer]
{timing}
Persistent=true

[Install]
WantedBy=timers.target
"""


def systemctl(*args: str) -> bool:
    """Run systemctl --user with args and report whether it succeeded."""

    try:
        result = subprocess.run(
            ["systemctl", "--user", *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            check=False,
        )
    except OSError:
        return False

    return result.returncode == 0


def install_timer(schedule: Schedule, set_args: str, unit_dir: Path = None) -> dict:
    """
    Write the service and timer units into unit_dir (default: SYSTEMD_USER_DIR from config),
    reload systemd and enable + start the timer.

    Returns a dict with the written paths and whether enabling and starting succeeded.
    Raise SchedulerError if systemctl is not available.
    """

    if shutil.which("systemctl") is None:
        raise SchedulerError("systemctl not found. This feature requires systemd")

    unit_dir = Path(unit_dir) if unit_dir else config.SYSTEMD_USER_DIR

    try:
        unit_dir.mkdir(parents=True, exist_ok=True)
        service_path = unit_dir / SERVICE_FILE
        service_path.write_text(service_unit(executable_command(), set_args))
        timer_path = unit_dir / TIMER_FILE
        timer_path.write_text(timer_unit(schedule))

    except OSError as error:
        raise SchedulerError(f"Could not write systemd units: {error}")

    systemctl("daemon-reload")
    enabled = systemctl("enable", TIMER_FILE)
    started = systemctl("start", TIMER_FILE)

    return {
        "service": service_path,
        "timer": timer_path,
        "enabled": enabled,
        "started": started,
    }


def uninstall_timer(unit_dir: Path = None) -> list[Path]:
    """
    Stop and disable the timer, delete the unit files that exist and reload systemd.
    Returns the removed paths.
    """

    unit_dir = Path(unit_dir) if unit_dir else config.SYSTEMD_USER_DIR

    systemctl("stop", TIMER_FILE)
    systemctl("disable", TIMER_FILE)

    removed = []
    for name in (SERVICE_FILE, TIMER_FILE):
        path = unit_dir / name
        if path.exists():
            try:
                path.unlink()
            except OSError as error:
                raise SchedulerError(f"Could not remove {path}: {error}")
            removed.append(path)

    systemctl("daemon-reload")

    return removed
