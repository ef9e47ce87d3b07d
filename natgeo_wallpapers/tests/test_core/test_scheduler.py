"""
Tests for scheduler.py

systemctl is never really invoked: shutil.which and subprocess.run are patched and the unit
files are written into tmp_path.
"""

import subprocess
import unittest.mock

import pytest

from natgeo_wallpapers import scheduler
from natgeo_wallpapers.scheduler import Schedule, SchedulerError


@pytest.mark.parametrize("time", ["00:00", "02:00", "22:45", "23:59"])
def test_valid_times(time):
    assert scheduler.is_valid_time(time)


@pytest.mark.parametrize("time", ["24:00", "12:60", "2:00", "02:000", "ab:cd", "0200", ""])
def test_invalid_times(time):
    assert not scheduler.is_valid_time(time)


@pytest.mark.parametrize("interval", ["1h", "30m", "2h30m", "15M", "1h1h"])
def test_valid_intervals(interval):
    assert scheduler.is_valid_interval(interval)


@pytest.mark.parametrize("interval", ["", "h", "30", "1x", "1h30", "m5", "1.5h"])
def test_invalid_intervals(interval):
    assert not scheduler.is_valid_interval(interval)


def test_parse_schedule():
    assert scheduler.parse_schedule("02:00") == Schedule(scheduler.DAILY, "02:00")
    assert scheduler.parse_schedule("2h") == Schedule(scheduler.INTERVAL, "2h")


def test_parse_schedule_invalid():
    with pytest.raises(SchedulerError, match="Invalid time/interval format: soon"):
        scheduler.parse_schedule("soon")


def test_schedule_describe():
    assert Schedule(scheduler.DAILY, "02:00").describe() == "02:00 daily"
    assert Schedule(scheduler.INTERVAL, "30m").describe() == "every 30m"


def test_build_set_args():
    assert scheduler.build_set_args() == "set"
    assert (
        scheduler.build_set_args(True, "/home/me/My Photos", True)
        == 'set --random --path "/home/me/My Photos" --lock-screen'
    )


def test_service_unit():
    unit = scheduler.service_unit("/usr/bin/natgeo-wallpapers", "set --random")

    assert "Type=oneshot" in unit
    assert "Wants=network-online.target" in unit
    assert (
        "ExecStart=/bin/sh -c 'for i in 1 2 3; do /usr/bin/natgeo-wallpapers download && "
        "/usr/bin/natgeo-wallpapers set --random && exit 0 || sleep 60; done; exit 1'"
    ) in unit


def test_timer_unit_daily():
    unit = scheduler.timer_unit(Schedule(scheduler.DAILY, "02:00"))

    assert "OnCalendar=*-*-* 02:00:00" in unit
    assert "OnBootSec=2min" in unit
    assert "Persistent=true" in unit
    assert "WantedBy=timers.target" in unit


def test_timer_unit_interval():
    unit = scheduler.timer_unit(Schedule(scheduler.INTERVAL, "2h30m"))

    assert "OnBootSec=1min" in unit
    assert "OnUnitActiveSec=2h30m" in unit
    assert "OnCalendar" not in unit


@unittest.mock.patch("natgeo_wallpapers.scheduler.shutil.which", autospec=True)
def test_executable_command_prefers_installed_script(mock_which):
    mock_which.return_value = "/home/me/.local/bin/natgeo-wallpapers"

    assert scheduler.executable_command() == "/home/me/.local/bin/natgeo-wallpapers"


@unittest.mock.patch("natgeo_wallpapers.scheduler.shutil.which", autospec=True)
def test_executable_command_falls_back_to_module(mock_which):
    mock_which.return_value = None

    assert scheduler.executable_command().endswith(" -m natgeo_wallpapers")


@unittest.mock.patch("natgeo_wallpapers.scheduler.subprocess.run", autospec=True)
@unittest.mock.patch("natgeo_wallpapers.scheduler.shutil.which", autospec=True)
def test_install_timer(mock_which, mock_run, tmp_path):
    mock_which.return_value = "/usr/bin/found"
    mock_run.return_value = subprocess.CompletedProcess([], 0)

    installed = scheduler.install_timer(
        Schedule(scheduler.DAILY, "07:30"), "set", unit_dir=tmp_path
    )

    assert installed["service"] == tmp_path / "natgeo-wallpaper.service"
    assert installed["enabled"] and installed["started"]
    assert "OnCalendar=*-*-* 07:30:00" in installed["timer"].read_text()
    assert [call.args[0] for call in mock_run.call_args_list] == [
        ["systemctl", "--user", "daemon-reload"],
        ["systemctl", "--user", "enable", "natgeo-wallpaper.timer"],
        ["systemctl", "--user", "start", "natgeo-wallpaper.timer"],
    ]


@unittest.mock.patch("natgeo_wallpapers.scheduler.subprocess.run", autospec=True)
@unittest.mock.patch("natgeo_wallpapers.scheduler.shutil.which", autospec=True)
def test_install_timer_reports_enable_failure(mock_which, mock_run, tmp_path):
    mock_which.return_value = "/usr/bin/found"
    mock_run.side_effect = lambda command, **kwargs: subprocess.CompletedProcess(
        command, 1 if "enable" in command else 0
    )

    installed = scheduler.install_timer(Schedule(scheduler.INTERVAL, "1h"), "set", tmp_path)

    assert not installed["enabled"]
    assert installed["started"]


@unittest.mock.patch("natgeo_wallpapers.scheduler.shutil.which", autospec=True)
def test_install_timer_without_systemd(mock_which, tmp_path):
    mock_which.return_value = None

    with pytest.raises(SchedulerError, match="requires systemd"):
        scheduler.install_timer(Schedule(scheduler.DAILY, "02:00"), "set", tmp_path)

    assert not (tmp_path / "natgeo-wallpaper.service").exists()


@unittest.mock.patch("natgeo_wallpapers.scheduler.subprocess.run", autospec=True)
def test_uninstall_timer(mock_run, tmp_path):
    mock_run.return_value = subprocess.CompletedProcess([], 0)
    (tmp_path / "natgeo-wallpaper.timer").write_text("[Timer]\n")

    removed = scheduler.uninstall_timer(tmp_path)

    assert removed == [tmp_path / "natgeo-wallpaper.timer"]
    assert not (tmp_path / "natgeo-wallpaper.timer").exists()
    assert [call.args[0][2] for call in mock_run.call_args_list] == [
        "stop",
        "disable",
        "daemon-reload",
    ]


@unittest.mock.patch("natgeo_wallpapers.scheduler.subprocess.run", autospec=True)
def test_uninstall_timer_defaults_to_config_dir(mock_run, isolated_config):
    mock_run.return_value = subprocess.CompletedProcess([], 0)
    isolated_config.SYSTEMD_USER_DIR.mkdir(parents=True)
    (isolated_config.SYSTEMD_USER_DIR / "natgeo-wallpaper.service").write_text("")

    assert scheduler.uninstall_timer() == [
        isolated_config.SYSTEMD_USER_DIR / "natgeo-wallpaper.service"
    ]


def test_double_quote_escapes_shell_characters():
    assert scheduler.double_quote('a "b" $HOME') == '"a \\"b\\" \\$HOME"'
