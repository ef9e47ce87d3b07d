"""
conftest.py

Test configuration for CLI and entrypoint tests.

Defines pytest fixtures specifically related to CLI and click operations, plus fakes for the
National Geographic website and the desktop so the commands can run end to end.
"""

import subprocess
from types import SimpleNamespace
import unittest.mock

import pytest
import click

from natgeo_wallpapers.cli import cli
from natgeo_wallpapers.cli_utils import console
from natgeo_wallpapers.cli_utils.utils import import_commands
from natgeo_wallpapers.cli_utils.utils import attach_commands
from natgeo_wallpapers.desktop import DesktopEnvironment, Topology

POD_URL = "https://www.nationalgeographic.com/photo-of-the-day"
IMAGE_URL = "https://i.natgeofe.com/n/5f1c/NationalGeographic_2765583.jpg"
POD_PAGE = (
    '<meta property="og:title" content="Sunset Over the Serengeti"/>'
    f'<meta property="og:image" content="{IMAGE_URL}"/>'
)


@pytest.fixture(scope="session")
def subcommands():
    """
    Import all of the commands found in the /subcommands folder *without*
    invoking the entrypoint (cli).
    """

    return import_commands()


@pytest.fixture(autouse=True)
def setup(subcommands, reset_commands, entry_point: click.Group = cli):
    attach_commands(entry_point, subcommands)

    # keep long tmp paths on one line so output assertions can match them
    console.console.width = 500
    console.error_console.width = 500
    yield
    reset_commands(entry_point=entry_point)


@pytest.fixture
def reset_commands():
    def inner(entry_point: click.Group = cli):
        # teardown the commands that may have been added to clean the test environment.
        entry_point.commands = {}

    return inner


@pytest.fixture
def natgeo_site(make_response, image_bytes):
    """
    Patch requests.get, which the page scraper and the image downloader share. Pages answer with
    the photo of the day markup; everything on i.natgeofe.com answers with a JPEG. Tests change
    the yielded mock to serve other pages or errors.
    """

    def fake_get(url, **kwargs):
        if url.startswith("https://i.natgeofe.com/"):
            return make_response(image_bytes, content_type="image/jpeg", url=url)
        return make_response(POD_PAGE.encode("utf-8"), url=url)

    with unittest.mock.patch("requests.get", side_effect=fake_get) as mock_get:
        yield mock_get


@pytest.fixture
def desktop():
    """
    A KDE Plasma 6 desktop with two monitors and two virtual desktops. Tests adjust
    desktop.classify / desktop.probe / desktop.run to simulate other setups.
    """

    with unittest.mock.patch(
        "natgeo_wallpapers.wallpaper_handler.environment.classify",
        return_value=DesktopEnvironment.PLASMA6,
    ) as classify, unittest.mock.patch(
        "natgeo_wallpapers.wallpaper_handler.topology.probe",
        return_value=Topology(2, 2),
    ) as probe, unittest.mock.patch(
        "natgeo_wallpapers.desktop.backends.subprocess.run",
        return_value=subprocess.CompletedProcess([], 0, stderr=b""),
    ) as run:
        yield SimpleNamespace(classify=classify, probe=probe, run=run)
