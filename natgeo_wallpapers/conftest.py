"""
conftest.py

Test configuration for natgeo-wallpapers tests.

Defines Pytest fixtures for supplying test data to tests across the entire
test suite. Fixtures used within only a single module are defined
directly in that module. Conftest.py should only be used for universal
fixtures.

The configuration directory is pointed at a throwaway directory before the
config module is first imported, so running the suite never writes a
config.json into the home directory. Every test additionally gets its own
photo, collection, log and systemd directories under tmp_path.
"""

import os
import tempfile

os.environ["NATGEO_WALLPAPERS_CONFIG_DIR"] = tempfile.mkdtemp(prefix="natgeo-config-")

from pathlib import Path

import pytest
import requests
from PIL import Image

from natgeo_wallpapers.config import config
from natgeo_wallpapers.cli_utils import console as console_module


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """
    Point every directory in the shared config at tmp_path for the duration of a test.
    """

    monkeypatch.setattr(config, "PHOTO_DIR", tmp_path / "photos")
    monkeypatch.setattr(config, "COLLECTION_DIR", tmp_path / "photos" / "collections")
    monkeypatch.setattr(config, "LOG_DIR", tmp_path / "logs")
    monkeypatch.setattr(config, "SYSTEMD_USER_DIR", tmp_path / "systemd")
    yield config

    # --quiet swaps the console file for a junk buffer; restore stdout for the next test.
    console_module.console.file = None


@pytest.fixture
def image_bytes() -> bytes:
    """A small but valid JPEG image as raw bytes."""

    path = Path(tempfile.mkdtemp()) / "image.jpg"
    Image.new("RGB", (64, 48), color=(200, 120, 40)).save(path, "JPEG")
    return path.read_bytes()


@pytest.fixture
def test_image(tmp_path, image_bytes) -> Path:
    """A JPEG image saved in tmp_path."""

    path = tmp_path / "test_image.jpg"
    path.write_bytes(image_bytes)
    return path


@pytest.fixture
def photo_dir(isolated_config, image_bytes) -> Path:
    """
    The configured PHOTO_DIR populated with three days of downloads, oldest to newest:

        18-01-2024/Old_Photo.jpg
        19-01-2024/Middle_Photo.png   (JPEG data; only the suffix matters for searching)
        20-01-2024/Sunset_Over_the_Serengeti.jpg
    """

    base = isolated_config.PHOTO_DIR
    for day, name in (
        ("18-01-2024", "Old_Photo.jpg"),
        ("19-01-2024", "Middle_Photo.png"),
        ("20-01-2024", "Sunset_Over_the_Serengeti.jpg"),
    ):
        directory = base / day
        directory.mkdir(parents=True)
        (directory / name).write_bytes(image_bytes)
        (directory / f"{Path(name).stem}.log").write_text("not a photo\n")

    return base


@pytest.fixture
def make_response():
    """
    Build real requests.Response objects so that raise_for_status, text and headers behave
    exactly like they do on the wire.
    """

    def inner(
        content: bytes = b"",
        status_code: int = 200,
        content_type: str = "text/html",
        url: str = "https://www.nationalgeographic.com/photo-of-the-day",
    ) -> requests.models.Response:
        response = requests.models.Response()
        response.status_code = status_code
        response._content = content
        response.headers["Content-Type"] = content_type
        response.url = url
        response.encoding = "utf-8"
        return response

    return inner
