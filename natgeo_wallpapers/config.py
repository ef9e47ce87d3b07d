"""
natgeo-wallpapers Configuration Management

This file handles utilities related to generating and loading variables from a configuration file.
NatgeoConfig is loaded at import time so every command can reference the same directories without
touching the filesystem layout directly. Raise a NatgeoConfigError for any issues that arise in
processing or retrieving these configuration variables.

The configuration file is "config.json" and is saved at ~/.config/natgeo-wallpapers/config.json
unless the NATGEO_WALLPAPERS_CONFIG_DIR environment variable points somewhere else.
"""

import json
import os
from dataclasses import dataclass
from dataclasses import asdict
from pathlib import Path, PurePath


CONFIG_DIR_ENV = "NATGEO_WALLPAPERS_CONFIG_DIR"
CONFIG_FILE_NAME = "config.json"

DEFAULT_POD_URL = "https://www.nationalgeographic.com/photo-of-the-day"


class NatgeoConfigError(Exception):
    """Raise when an issue occurs with handling natgeo-wallpapers configuration."""

    pass


class PathEncoder(json.JSONEncoder):
    """
    custom encoder adds support for serializing pathlib objects as strings
    """

    def default(self, o):
        if isinstance(o, PurePath):
            return str(o)

        else:
            return json.JSONEncoder.default(self, o)


@dataclass
class NatgeoConfig:
    """
    Dataclass to represent configuration variables for natgeo-wallpapers. Provides a namespace and
    identifiers for the directories the application reads from and writes to.

    A NatgeoConfig is instantiated by supplying keyword arguments from a deserialized json object,
    so the json object is kept fully flat.
    """

    CONFIG_DIR: Path = Path("~/.config/natgeo-wallpapers").expanduser()
    PHOTO_DIR: Path = Path("~/Pictures/NationalGeographic").expanduser()
    COLLECTION_DIR: Path = PHOTO_DIR / "collections"
    LOG_DIR: Path = Path("~/.local/share/natgeo-wallpapers").expanduser()
    SYSTEMD_USER_DIR: Path = Path("~/.config/systemd/user").expanduser()
    POD_URL: str = DEFAULT_POD_URL
    REQUEST_TIMEOUT: int = 30

    def __post_init__(self):
        """
        Handle the case where a new NatgeoConfig is created from JSON, which cannot
        deserialize a str into a Path.
        """

        self.CONFIG_DIR = Path(self.CONFIG_DIR).expanduser()
        self.PHOTO_DIR = Path(self.PHOTO_DIR).expanduser()
        self.COLLECTION_DIR = Path(self.COLLECTION_DIR).expanduser()
        self.LOG_DIR = Path(self.LOG_DIR).expanduser()
        self.SYSTEMD_USER_DIR = Path(self.SYSTEMD_USER_DIR).expanduser()
        self.REQUEST_TIMEOUT = int(self.REQUEST_TIMEOUT)

    @property
    def wallpaper_log(self) -> Path:
        return self.LOG_DIR / "wallpaper.log"

    def generate_config_json(self) -> Path:
        """
        Write the NatgeoConfig to file, serializing to JSON. Returns filepath of written
        config.json file located at CONFIG_DIR.

        Will overwrite any existing config file.
        """

        try:
            to_json = json.dumps(
                asdict(self), sort_keys=True, indent=4, cls=PathEncoder
            )

        except TypeError as error:
            raise NatgeoConfigError(
                f"There was an error trying to serialize config data to JSON: {error}"
            )

        try:
            self.CONFIG_DIR.mkdir(parents=True, exist_ok=True)
            dest_file = self.CONFIG_DIR / CONFIG_FILE_NAME
            with open(dest_file, "w") as file:
                file.write(to_json)

        except OSError as error:
            raise NatgeoConfigError(
                f"There was an error saving the configuration file: {error}."
            )

        return dest_file


def config_dir() -> Path:
    """
    Directory holding config.json, taken from NATGEO_WALLPAPERS_CONFIG_DIR when it is set.
    """

    try:
        return Path(os.environ[CONFIG_DIR_ENV]).expanduser()

    except KeyError:
        return NatgeoConfig.CONFIG_DIR


def init() -> NatgeoConfig:
    """initialize the natgeo-wallpapers app"""

    try:
        config: NatgeoConfig = load_config()

    except NatgeoConfigError:

        try:
            config = NatgeoConfig(CONFIG_DIR=config_dir())
            config.generate_config_json()

        except NatgeoConfigError as error:
            raise NatgeoConfigError(
                f"There was an issue trying to load config file for natgeo-wallpapers: {error}"
            )

    return config


def load_config() -> NatgeoConfig:
    """
    Load config.json from config_dir() and instantiate variables as a NatgeoConfig dataclass.
    Raise NatgeoConfigError if a config file can't be found or read at that location.
    """

    config_src = config_dir() / CONFIG_FILE_NAME

    try:
        with config_src.open("r") as file:

            from_json = json.loads(file.read())
            config = NatgeoConfig(**from_json)

    except json.JSONDecodeError as error:
        raise NatgeoConfigError(f"There was an issue reading the config: {error}")

    except TypeError as error:
        raise NatgeoConfigError(f"The config contains unexpected values: {error}")

    except OSError as error:
        raise NatgeoConfigError(f"There was an issue opening the config: {error}")

    return config


config = init()
