"""
natgeo-wallpapers CLI Utilities

This module contains utilities for working across Click subcommands, such as importing the
subcommands from the subcommands directory and attaching them to the entry point group.
"""

import sys
import inspect
import importlib.util

from pathlib import Path
from collections.abc import Iterable

import click

import natgeo_wallpapers

from natgeo_wallpapers.cli_utils.console import warn


SUBCOMMAND_PACKAGE = "natgeo_wallpapers.subcommands"


def import_commands(
    module_paths: Iterable = None,
) -> list[click.Command]:
    """
    Retrieve a list of click Commands from module_paths. Default directory is the built in
    subcommands directory.

    A valid command module defines a "cli" function that is wrapped as a click Command object.
    Set the 'name' keyword argument in the @click.command decorator to set the name of the
    command intended for the end user.
    """

    if module_paths is None:
        module_paths = sorted(
            Path(natgeo_wallpapers.__file__).parent.joinpath("subcommands").glob("*.py")
        )

    commands = []

    for path in module_paths:
        name = inspect.getmodulename(path)
        if name != "__init__":

            # Recipe for loading and executing modules from given filepath
            # comes from importlib docs:
            # https://docs.python.org/3/library/importlib.html#importing-a-source-file-directly

            qualified_name = f"{SUBCOMMAND_PACKAGE}.{name}"
            spec = importlib.util.spec_from_file_location(qualified_name, path)
            module = importlib.util.module_from_spec(spec)
            sys.modules[qualified_name] = module
            spec.loader.exec_module(module)

            try:
                cli = getattr(module, "cli")
                commands.append(cli)

            except AttributeError:
                warn(f"Cannot add command {name}: no 'cli' function found.")

    return commands


def attach_commands(group: click.Group, commands: list[click.Command]):
    """
    Attach each command in a list of click Command objects to a provided group. Useful when
    retrieving a dynamic list of subcommands with import_commands().
    """

    for command in commands:
        group.add_command(command)
