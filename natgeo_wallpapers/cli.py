"""
natgeo-wallpapers

Download the National Geographic Photo of the Day and set it as your desktop wallpaper.

This module defines the entry point to the natgeo-wallpapers CLI. It defines a 'cli' command group
that collects the global options; the subcommands themselves live in the subcommands directory and
are attached at startup by main(). Running the group without a subcommand downloads today's photo.
"""

from io import StringIO

import click

from natgeo_wallpapers.cli_utils.decorators import catch_errors
from natgeo_wallpapers.cli_utils.utils import import_commands
from natgeo_wallpapers.cli_utils.utils import attach_commands
from natgeo_wallpapers.cli_utils.console import console


DEFAULT_COMMAND = "download"


@click.group(invoke_without_command=True)
@catch_errors
@click.pass_context
@click.option(
    "--verbose",
    "verbosity",
    flag_value="verbose",
    default=True,
    help="Print all output to stdout or the terminal",
)
@click.option(
    "--quiet",
    "verbosity",
    flag_value="quiet",
    help="Silence all output printed to stdout or the terminal. Errors are still reported.",
)
@click.version_option(package_name="natgeo-wallpapers", prog_name="natgeo-wallpapers")
def cli(ctx: click.Context, verbosity):
    """
    natgeo-wallpapers

    Download the National Geographic Photo of the Day and use it as your desktop wallpaper.


    ====================
    Quickstart
    ====================

    Download today's photo:

        $ natgeo-wallpapers download

    Set the newest photo as wallpaper on every monitor:

        $ natgeo-wallpapers set

    Shuffle your photos across monitors and virtual desktops (KDE Plasma 6):

        $ natgeo-wallpapers set --mode both --random

    Update the wallpaper every day at 02:00 via a systemd user timer:

        $ natgeo-wallpapers install --time 02:00


    ====================
    Help
    ====================

    To see what's available and for detailed help text add --help to the specified command, e.g.

        $ natgeo-wallpapers set --help
    """

    # if verbosity is set to quiet, capture all stdout to a junk stream.
    if verbosity == "quiet":
        console.file = StringIO()

    if ctx.invoked_subcommand is None:
        command = ctx.command.get_command(ctx, DEFAULT_COMMAND)
        if command is None:
            raise click.UsageError(f"No '{DEFAULT_COMMAND}' command available.")
        ctx.invoke(command)


def main():

    commands = import_commands()
    attach_commands(cli, commands)
    cli()


if __name__ == "__main__":
    main()
