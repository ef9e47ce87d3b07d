"""
natgeo-wallpapers Decorators

Decorators shared by the click subcommands. Every subcommand body is wrapped with
@catch_errors so failures surface as a single formatted line and a non-zero exit
status instead of a traceback.

    @click.command(name="download")
    @catch_errors
    def cli():
        '''Download today's photo'''
        ...
"""

import sys
from functools import wraps

import click

from natgeo_wallpapers.cli_utils.console import fail


def catch_errors(func):
    """
    Catch and format errors with the "fail" console template and gracefully
    exit the application with an error code.

    click's own exceptions (usage errors, aborts, explicit exits) pass through
    untouched so click can render them the usual way.
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (click.exceptions.ClickException, click.exceptions.Abort, click.exceptions.Exit):
            raise
        except Exception as error:
            fail(str(error))
            sys.exit(1)

    return wrapper
