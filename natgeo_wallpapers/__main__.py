"""
__main__.py

This file adds support for running natgeo-wallpapers as a python module instead of invoking the
"natgeo-wallpapers" command line entrypoint, e.g. from the systemd service when the console
script is not on PATH:

    $ python3 -m natgeo_wallpapers set --random
"""

from natgeo_wallpapers.cli import main


if __name__ == "__main__":
    main()
