"""
Download Command

Fetch today's National Geographic Photo of the Day and save it into a dated directory, e.g.
~/Pictures/NationalGeographic/20-01-2024/<title>.jpg. Each download keeps a <title>.log next to
the photo; a page that cannot be fetched is recorded in error.log instead.
"""

import click

from natgeo_wallpapers import image_handler
from natgeo_wallpapers import natgeo_handler
from natgeo_wallpapers.cli_utils.console import *
from natgeo_wallpapers.cli_utils.decorators import catch_errors


@click.command(name="download")
@catch_errors
def cli():
    """
    Download today's National Geographic Photo of the Day.
    """

    heading("National Geographic Photo Downloader")
    describe("")

    save_dir = image_handler.today_directory()
    save_dir.mkdir(parents=True, exist_ok=True)

    describe("Fetching photo information...")
    try:
        photo = natgeo_handler.get_photo_of_the_day()

    except natgeo_handler.PhotoFetchError as error:
        log(f"Failed to fetch photo information: {error}", save_dir / "error.log")
        raise natgeo_handler.PhotoFetchError(f"Failed to fetch photo information: {error}")

    confirm_success(f"Found: {photo.title}")

    title = image_handler.sanitize_title(photo.title)
    log_path = save_dir / f"{title}.log"
    log(f"Starting download for: {photo.title}", log_path)
    log(f"Image URL: {photo.image_url}", log_path)

    describe("Downloading photo...")
    try:
        photo_path = image_handler.download_photo(photo.image_url, save_dir, title, log_path)

    except image_handler.ImageDownloadError as error:
        log(f"Failed to download photo: {error}", log_path)
        raise image_handler.ImageDownloadError(f"Failed to download photo: {error}")

    confirm_success(f"Photo saved to: {photo_path}")
    log(f"Successfully downloaded photo to: {photo_path}", log_path)
    log("Download process completed successfully", log_path)

    describe("")
    heading("Download Complete")

    return photo_path
