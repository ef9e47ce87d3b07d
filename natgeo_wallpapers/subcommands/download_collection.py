"""
Download Collection Command

Download every photo from a National Geographic "Best of Photo of the Day" collection page into
its own directory under the collections folder.
"""

import click

from natgeo_wallpapers import image_handler
from natgeo_wallpapers import natgeo_handler
from natgeo_wallpapers.config import config
from natgeo_wallpapers.cli_utils.console import *
from natgeo_wallpapers.cli_utils.decorators import catch_errors


@click.command(name="download-collection")
@click.option(
    "--url",
    "-u",
    required=True,
    type=str,
    help="Collection url, e.g. https://www.nationalgeographic.com/photography/article/best-photos-october-2018",
)
@catch_errors
def cli(url: str):
    """
    Download all photos from a "Best of Photo of the Day" collection.
    """

    heading("National Geographic Collection Downloader")
    describe("")

    if not natgeo_handler.is_natgeo_url(url):
        raise click.BadParameter(
            "must be a National Geographic URL", param_hint="'--url'"
        )

    describe(f"Fetching collection from: {url}\n")

    collection = natgeo_handler.get_collection_photos(url)
    confirm_success(f"Collection: {collection.name}")
    confirm_success(f"Found {len(collection.photos)} photo(s)")

    describe("\n[highlight]Photos in collection:[/]")
    for i, photo in enumerate(collection.photos, start=1):
        describe(f"  {i}. {photo.title}", highlight=False)

    collection_name = natgeo_handler.extract_collection_name_from_url(url)

    describe("\n[highlight]Downloading photos...[/]\n")
    result = image_handler.download_collection(collection, collection_name)

    describe("")
    heading("Download Summary")
    describe(f"  Downloaded: [confirm]{result.downloaded}[/]")
    describe(f"  Skipped (already exist): [highlight]{result.skipped}[/]")
    if result.failed:
        describe(f"  Failed: [fail]{result.failed}[/]")

    describe(f"\nPhotos saved to: [confirm]{config.COLLECTION_DIR / collection_name}[/]")

    return result
