"""
Image Handler

Utilities for downloading, validating and locating photos on disk.

Downloading images: supports plain GET requests for image files specified by URL, with no
authentication. Finding the url in the first place is the job of natgeo_handler.

Photos are stored one directory per day, e.g.

    ~/Pictures/NationalGeographic/20-01-2024/Sunset_Over_the_Serengeti.jpg

and collections get a directory of their own under the collections folder. Because the
dated directories sort by path, the photo search below returns the most recent day first.
"""

import io
from dataclasses import dataclass
from datetime import date
from pathlib import Path

import requests
from PIL import Image, UnidentifiedImageError

from natgeo_wallpapers.config import config
from natgeo_wallpapers.cli_utils.console import log
from natgeo_wallpapers.desktop.planner import NoPhotosError
from natgeo_wallpapers.natgeo_handler import BROWSER_USER_AGENT, PhotoCollection


IMAGE_HEADERS = {
    "User-Agent": BROWSER_USER_AGENT,
    "Accept": "image/avif,image/webp,image/apng,image/svg+xml,image/*,*/*;q=0.8",
}

# extensions the downloader writes, and the wider set accepted when searching for photos
SAVED_EXTENSIONS = ("jpg", "png", "gif")
PHOTO_SUFFIXES = {".jpg", ".jpeg", ".png", ".gif"}

# Pillow format names to file extensions
FORMAT_EXTENSIONS = {"JPEG": "jpg", "PNG": "png", "GIF": "gif"}

# skip small thumbnails and icons picked up from collection pages
MIN_PHOTO_SIZE_BYTES = 50_000

MAX_TITLE_LENGTH = 100
DATE_DIR_FORMAT = "%d-%m-%Y"


class InvalidImageError(Exception):
    """
    Raised when a provided binary input is not an image. Wrapper around the PIL
    UnidentifiedImageError for better identification of errors and custom messaging.
    """

    pass


class ImageDownloadError(Exception):
    """
    Raised when an image download is unsuccessful.
    """

    pass


@dataclass
class CollectionDownloadResult:
    downloaded: int = 0
    skipped: int = 0
    failed: int = 0


def sanitize_title(title: str) -> str:
    """
    Turn a photo title into a file name stem: slashes and spaces become underscores,
    colons are dropped, pipes become dashes, and the result is capped at 100 characters.
    """

    sanitized = (
        title.replace("/", "_").replace(" ", "_").replace(":", "").replace("|", "-")
    )
    return sanitized[:MAX_TITLE_LENGTH]


def extension_from_content_type(content_type: str) -> str:
    """
    Map a Content-Type header to a file extension. Raise InvalidImageError for anything that
    is not a jpeg, png or gif.
    """

    if "jpeg" in content_type:
        return "jpg"
    elif "png" in content_type:
        return "png"
    elif "gif" in content_type:
        return "gif"

    raise InvalidImageError(f"Invalid content type: {content_type}")


def validate_image(input) -> str:
    """
    Determine whether input is a valid image and return its format name (e.g. "JPEG").
    Accepts a Path, string, or file object. PIL reads the header to identify the type
    without decoding the whole image, so this is cheap enough to call on every download.
    """

    try:
        with Image.open(input) as image:

            return image.format

    except UnidentifiedImageError:
        raise InvalidImageError(f"Input {str(input)} does not appear to be an image.")

    except FileNotFoundError:
        raise InvalidImageError(f"Input {str(input)} could not be found.")


def find_existing_photo(directory: Path, stem: str) -> Path:
    """
    Return the saved photo called stem.jpg, stem.png or stem.gif in directory, or None.
    """

    for ext in SAVED_EXTENSIONS:
        path = Path(directory) / f"{stem}.{ext}"
        if path.exists():
            return path

    return None


def today_directory(base_dir: Path = None, today: date = None) -> Path:
    """The dated directory for today's photo, e.g. ~/Pictures/NationalGeographic/20-01-2024."""

    base_dir = Path(base_dir) if base_dir else config.PHOTO_DIR
    today = today or date.today()
    return base_dir / today.strftime(DATE_DIR_FORMAT)


def download_photo(url: str, save_dir: Path, title: str, log_path: Path = None) -> Path:
    """
    Download the photo at url into save_dir as <title>.<ext> and return the saved path. The
    title should already be sanitized.

    A photo that was downloaded earlier (same title, any saved extension) is never fetched or
    overwritten again; its existing path is returned instead.

    Raise ImageDownloadError when the request fails, the server answers with an error status,
    or the response body is not an image.
    """

    save_dir = Path(save_dir).expanduser()

    existing = find_existing_photo(save_dir, title)
    if existing is not None:
        if log_path:
            log(f"Photo already exists: {existing}", log_path)
        return existing

    try:
        r = requests.get(url, headers=IMAGE_HEADERS, timeout=config.REQUEST_TIMEOUT)

    except requests.exceptions.RequestException as error:
        raise ImageDownloadError(f"Network error: {error}")

    # successful request but received a bad response from the server.
    try:
        r.raise_for_status()
    except requests.exceptions.HTTPError:
        raise ImageDownloadError(f"Failed to download photo: HTTP {r.status_code}")

    # successful request but did not get back image data as the response.
    try:
        image_format = validate_image(io.BytesIO(r.content))
    except InvalidImageError:
        raise ImageDownloadError(
            f"Download error: the target resource at {url} does not appear to be an image."
        )

    try:
        ext = extension_from_content_type(r.headers.get("Content-Type", ""))
    except InvalidImageError:
        ext = FORMAT_EXTENSIONS.get(image_format, "jpg")

    save_dir.mkdir(parents=True, exist_ok=True)
    destination_path = save_dir / f"{title}.{ext}"
    destination_path.write_bytes(r.content)

    if log_path:
        log(f"Downloaded photo: {destination_path}", log_path)

    return destination_path


def _is_photo(path: Path) -> bool:
    return path.suffix.lower() in PHOTO_SUFFIXES


def find_photos(path: Path = None) -> list[Path]:
    """
    Find photos to use as wallpapers. path may be a single image file or a directory, which is
    searched recursively (default: the PHOTO_DIR from config). Results are absolute paths
    sorted newest first, i.e. by path in reverse order.

    Raise NoPhotosError when the path does not exist, is not a supported image, or holds no photos.
    """

    search_path = Path(path).expanduser() if path else config.PHOTO_DIR

    if not search_path.exists():
        raise NoPhotosError(f"Path not found: {search_path}")

    if search_path.is_file():
        if not _is_photo(search_path):
            raise NoPhotosError(f"Not a supported image file: {search_path}")
        photos = [search_path]

    else:
        photos = [
            file for file in search_path.rglob("*") if file.is_file() and _is_photo(file)
        ]

    if not photos:
        raise NoPhotosError(f"No photos found in {search_path}")

    return sorted((photo.resolve() for photo in photos), reverse=True)


def download_collection(
    collection: PhotoCollection, collection_name: str, base_dir: Path = None
) -> CollectionDownloadResult:
    """
    Download every photo of a collection into <base_dir>/<collection_name>/ (default base: the
    COLLECTION_DIR from config). Photos already on disk are skipped, failures are counted without
    stopping the rest of the collection, and files under MIN_PHOTO_SIZE_BYTES are deleted again
    since those are thumbnails rather than photos.
    """

    base_dir = Path(base_dir) if base_dir else config.COLLECTION_DIR
    save_dir = base_dir / collection_name
    save_dir.mkdir(parents=True, exist_ok=True)

    log_path = save_dir / "collection.log"
    log(f"Starting download of collection: {collection.name}", log_path)
    log(f"Total photos: {len(collection.photos)}", log_path)

    result = CollectionDownloadResult()

    for photo in collection.photos:
        title = sanitize_title(photo.title)

        if find_existing_photo(save_dir, title) is not None:
            result.skipped += 1
            continue

        try:
            file_path = download_photo(photo.image_url, save_dir, title, log_path)

        except ImageDownloadError as error:
            log(f"Failed to download {photo.title}: {error}", log_path)
            result.failed += 1
            continue

        size = file_path.stat().st_size
        if size < MIN_PHOTO_SIZE_BYTES:
            file_path.unlink()
            log(
                f"Removed {title} (too small: {size} bytes, min: {MIN_PHOTO_SIZE_BYTES} bytes)",
                log_path,
            )
            result.skipped += 1
            continue

        result.downloaded += 1

    log(
        f"Collection download complete: {result.downloaded} downloaded, "
        f"{result.skipped} skipped, {result.failed} failed",
        log_path,
    )

    return result
