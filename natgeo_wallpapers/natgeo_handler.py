"""
National Geographic Photo of the Day - Page Scraper

National Geographic no longer exposes a public JSON API for the Photo of the Day, so this
module requests the HTML pages directly and pulls image urls out of them. Parsing is plain
substring search over the page source: the Open Graph meta tags (og:image, og:title) carry
the photo of the day, and "Best of Photo of the Day" collection pages embed every photo as a
https://i.natgeofe.com/n/<uuid>/<file> url somewhere in the markup or inline JSON.

Downloading the resulting urls is left to image_handler; this module only builds requests
and turns page bodies into PhotoInfo and PhotoCollection values.
"""

from dataclasses import dataclass, field

import requests

from natgeo_wallpapers.config import config
from natgeo_wallpapers.desktop.planner import NoPhotosError


NATGEO_POD_URL = "https://www.nationalgeographic.com/photo-of-the-day"
NATGEO_REFERER = "https://www.nationalgeographic.com/"
NATGEO_IMAGE_CDN = "https://i.natgeofe.com/n/"

BROWSER_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/999.0.0.0 Safari/537.36"
)

HTML_HEADERS = {
    "User-Agent": BROWSER_USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Referer": NATGEO_REFERER,
}

# url path ends at the first of these characters
URL_TERMINATORS = ('"', "'", " ", "?", "\\")
IMAGE_SUFFIXES = (".jpg", ".png", ".gif")
CROP_VARIANTS = ("_16x9", "_3x2", "_4x3", "_2x1", "_2x3", "_3x4", "_square")
COLLECTION_PHOTO_MARKERS = ("best-pod", "best_pod")

MIN_TITLE_LENGTH = 5
DEFAULT_TITLE = "photo-of-the-day"


class PhotoFetchError(Exception):
    """
    Raised when a National Geographic page cannot be retrieved or does not contain
    the expected photo information.
    """

    pass


@dataclass(frozen=True)
class PhotoInfo:
    image_url: str
    title: str


@dataclass(frozen=True)
class PhotoCollection:
    """A "Best of Photo of the Day" page and the photos found on it."""

    name: str
    photos: list[PhotoInfo] = field(default_factory=list)


def fetch_page(url: str) -> str:
    """
    GET an HTML page with browser-like headers and return the body text. Raise PhotoFetchError
    for network failures and non-success status codes.
    """

    try:
        r = requests.get(url, headers=HTML_HEADERS, timeout=config.REQUEST_TIMEOUT)

    except requests.exceptions.RequestException as error:
        raise PhotoFetchError(f"Network error: {error}")

    try:
        r.raise_for_status()
    except requests.exceptions.HTTPError:
        raise PhotoFetchError(f"HTTP {r.status_code}: Failed to fetch {url}")

    return r.text


def extract_meta_content(body: str, meta_property: str) -> str:
    """
    Return the content attribute that follows property="<meta_property>" in body, or the empty
    string. The meta tags on the page are not reliably one per line so this deliberately avoids
    line based parsing.
    """

    _, found, rest = body.partition(f'property="{meta_property}"')
    if not found:
        return ""

    _, found, rest = rest.partition('content="')
    if not found:
        return ""

    return rest.split('"', 1)[0]


def title_from_url(image_url: str, default: str = DEFAULT_TITLE) -> str:
    """File name of the image url without its extension, e.g. NationalGeographic_433254."""

    file_name = image_url.rsplit("/", 1)[-1]
    return file_name.split(".", 1)[0] or default


def is_meaningful_title(title: str) -> bool:
    return len(title) >= MIN_TITLE_LENGTH and title.lower() != "test"


def parse_photo_of_the_day(body: str) -> PhotoInfo:
    """
    Build a PhotoInfo from the photo of the day page. The og:title is used when it looks like a
    real title, otherwise the title falls back to the image file name.
    """

    image_url = extract_meta_content(body, "og:image")
    if not image_url:
        raise PhotoFetchError("Could not extract image URL from page")

    og_title = extract_meta_content(body, "og:title")
    title = og_title if is_meaningful_title(og_title) else title_from_url(image_url)

    return PhotoInfo(image_url=image_url, title=title)


def get_photo_of_the_day(url: str = None) -> PhotoInfo:
    """
    Request the photo of the day page (default: the POD_URL from config) and return its photo.
    """

    return parse_photo_of_the_day(fetch_page(url or config.POD_URL))


def extract_collection_name_from_url(url: str) -> str:
    """
    Last path segment of a collection url, e.g. "best-photos-october-2018". A trailing slash
    gives an empty name.
    """

    return url.split("/")[-1]


def is_collection_photo_filename(file_name: str) -> bool:
    """Collection photos are named like 01-best-pod-october-18 or best_pod_landscapes."""

    lower = file_name.lower()
    return any(marker in lower for marker in COLLECTION_PHOTO_MARKERS)


def extract_image_urls(body: str) -> list[str]:
    """
    Collect every unique i.natgeofe.com image url in body, in the order they first appear.
    Query strings are dropped and cropped variants (_16x9, _square, ...) are skipped in favour
    of the raw image.
    """

    urls = []
    seen = set()

    for part in body.split(NATGEO_IMAGE_CDN)[1:]:
        end = min(
            (part.find(char) for char in URL_TERMINATORS if char in part),
            default=len(part),
        )
        path = part[:end]

        if "/" not in path or not path.lower().endswith(IMAGE_SUFFIXES):
            continue

        if any(variant in path for variant in CROP_VARIANTS):
            continue

        url = f"{NATGEO_IMAGE_CDN}{path}"
        if url not in seen:
            seen.add(url)
            urls.append(url)

    return urls


def parse_collection(body: str, url: str) -> PhotoCollection:
    """
    Build a PhotoCollection from a collection page body. Only photos that follow the collection
    naming pattern are kept; everything else on the page (ads, related stories) is ignored.
    """

    og_title = extract_meta_content(body, "og:title")
    name = og_title if len(og_title) >= MIN_TITLE_LENGTH else extract_collection_name_from_url(url)

    image_urls = extract_image_urls(body)
    if not image_urls:
        raise NoPhotosError(f"No photos found in collection: {url}")

    photos = []
    for image_url in image_urls:
        title = title_from_url(image_url, default="photo")
        if is_collection_photo_filename(title):
            photos.append(PhotoInfo(image_url=image_url, title=title))

    if not photos:
        raise NoPhotosError(
            f"No collection photos found (matching 'best-pod' pattern) in: {url}"
        )

    return PhotoCollection(name=name, photos=photos)


def get_collection_photos(url: str) -> PhotoCollection:
    return parse_collection(fetch_page(url), url)


def is_natgeo_url(url: str) -> bool:
    return "nationalgeographic.com" in url
