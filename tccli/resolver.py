"""Discovery of service ping endpoints.

The manifest lists the api reference document of every service. Each
reference names its base url and its endpoints; the service's ping url is
the base url followed by the route of the entry called "ping".
"""

import httpx
from loguru import logger
from pydantic import TypeAdapter, ValidationError

from tccli.errors import DecodeError, URLParseError
from tccli.models import APIReference, Manifest, PingURLs
from tccli.utils import fetch_json

PING_ENTRY_NAME = "ping"

_manifest_adapter = TypeAdapter(Manifest)


def fetch_manifest(client: httpx.Client, manifest_url: str) -> Manifest:
    """Fetch the manifest of service api reference urls"""
    data = fetch_json(client, manifest_url)
    try:
        return _manifest_adapter.validate_python(data)
    except ValidationError as e:
        raise DecodeError(
            f"Unexpected manifest format from {manifest_url}: {e}", url=manifest_url, cause=e
        ) from e


def fetch_reference(client: httpx.Client, reference_url: str) -> APIReference:
    """Fetch the api reference of a single service"""
    data = fetch_json(client, reference_url)
    try:
        return APIReference.model_validate(data)
    except ValidationError as e:
        raise DecodeError(
            f"Unexpected api reference format from {reference_url}: {e}",
            url=reference_url,
            cause=e,
        ) from e


def service_name(base_url: str) -> str:
    """Service name is the first label of the base url hostname (queue.example.com -> queue)"""
    try:
        hostname = httpx.URL(base_url).host
    except httpx.InvalidURL as e:
        raise URLParseError(f"Cannot parse base url {base_url!r}: {e}", url=base_url, cause=e) from e
    if not hostname:
        raise URLParseError(f"Base url {base_url!r} has no hostname", url=base_url)
    return hostname.split(".", 1)[0]


def scrape_ping_urls(client: httpx.Client, manifest_url: str) -> PingURLs:
    """Query the manifest and every api reference it lists to build the ping url map.

    Services without a ping entry are left out. Any failure aborts the whole
    scrape, so a partial map is never returned.
    """
    logger.info(f"Scraping ping URLs from {manifest_url}")
    manifest = fetch_manifest(client, manifest_url)

    ping_urls: PingURLs = {}
    for reference_url in manifest.values():
        reference = fetch_reference(client, reference_url)
        entry = reference.find_entry(PING_ENTRY_NAME)
        if entry is None:
            logger.debug(f"No ping endpoint in {reference_url}, skipping")
            continue
        ping_urls[service_name(reference.base_url)] = reference.base_url + entry.route

    logger.info(f"Found {len(ping_urls)} ping URLs")
    return ping_urls
