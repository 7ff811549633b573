"""Ping url cache.

Scraping the ping urls costs one request per service, so the result is kept
in a json file and only refreshed once it is older than the max age. The
cache is all or nothing: a refresh replaces the whole file.
"""

import os
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Optional

import httpx
from loguru import logger
from pydantic import ValidationError

from tccli.errors import (
    CacheDecodeError,
    CacheNotFoundError,
    CacheReadError,
    CacheWriteError,
)
from tccli.models import CachedURLs, PingURLs
from tccli.resolver import scrape_ping_urls


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def is_stale(
    cached: CachedURLs,
    max_age: timedelta,
    now: Optional[datetime] = None
) -> bool:
    """Check if the time since the ping urls were cached is more than max_age"""
    if now is None:
        now = utcnow()
    last_updated = cached.last_updated
    # Naive timestamps are taken to be UTC
    if last_updated.tzinfo is None:
        last_updated = last_updated.replace(tzinfo=timezone.utc)
    return now - last_updated > max_age


def read_cached_urls(path: Path) -> CachedURLs:
    """Load the cache record stored at path"""
    try:
        raw = path.read_bytes()
    except FileNotFoundError as e:
        raise CacheNotFoundError(f"No cache file at {path}", path=path, cause=e) from e
    except OSError as e:
        raise CacheReadError(f"Cannot read cache file {path}: {e}", path=path, cause=e) from e
    try:
        return CachedURLs.model_validate_json(raw.decode("utf-8"))
    except (UnicodeDecodeError, ValidationError) as e:
        raise CacheDecodeError(f"Invalid cache file {path}: {e}", path=path, cause=e) from e


def write_cached_urls(path: Path, ping_urls: PingURLs, now: Optional[datetime] = None) -> CachedURLs:
    """Write ping_urls to path stamped with the current time.

    Replaces the file if it exists already and creates parent folders if
    required. The content goes to a temporary file first and is then renamed
    over the target so readers never see a half written file.
    """
    if now is None:
        now = utcnow()
    logger.info(f"Writing cache file {path}")

    cached = CachedURLs(last_updated=now, ping_urls=dict(ping_urls))
    content = cached.model_dump_json(by_alias=True, indent=2)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except OSError as e:
        raise CacheWriteError(f"Cannot write cache file {path}: {e}", path=path, cause=e) from e
    return cached


class PingURLCache:
    """Ping urls of a manifest, cached in a single file.

    Args:
        path: Location of the cache file
        manifest_url: Manifest to scrape when the cache needs a refresh
        max_age: Cached urls older than this are scraped again
        now: Clock, returns the current (timezone aware) time
    """

    def __init__(
        self,
        path: Path,
        manifest_url: str,
        max_age: timedelta = timedelta(hours=24),
        now: Callable[[], datetime] = utcnow,
    ):
        self.path = Path(path)
        self.manifest_url = manifest_url
        self.max_age = max_age
        self.now = now

    def load(self) -> CachedURLs:
        return read_cached_urls(self.path)

    def persist(self, ping_urls: PingURLs) -> CachedURLs:
        return write_cached_urls(self.path, ping_urls, now=self.now())

    def is_stale(self, cached: CachedURLs) -> bool:
        return is_stale(cached, self.max_age, now=self.now())

    def refresh(self, client: httpx.Client) -> PingURLs:
        """Scrape the manifest and replace the cache file with the result"""
        ping_urls = scrape_ping_urls(client, self.manifest_url)
        return self.persist(ping_urls).ping_urls

    def get_or_refresh(self, client: httpx.Client) -> PingURLs:
        """Return the ping urls, refreshing the cache first if it is missing, unreadable json or stale"""
        try:
            cached = self.load()
        except CacheNotFoundError:
            logger.info(f"No ping URL cache at {self.path}")
            return self.refresh(client)
        except CacheDecodeError as e:
            logger.warning(f"Discarding unusable ping URL cache: {e}")
            return self.refresh(client)

        if self.is_stale(cached):
            logger.info(f"Ping URL cache from {cached.last_updated.isoformat()} is stale")
            return self.refresh(client)
        return cached.ping_urls
