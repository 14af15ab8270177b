"""npm registry lookups: latest version, weekly downloads and publish date."""

import asyncio
import logging
from urllib.parse import quote

import httpx

from ..formatting import download_tier, year_month
from ..models import PackageRecord
from .http import FetchError, fetch, get_field

logger = logging.getLogger(__name__)

NPM_REGISTRY_URL = "https://registry.npmjs.org/{package}"
NPM_LATEST_URL = "https://registry.npmjs.org/{package}/latest"
NPM_DOWNLOADS_URL = "https://api.npmjs.org/downloads/point/last-week/{package}"

NPM_REQUEST_DELAY = 0.2


def _encode(package: str) -> str:
    # Scoped names need "@" and "/" escaped to address a single path segment
    return quote(package, safe="")


async def _fetch_weekly_downloads(client: httpx.AsyncClient, package: str) -> int:
    try:
        body = await fetch(client, NPM_DOWNLOADS_URL.format(package=_encode(package)))
    except FetchError as e:
        logger.debug(f"No download count for {package}: {e}")
        return 0

    downloads = get_field(body, "downloads")
    if isinstance(downloads, int) and downloads >= 0:
        return downloads
    return 0


async def _fetch_publish_date(
    client: httpx.AsyncClient, package: str, version: str
) -> str | None:
    """Publish month of one version, read from the full package document."""
    try:
        body = await fetch(client, NPM_REGISTRY_URL.format(package=_encode(package)))
    except FetchError as e:
        logger.debug(f"No publish date for {package}: {e}")
        return None

    times = get_field(body, "time")
    timestamp = get_field(times, version)
    if not isinstance(timestamp, str):
        return None

    try:
        return year_month(timestamp)
    except ValueError:
        logger.debug(f"Unparsable publish time for {package}@{version}: {timestamp}")
        return None


async def fetch_npm_package(client: httpx.AsyncClient, package: str) -> PackageRecord | None:
    """
    Fetch metadata for one npm package.

    The ``/latest`` document gives the version. Download counts and the
    per-version publish time come from two further requests; either of those
    may fail without discarding the version.

    Args:
        client: HTTP client to use
        package: npm package identifier (e.g. ``@modelcontextprotocol/server-git``)

    Returns:
        PackageRecord, or None when the version lookup fails
    """
    try:
        latest = await fetch(client, NPM_LATEST_URL.format(package=_encode(package)))
    except FetchError as e:
        logger.warning(f"npm error for {package}: {e}")
        return None

    version = get_field(latest, "version")
    if not isinstance(version, str) or not version:
        logger.warning(f"npm returned no version for {package}")
        return None

    downloads = await _fetch_weekly_downloads(client, package)
    publish_date = await _fetch_publish_date(client, package, version)

    return PackageRecord(
        version=version,
        publish_date=publish_date,
        weekly_downloads=downloads,
        download_tier=download_tier(downloads),
    )


async def fetch_npm_packages(
    client: httpx.AsyncClient,
    packages: dict[str, str],
    delay: float = NPM_REQUEST_DELAY,
) -> dict[str, PackageRecord]:
    """Look up every package in turn, keyed by connector name.

    Args:
        client: HTTP client to use
        packages: npm package id -> connector name
        delay: Seconds to wait after each package

    Returns:
        Records for the packages that could be fetched
    """
    results: dict[str, PackageRecord] = {}

    for package, name in packages.items():
        print(f"  {name}... ", end="", flush=True)
        record = await fetch_npm_package(client, package)
        if record:
            results[name] = record
            print(f"v{record.version} ({record.download_tier.value} downloads)")
        else:
            print("skipped")
        await asyncio.sleep(delay)

    logger.info(f"Fetched npm metadata for {len(results)}/{len(packages)} packages")
    return results
