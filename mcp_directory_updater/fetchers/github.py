"""GitHub repository lookups for star counts and last push dates."""

import asyncio
import logging

import httpx

from ..formatting import format_stars, year_month
from ..models import RepositoryRecord
from .http import FetchError, fetch, get_field

logger = logging.getLogger(__name__)

# GitHub API endpoint for repository info
GITHUB_API_URL = "https://api.github.com/repos/{repo}"

# Unauthenticated calls share a 60/hour budget, authenticated ones 5000/hour
GITHUB_REQUEST_DELAY = 0.5
GITHUB_AUTH_REQUEST_DELAY = 0.1


def auth_headers(token: str | None) -> dict[str, str]:
    """Authorization header for a GitHub token, if one is configured."""
    if token:
        return {"Authorization": f"token {token}"}
    return {}


async def fetch_github_repository(
    client: httpx.AsyncClient,
    repo: str,
    token: str | None = None,
) -> RepositoryRecord | None:
    """
    Fetch star count and last push date for a repository.

    Args:
        client: HTTP client to use
        repo: Repository in ``owner/repo`` form
        token: Optional GitHub token for higher rate limits

    Returns:
        RepositoryRecord, or None if unavailable
    """
    url = GITHUB_API_URL.format(repo=repo)

    try:
        data = await fetch(client, url, auth_headers(token))
    except FetchError as e:
        if e.status_code == 404:
            logger.warning(f"Repository not found: {repo}")
        elif e.status_code == 403:
            logger.warning(f"GitHub API rate limit hit for {repo}")
        else:
            logger.warning(f"GitHub error for {repo}: {e}")
        return None

    stars = get_field(data, "stargazers_count")
    if not isinstance(stars, int) or stars < 0:
        logger.warning(f"GitHub returned no star count for {repo}")
        return None

    last_pushed = None
    pushed_at = get_field(data, "pushed_at")
    if isinstance(pushed_at, str):
        try:
            last_pushed = year_month(pushed_at)
        except ValueError:
            logger.debug(f"Unparsable pushed_at for {repo}: {pushed_at}")

    logger.debug(f"Fetched {stars} stars for {repo}")
    return RepositoryRecord(
        stars=stars,
        stars_formatted=format_stars(stars),
        last_pushed=last_pushed,
    )


async def fetch_github_repositories(
    client: httpx.AsyncClient,
    repositories: dict[str, list[str]],
    token: str | None = None,
    delay: float | None = None,
) -> dict[str, RepositoryRecord]:
    """Look up every repository in turn and fan results out to its connectors.

    Args:
        client: HTTP client to use
        repositories: ``owner/repo`` -> connector names backed by it
        token: Optional GitHub token
        delay: Seconds to wait after each repository; defaults by token state

    Returns:
        Records keyed by connector name
    """
    if delay is None:
        delay = GITHUB_AUTH_REQUEST_DELAY if token else GITHUB_REQUEST_DELAY

    results: dict[str, RepositoryRecord] = {}

    for repo, names in repositories.items():
        print(f"  {repo}... ", end="", flush=True)
        record = await fetch_github_repository(client, repo, token)
        if record:
            for name in names:
                results[name] = record
            print(f"{record.stars_formatted} stars")
        else:
            print("skipped")
        await asyncio.sleep(delay)

    logger.info(f"Fetched GitHub metadata for {len(results)} connectors")
    return results
