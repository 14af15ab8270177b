"""Fetchers for the npm registry and the GitHub API."""

from .github import fetch_github_repositories, fetch_github_repository
from .http import FetchError, create_client, fetch
from .npm import fetch_npm_package, fetch_npm_packages

__all__ = [
    "FetchError",
    "create_client",
    "fetch",
    "fetch_npm_package",
    "fetch_npm_packages",
    "fetch_github_repository",
    "fetch_github_repositories",
]
