"""Shared fixtures for faking registry HTTP traffic."""

from typing import Any

import httpx
import pytest
from mcp_directory_updater.fetchers.http import create_client


def make_handler(routes: dict[str, tuple[int, Any]], seen: list[httpx.Request] | None = None):
    """Build a MockTransport handler serving ``routes`` keyed by full URL.

    String bodies are sent as plain text, everything else as JSON. Unknown
    URLs get a 404.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        route = routes.get(str(request.url))
        if route is None:
            return httpx.Response(404, json={"message": "Not Found"})
        status, body = route
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)

    return handler


@pytest.fixture
def mock_client():
    """Factory for a production-configured client answering from a route table."""

    def factory(
        routes: dict[str, tuple[int, Any]],
        seen: list[httpx.Request] | None = None,
    ) -> httpx.AsyncClient:
        return create_client(transport=httpx.MockTransport(make_handler(routes, seen)))

    return factory


@pytest.fixture
def sample_html() -> str:
    """A trimmed-down directory page with connector entries and trust data."""
    return """<!DOCTYPE html>
<html>
<body>
<p class="stamp">Current as of January 5, 2026</p>
<script>
const connectors = [
  { name: "Redis", category: "Database", version: "1.0.0", updated: "2025-01" },
  { name: "Jira & Confluence", category: "Productivity", version: "0.9.0", updated: "2024-11" },
  { name: "Docker", category: "DevOps", version: "2.0.0", updated: "2025-02" },
  { name: "Git", category: "Development", version: "0.6.2", updated: "2024-12" },
  { name: "GitHub", category: "Development", version: "0.6.2", updated: "2024-12" },
];
const trustData = {
  "Redis": { stars: "850+", downloads: "Moderate", maintainer: "Anthropic" },
  "Jira & Confluence": { stars: "1.2k", downloads: "Low", maintainer: "Atlassian" },
  "Docker": { stars: "3k", downloads: "High", maintainer: "Docker" },
  "Git": { stars: "40k", downloads: "High" },
  "GitHub": { stars: "20k", downloads: "High" },
};
</script>
</body>
</html>
"""
