"""Command-line entry point for refreshing the MCP directory.

Usage:
    mcp-directory-updater              # dry run, prints changes
    mcp-directory-updater --apply      # writes changes to the HTML file
    GITHUB_TOKEN=ghp_xxx mcp-directory-updater --apply   # higher GitHub rate limits
"""

import argparse
import asyncio
import logging
import sys

import httpx
from pydantic import ValidationError

from .catalog import load_catalog
from .config import UpdaterSettings
from .fetchers import create_client, fetch_github_repositories, fetch_npm_packages
from .formatting import today_formatted
from .models import Catalog, PackageRecord, RepositoryRecord
from .patcher import patch_document
from .reporter import DocumentNotFoundError, read_document, report_changes

logger = logging.getLogger(__name__)


async def collect_metadata(
    client: httpx.AsyncClient,
    catalog: Catalog,
    settings: UpdaterSettings,
) -> tuple[dict[str, PackageRecord], dict[str, RepositoryRecord]]:
    """Fetch npm then GitHub metadata for every catalog entry, one call at a time."""
    print("Fetching npm package metadata...")
    packages = await fetch_npm_packages(client, catalog.packages, delay=settings.npm_delay)

    print("\nFetching GitHub repository data...")
    repositories = await fetch_github_repositories(
        client,
        catalog.repositories,
        token=settings.github_token,
        delay=settings.github_request_delay,
    )
    return packages, repositories


async def run_update(
    settings: UpdaterSettings,
    apply: bool = False,
    client: httpx.AsyncClient | None = None,
    today: str | None = None,
) -> int:
    """
    Run one refresh of the directory document.

    Args:
        settings: Run configuration
        apply: Write the patched document instead of only previewing
        client: HTTP client to reuse; a new one is created when None
        today: Display date for the stamp, defaults to the current date

    Returns:
        Process exit code

    Raises:
        DocumentNotFoundError: If the HTML document does not exist
    """
    today = today or today_formatted()

    print("MCP Directory Auto-Updater")
    print(today)
    print("Mode: APPLY (will write changes)" if apply else "Mode: DRY RUN (preview only)")
    print("")

    text = read_document(settings.html_path)
    catalog = load_catalog(settings.catalog_path)

    if client is None:
        async with create_client(settings.timeout) as owned_client:
            packages, repositories = await collect_metadata(owned_client, catalog, settings)
    else:
        packages, repositories = await collect_metadata(client, catalog, settings)

    print("\nComputing changes...")
    patched, changes = patch_document(
        text,
        packages,
        repositories,
        today,
        package_connectors=catalog.package_connectors(),
    )
    report_changes(changes, settings.html_path, patched, apply=apply)

    print("\nDone.")
    return 0


def parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Refresh versions, stars and download tiers in the MCP directory HTML"
    )
    parser.add_argument(
        "--apply",
        action="store_true",
        help="Write changes to the HTML file (default: dry run)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the updater."""
    args = parse_args(argv)

    try:
        settings = UpdaterSettings.from_env()
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    try:
        return asyncio.run(run_update(settings, apply=args.apply))
    except DocumentNotFoundError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.debug("Update failed", exc_info=True)
        print(f"Fatal error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
