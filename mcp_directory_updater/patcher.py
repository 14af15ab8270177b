"""Scoped search-and-replace of connector metadata inside the directory HTML.

The directory page keeps its data in two JavaScript literals:

- connector entries: ``{ name: "Redis", ..., version: "1.0.0", updated: "2025-01" }``
- trust data: ``"Redis": { stars: "12k", downloads: "High", ... }``

A field is found by locating the connector's name token and scanning forward
up to the next closing brace for ``<field>: "<value>"``. Only the captured
value is rewritten; every other byte of the document is left as is.
"""

import logging
import re
from collections.abc import Iterable

from .models import Change, PackageRecord, RepositoryRecord

logger = logging.getLogger(__name__)

DATE_STAMP_PATTERN = re.compile(r"Current as of [A-Z][a-z]+ \d{1,2}, \d{4}")


def entry_field_pattern(name: str, field: str) -> re.Pattern[str]:
    """Pattern for ``name: "<name>" ... <field>: "<value>"`` in a connector entry."""
    return re.compile(
        r'name:\s*"' + re.escape(name) + r'"[^}]*' + re.escape(field) + r':\s*"([^"]+)"'
    )


def trust_field_pattern(name: str, field: str) -> re.Pattern[str]:
    """Pattern for ``"<name>": { ... <field>: "<value>"`` in the trust data."""
    return re.compile(
        r'"' + re.escape(name) + r'":\s*\{[^}]*' + re.escape(field) + r':\s*"([^"]+)"'
    )


def replace_field(
    text: str,
    pattern: re.Pattern[str],
    name: str,
    field: str,
    new: str,
) -> tuple[str, Change | None]:
    """Rewrite the value captured by ``pattern`` if it differs from ``new``.

    A missing field is skipped. Several matches holding different values are
    treated as ambiguous and skipped too.

    Returns:
        The (possibly) rewritten text and the change made, if any
    """
    matches = list(pattern.finditer(text))
    if not matches:
        return text, None

    values = {match.group(1) for match in matches}
    if len(values) > 1:
        logger.warning(
            f"Ambiguous {field} for {name}: found {sorted(values)}, leaving unchanged"
        )
        return text, None

    old = matches[0].group(1)
    if old == new:
        return text, None

    parts = []
    position = 0
    for match in matches:
        start, end = match.span(1)
        parts.append(text[position:start])
        parts.append(new)
        position = end
    parts.append(text[position:])

    return "".join(parts), Change(name=name, field=field, old=old, new=new)


def replace_date_stamp(text: str, today: str) -> tuple[str, Change | None]:
    """Refresh the document-wide ``Current as of <date>`` stamp."""
    match = DATE_STAMP_PATTERN.search(text)
    if not match:
        return text, None

    current = match.group(0)
    stamp = f"Current as of {today}"
    if current == stamp:
        return text, None

    text = text[: match.start()] + stamp + text[match.end() :]
    return text, Change(name="Date", old=current, new=stamp)


def patch_document(
    text: str,
    packages: dict[str, PackageRecord],
    repositories: dict[str, RepositoryRecord],
    today: str,
    package_connectors: Iterable[str] | None = None,
) -> tuple[str, list[Change]]:
    """
    Apply fetched metadata to the directory document.

    Args:
        text: Current document text
        packages: npm records keyed by connector name
        repositories: GitHub records keyed by connector name
        today: Display date for the ``Current as of`` stamp
        package_connectors: Connectors that have an npm package in the
            catalog. Connectors outside this set take their ``updated``
            month from the repository's last push instead. When None, no
            such fallback is applied.

    Returns:
        Patched text and the ordered list of changes
    """
    changes: list[Change] = []

    def apply(pattern: re.Pattern[str], name: str, field: str, new: str) -> None:
        nonlocal text
        text, change = replace_field(text, pattern, name, field, new)
        if change:
            changes.append(change)

    for name, npm in packages.items():
        apply(entry_field_pattern(name, "version"), name, "version", npm.version)
        if npm.publish_date:
            apply(entry_field_pattern(name, "updated"), name, "updated", npm.publish_date)

    for name, gh in repositories.items():
        apply(trust_field_pattern(name, "stars"), name, "stars", gh.stars_formatted)

    if package_connectors is not None:
        with_packages = set(package_connectors)
        for name, gh in repositories.items():
            if name not in with_packages and gh.last_pushed:
                apply(entry_field_pattern(name, "updated"), name, "updated", gh.last_pushed)

    for name, npm in packages.items():
        apply(trust_field_pattern(name, "downloads"), name, "downloads", npm.download_tier.value)

    text, change = replace_date_stamp(text, today)
    if change:
        changes.append(change)

    return text, changes
