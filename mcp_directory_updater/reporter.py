"""Change report and the gated write of the patched document."""

import logging
from pathlib import Path

from .models import Change

logger = logging.getLogger(__name__)


class DocumentNotFoundError(FileNotFoundError):
    """The directory HTML to patch does not exist."""


def read_document(path: Path) -> str:
    """Read the directory document, failing fast if it is missing."""
    if not path.is_file():
        raise DocumentNotFoundError(f"HTML file not found at {path}")
    # newline="" keeps CRLF endings so a rewrite only touches patched values
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def write_document(path: Path, text: str) -> int:
    """Overwrite the document with ``text`` and return the resulting size in bytes."""
    # newline="" keeps the document's own line endings
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)
    size = path.stat().st_size
    logger.debug(f"Wrote {size} bytes to {path}")
    return size


def report_changes(changes: list[Change], path: Path, text: str, apply: bool = False) -> int | None:
    """
    Print the change list and write the document in apply mode.

    Args:
        changes: Changes produced by the patch step
        path: Document location
        text: Patched document text
        apply: Whether to persist the patched text

    Returns:
        Size in bytes of the written file, or None if nothing was written
    """
    print("")
    if not changes:
        print("No changes detected, directory is up to date.")
        return None

    print(f"Found {len(changes)} change(s):")
    for change in changes:
        print(f"  {change}")

    if not apply:
        print("\nDry run complete. Use --apply to write changes.")
        return None

    size = write_document(path, text)
    print(f"\nWritten {len(changes)} changes to {path}")
    print(f"   File size: {size / 1024:.1f} KB")
    return size
