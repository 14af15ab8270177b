"""MCP Directory Updater - refreshes connector metadata in the MCP directory HTML."""

from .catalog import load_catalog
from .config import UpdaterSettings
from .models import (
    Catalog,
    Change,
    DownloadTier,
    PackageRecord,
    RepositoryRecord,
)
from .patcher import patch_document
from .reporter import DocumentNotFoundError, report_changes

__version__ = "0.1.0"

__all__ = [
    "Catalog",
    "Change",
    "DocumentNotFoundError",
    "DownloadTier",
    "PackageRecord",
    "RepositoryRecord",
    "UpdaterSettings",
    "load_catalog",
    "patch_document",
    "report_changes",
]
