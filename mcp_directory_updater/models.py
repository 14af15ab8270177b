"""Pydantic models for fetched connector metadata, the catalog and changes."""

import re
from enum import Enum

from pydantic import BaseModel, Field, field_validator

REPO_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+/[A-Za-z0-9_.-]+$")


class DownloadTier(str, Enum):
    """Weekly npm download tiers shown in the directory."""

    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"


class PackageRecord(BaseModel):
    """Normalized npm metadata for one connector."""

    version: str = Field(..., description="Latest published version")
    publish_date: str | None = Field(
        None, description="Publish month of that version (YYYY-MM)"
    )
    weekly_downloads: int = Field(0, ge=0, description="Downloads in the last week")
    download_tier: DownloadTier = Field(
        DownloadTier.LOW, description="Display tier derived from weekly downloads"
    )

    model_config = {"frozen": True}


class RepositoryRecord(BaseModel):
    """Normalized GitHub metadata for one repository."""

    stars: int = Field(..., ge=0, description="Raw stargazer count")
    stars_formatted: str = Field(..., description="Abbreviated count (e.g. '12k', '850+')")
    last_pushed: str | None = Field(None, description="Last push month (YYYY-MM)")

    model_config = {"frozen": True}


class Change(BaseModel):
    """A single before/after value rewritten in the directory document."""

    name: str = Field(..., description="Connector name, or 'Date' for the stamp")
    field: str | None = Field(None, description="Field name, None for the date stamp")
    old: str
    new: str

    def __str__(self) -> str:
        if self.field is None:
            return f"{self.name}: {self.old} → {self.new}"
        return f"{self.name}: {self.field} {self.old} → {self.new}"

    model_config = {"frozen": True}


class Catalog(BaseModel):
    """Tracked connectors and the registry identifiers that back them."""

    packages: dict[str, str] = Field(
        default_factory=dict,
        description="npm package id -> connector name (1:1)",
    )
    repositories: dict[str, list[str]] = Field(
        default_factory=dict,
        description="GitHub owner/repo -> connector names (1:many)",
    )

    @field_validator("packages")
    @classmethod
    def validate_packages(cls, v: dict[str, str]) -> dict[str, str]:
        """Connector names must be non-empty and unique across packages."""
        seen: set[str] = set()
        for package, name in v.items():
            if not name.strip():
                raise ValueError(f"Package {package} maps to an empty connector name")
            if name in seen:
                raise ValueError(f"Connector name used by more than one package: {name}")
            seen.add(name)
        return v

    @field_validator("repositories")
    @classmethod
    def validate_repositories(cls, v: dict[str, list[str]]) -> dict[str, list[str]]:
        """Repository ids must look like owner/repo and back at least one connector."""
        for repo, names in v.items():
            if not REPO_PATTERN.match(repo):
                raise ValueError(f"Repository must be in owner/repo form: {repo}")
            if not names or any(not name.strip() for name in names):
                raise ValueError(f"Repository {repo} needs non-empty connector names")
        return v

    def package_connectors(self) -> set[str]:
        """Connector names that have an npm package."""
        return set(self.packages.values())

    def connector_names(self) -> set[str]:
        """Every connector name the catalog tracks."""
        names = self.package_connectors()
        for repo_names in self.repositories.values():
            names.update(repo_names)
        return names
