"""Runtime settings read from the environment."""

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from .fetchers.github import GITHUB_AUTH_REQUEST_DELAY, GITHUB_REQUEST_DELAY
from .fetchers.npm import NPM_REQUEST_DELAY

DEFAULT_HTML_FILE = "claude-mcp-directory.html"
DEFAULT_CATALOG_PATH = Path(__file__).parent / "catalog.yaml"


class UpdaterSettings(BaseModel):
    """Configuration for one update run."""

    html_path: Path = Field(
        default_factory=lambda: Path.cwd() / DEFAULT_HTML_FILE,
        description="Directory HTML document to patch",
    )
    catalog_path: Path = Field(
        DEFAULT_CATALOG_PATH, description="YAML catalog of tracked connectors"
    )
    github_token: str | None = Field(
        None, description="GitHub token for authenticated (higher rate limit) requests"
    )
    timeout: float = Field(30.0, gt=0, description="HTTP request timeout in seconds")
    npm_delay: float = Field(NPM_REQUEST_DELAY, ge=0, description="Pause after each npm lookup")
    github_delay: float = Field(
        GITHUB_REQUEST_DELAY, ge=0, description="Pause after each unauthenticated GitHub lookup"
    )
    github_auth_delay: float = Field(
        GITHUB_AUTH_REQUEST_DELAY, ge=0, description="Pause after each authenticated GitHub lookup"
    )
    log_level: str = Field("WARNING", description="Logging level name")

    @field_validator("github_token")
    @classmethod
    def validate_token(cls, v: str | None) -> str | None:
        """Treat a blank token as no token."""
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Accept standard logging level names, case-insensitively."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def github_request_delay(self) -> float:
        """Pause between GitHub lookups for the configured credential state."""
        return self.github_auth_delay if self.github_token else self.github_delay

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "UpdaterSettings":
        """Build settings from environment variables.

        Recognised variables: ``GITHUB_TOKEN`` (or ``GH_TOKEN``),
        ``MCP_DIRECTORY_HTML``, ``MCP_DIRECTORY_CATALOG``,
        ``MCP_DIRECTORY_TIMEOUT`` and ``MCP_DIRECTORY_LOG_LEVEL``.
        """
        env = os.environ if environ is None else environ
        values: dict[str, object] = {
            "github_token": env.get("GITHUB_TOKEN") or env.get("GH_TOKEN"),
        }
        if env.get("MCP_DIRECTORY_HTML"):
            values["html_path"] = Path(env["MCP_DIRECTORY_HTML"])
        if env.get("MCP_DIRECTORY_CATALOG"):
            values["catalog_path"] = Path(env["MCP_DIRECTORY_CATALOG"])
        if env.get("MCP_DIRECTORY_TIMEOUT"):
            values["timeout"] = env["MCP_DIRECTORY_TIMEOUT"]
        if env.get("MCP_DIRECTORY_LOG_LEVEL"):
            values["log_level"] = env["MCP_DIRECTORY_LOG_LEVEL"]
        return cls(**values)

    model_config = {"frozen": True}
