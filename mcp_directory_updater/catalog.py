"""Loading the catalog of tracked connectors from YAML."""

import logging
from pathlib import Path

import yaml

from .models import Catalog

logger = logging.getLogger(__name__)


def load_catalog(path: Path) -> Catalog:
    """Load and validate a connector catalog.

    Catalog YAML schema:

        packages:
          <npm package id>: <connector name>
        repositories:
          <owner/repo>: [<connector name>, ...]

    Args:
        path: Catalog YAML file

    Returns:
        Validated Catalog

    Raises:
        FileNotFoundError: If the file does not exist
        yaml.YAMLError: If the file is not valid YAML
        pydantic.ValidationError: If the content does not fit the schema
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not data:
        logger.warning(f"Empty catalog at {path}")
        data = {}

    catalog = Catalog(**data)
    logger.info(
        f"Loaded catalog with {len(catalog.packages)} packages and "
        f"{len(catalog.repositories)} repositories "
        f"({len(catalog.connector_names())} connectors) from {path}"
    )
    return catalog
