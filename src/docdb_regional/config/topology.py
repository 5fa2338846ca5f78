"""Static endpoint topology loaded from YAML.

Lets a client start with a known set of regional endpoints without a
discovery round-trip. The file uses the same shape as the discovery response:

    readableLocations:
      - name: West Europe
        databaseAccountEndpoint: https://account-westeurope.documents.example.net
    writableLocations:
      - name: West Europe
        databaseAccountEndpoint: https://account-westeurope.documents.example.net
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from docdb_regional.endpoints.types import EndpointDescription

logger = logging.getLogger(__name__)


def load_static_topology(yaml_path: str) -> EndpointDescription | None:
    """Parse a topology YAML file into an EndpointDescription.

    Returns None when the file is missing or malformed, so the client falls
    back to the default endpoint alone.
    """
    path = Path(yaml_path)

    if not path.exists():
        logger.warning("Topology file not found at %s, using default endpoint only", yaml_path)
        return None

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        logger.error("Failed to parse topology YAML at %s: %s", yaml_path, exc)
        return None

    if not isinstance(raw, dict):
        logger.warning("Topology YAML at %s is not a mapping, using default endpoint only", yaml_path)
        return None

    try:
        return EndpointDescription.model_validate(raw)
    except ValidationError as exc:
        logger.error("Invalid topology in %s: %s", yaml_path, exc)
        return None
