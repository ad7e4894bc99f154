"""OpenAPI document loader.

Reads OpenAPI 3.x documents in JSON or YAML into raw dicts or ApiDocument models.
"""

import logging
from pathlib import Path
from typing import Any

import yaml

from .base import ApiDocument

logger = logging.getLogger(__name__)


def load_openapi(file_path: Path) -> dict[str, Any]:
    """Read an OpenAPI file. JSON is parsed as YAML, its superset."""
    text = file_path.read_text(encoding="utf-8")
    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueError(f"{file_path} is not valid JSON or YAML: {e}") from e

    if not isinstance(doc, dict):
        raise ValueError(f"{file_path} does not contain an OpenAPI document")

    if "swagger" in doc:
        logger.warning(
            "%s is a Swagger %s document; servers and components.schemas are only read from OpenAPI 3",
            file_path,
            doc["swagger"],
        )
    return doc


def parse_openapi(file_path: Path) -> ApiDocument:
    """Parse an OpenAPI file into an ApiDocument."""
    return ApiDocument.from_openapi(load_openapi(file_path))
