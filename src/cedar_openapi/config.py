"""Generator configuration.

Settings can come from a YAML file:

    namespace: PetStore
    mapping_type: SimpleRest
    base_path: /api/v1
    output_dir: build/cedar

Command-line options take precedence over file values.
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, ValidationError

from cedar_openapi.exceptions import ConfigurationError
from cedar_openapi.schema.assembler import DEFAULT_MAPPING_TYPE, MappingType


class GeneratorConfig(BaseModel):
    """Options for schema generation."""

    namespace: str | None = None
    mapping_type: MappingType = DEFAULT_MAPPING_TYPE
    base_path: str | None = None
    output_dir: Path = Path(".")

    def merged(self, **overrides) -> "GeneratorConfig":
        """Return a copy with every override that is not None applied."""
        values = {key: value for key, value in overrides.items() if value is not None}
        return self.model_copy(update=values)


def load_config(path: Path | None) -> GeneratorConfig:
    """Load a YAML config file. No path gives the defaults."""
    if path is None:
        return GeneratorConfig()

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}", {"path": str(path)}) from e

    if data is None:
        return GeneratorConfig()
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping", {"path": str(path)})

    try:
        return GeneratorConfig(**data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid config file {path}: {e}", {"path": str(path)}) from e
