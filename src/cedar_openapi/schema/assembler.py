"""Cedar schema assembly from a whole OpenAPI document.

The mapping is computed once into a normalized representation (entity
types, un-annotated actions, common types) and then projected twice:

  schemaV2  no annotations, readable by Cedar 2.x and 3.x
  schemaV4  adds the namespace mappingType annotation and per-action
            httpVerb/httpPathTemplate annotations, for Cedar 4.x

so the two documents can only differ in their annotations.
"""

import copy
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import BaseModel

from cedar_openapi.exceptions import MissingInput
from cedar_openapi.parser.base import ApiDocument
from cedar_openapi.schema.actions import map_path_item
from cedar_openapi.schema.base_path import resolve_base_path
from cedar_openapi.schema.namespace import validate_namespace
from cedar_openapi.schema.types import TypeConverter, empty_record

logger = logging.getLogger(__name__)

MappingType = Literal["SimpleRest"]

DEFAULT_MAPPING_TYPE: MappingType = "SimpleRest"


class AuthMapping(BaseModel):
    """Result of mapping an API: both serialized schema variants."""

    mapping_type: MappingType
    schema_v2: str
    schema_v4: str


@dataclass
class NormalizedSchema:
    """Annotation-free content shared by both schema variants."""

    namespace: str
    entity_types: dict[str, dict[str, Any]] = field(default_factory=dict)
    actions: dict[str, dict[str, Any]] = field(default_factory=dict)
    common_types: dict[str, dict[str, Any]] = field(default_factory=dict)
    action_annotations: dict[str, dict[str, str]] = field(default_factory=dict)

    def project(self, annotations: dict[str, str] | None = None) -> dict[str, Any]:
        """Materialize one schema document.

        Without annotations this is the identity projection. With them, the
        namespace gets `annotations` and every action gets its recorded
        verb/path annotations.
        """
        actions = copy.deepcopy(self.actions)
        if annotations is not None:
            for name, action in actions.items():
                action["annotations"] = dict(self.action_annotations[name])

        body: dict[str, Any] = {
            "entityTypes": copy.deepcopy(self.entity_types),
            "actions": actions,
            "commonTypes": copy.deepcopy(self.common_types),
        }
        if annotations is not None:
            body["annotations"] = dict(annotations)
        return {self.namespace: body}


def seed_entity_types() -> dict[str, dict[str, Any]]:
    return {
        "User": {"shape": empty_record(), "memberOfTypes": ["UserGroup"]},
        "UserGroup": {"shape": empty_record()},
        "Application": {"shape": empty_record()},
    }


def build_normalized_schema(
    document: ApiDocument,
    namespace: str,
    base_path: str | None = None,
) -> NormalizedSchema:
    """Run the mapping over a whole document without serializing it."""
    if document.paths is None:
        raise MissingInput("Invalid OpenAPI spec - missing paths object")

    validate_namespace(namespace)
    resolved_base_path = resolve_base_path(document.server_urls, base_path)

    schemas = document.schemas
    converter = TypeConverter(schema_names=schemas.keys())
    normalized = NormalizedSchema(namespace=namespace, entity_types=seed_entity_types())

    # dict keeps first-seen order for the pending resource types
    pending_resource_types: dict[str, None] = {}
    for path_template, path_item in document.paths.items():
        for action in map_path_item(path_template, path_item, converter, resolved_base_path):
            logger.debug(
                "Mapped %s %s to action %s",
                action.annotations["httpVerb"],
                path_template,
                action.name,
            )
            normalized.actions[action.name] = action.definition
            normalized.action_annotations[action.name] = action.annotations
            for resource_type in action.resource_types:
                entity_name = resource_type.split("::")[-1]
                if entity_name not in normalized.entity_types:
                    pending_resource_types[entity_name] = None

    normalized.common_types = converter.convert_common_types(schemas)

    for entity_name in pending_resource_types:
        shape = {"type": entity_name} if entity_name in schemas else empty_record()
        normalized.entity_types.setdefault(entity_name, {"shape": shape, "memberOfTypes": []})

    if "User" in schemas:
        normalized.entity_types["User"]["shape"] = {"type": "User"}

    logger.debug(
        "Namespace %s: %d actions, %d entity types, %d common types",
        namespace,
        len(normalized.actions),
        len(normalized.entity_types),
        len(normalized.common_types),
    )
    return normalized


def generate_api_mapping_schema(
    openapi: dict[str, Any] | ApiDocument,
    namespace: str,
    mapping_type: MappingType = DEFAULT_MAPPING_TYPE,
    base_path: str | None = None,
) -> AuthMapping:
    """Derive both Cedar schema variants from an OpenAPI document.

    Args:
        openapi: Parsed OpenAPI document or an ApiDocument.
        namespace: Cedar namespace for the application.
        mapping_type: Mapping strategy, recorded as a namespace annotation.
        base_path: Base path to use when the API declares several servers.
    """
    document = openapi if isinstance(openapi, ApiDocument) else ApiDocument.from_openapi(openapi)
    normalized = build_normalized_schema(document, namespace, base_path)

    return AuthMapping(
        mapping_type=mapping_type,
        schema_v2=json.dumps(normalized.project(), indent=2),
        schema_v4=json.dumps(normalized.project({"mappingType": mapping_type}), indent=2),
    )
