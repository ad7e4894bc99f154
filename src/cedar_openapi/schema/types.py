"""OpenAPI schema object to Cedar type conversion.

Handles:
- Local $ref to #/components/schemas/<Name> (kept as a named type reference)
- object -> Record (properties converted recursively)
- array -> Set (items required)
- string/number/integer/boolean -> String/Long/Long/Boolean

Composition keywords (allOf/oneOf/anyOf) are rejected. References are never
inlined, so recursion only follows literal nesting, bounded by max_depth.
"""

import re
from collections.abc import Iterable
from types import MappingProxyType
from typing import Any

from cedar_openapi.exceptions import (
    DepthExceeded,
    MissingArrayItems,
    UnsupportedRef,
    UnsupportedSchemaShape,
)

MAX_SCHEMA_DEPTH = 32

# Both OpenAPI numeric kinds collapse to Cedar's only integer type.
PRIMITIVE_TYPES = MappingProxyType({
    "string": "String",
    "number": "Long",
    "integer": "Long",
    "boolean": "Boolean",
})

LOCAL_SCHEMA_REF = re.compile(r"^#/components/schemas/([^/]+)$")


def empty_record() -> dict[str, Any]:
    return {"type": "Record", "attributes": {}}


class TypeConverter:
    """Converts OpenAPI schema nodes into Cedar JSON schema type nodes."""

    def __init__(self, schema_names: Iterable[str] | None = None, max_depth: int = MAX_SCHEMA_DEPTH):
        self.schema_names = frozenset(schema_names) if schema_names is not None else None
        self.max_depth = max_depth

    def convert(self, name: str, node: Any, depth: int = 0) -> dict[str, Any]:
        """Convert one schema node. `name` is only used in error messages."""
        if depth > self.max_depth:
            raise DepthExceeded(
                f"Schema {name} is nested deeper than {self.max_depth} levels",
                {"schema": name, "max_depth": self.max_depth},
            )

        if not isinstance(node, dict):
            raise UnsupportedSchemaShape(
                f"Unsupported shape of {name}, it is not a schema object.",
                {"schema": name},
            )

        if "$ref" in node:
            return {"type": self._ref_target(name, node["$ref"])}

        schema_type = node.get("type")
        if schema_type is None:
            raise UnsupportedSchemaShape(
                f"Unsupported shape of {name}, it neither has a type nor a $ref.",
                {"schema": name, "keys": sorted(node)},
            )

        if schema_type == "object":
            attributes = {}
            for property_name, property_node in (node.get("properties") or {}).items():
                attributes[property_name] = self.convert(property_name, property_node, depth + 1)
            return {"type": "Record", "attributes": attributes}

        if schema_type == "array":
            if node.get("items") is None:
                raise MissingArrayItems(
                    f"Unsupported schema for {name} - array items are not defined directly under the property.",
                    {"schema": name},
                )
            return {"type": "Set", "element": self.convert(name, node["items"], depth + 1)}

        if not isinstance(schema_type, str) or schema_type not in PRIMITIVE_TYPES:
            raise UnsupportedSchemaShape(
                f"Unsupported schema for {name} - type {schema_type} is not supported",
                {"schema": name, "type": schema_type},
            )
        return {"type": PRIMITIVE_TYPES[schema_type]}

    def convert_common_types(self, schemas: dict[str, Any]) -> dict[str, dict[str, Any]]:
        """Convert every entry of components.schemas into a common type of the same name."""
        return {name: self.convert(name, node) for name, node in schemas.items()}

    def _ref_target(self, name: str, ref: Any) -> str:
        match = LOCAL_SCHEMA_REF.match(ref) if isinstance(ref, str) else None
        if not match:
            raise UnsupportedRef(
                f"Unsupported $ref value for {name}. Only local refs to #/components/schemas/MyType are supported",
                {"schema": name, "ref": ref},
            )
        target = match.group(1)
        if self.schema_names is not None and target not in self.schema_names:
            raise UnsupportedRef(
                f"$ref {ref} in {name} does not resolve to a schema in #/components/schemas",
                {"schema": name, "ref": ref},
            )
        return target
