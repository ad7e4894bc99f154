"""Build a Cedar action context shape from OpenAPI parameters."""

from typing import Any

from cedar_openapi.exceptions import MissingParameterFields, UnsupportedParameterRef
from cedar_openapi.schema.types import TypeConverter, empty_record

# Parameter location -> context attribute holding it. Header and cookie
# parameters are not part of the context.
CONTEXT_LOCATIONS = {
    "path": "pathParameters",
    "query": "queryStringParameters",
}


def build_context(parameters: list[dict] | None, converter: TypeConverter) -> dict[str, Any]:
    """Convert parameter objects into a context Record.

    Later parameters with the same name and location replace earlier ones,
    so path-item parameters can be passed first and overridden per operation.
    """
    groups = {attribute: empty_record() for attribute in CONTEXT_LOCATIONS.values()}

    for param in parameters or []:
        if not isinstance(param, dict):
            raise MissingParameterFields(
                f"Parameter {param!r} is not a parameter object",
                {"parameter": param, "missing": ["name", "in", "schema"]},
            )

        if "$ref" in param:
            raise UnsupportedParameterRef(
                f"Parameter $ref {param['$ref']} is not supported, define parameters inline",
                {"ref": param["$ref"]},
            )

        missing = [field for field in ("name", "in", "schema") if param.get(field) in (None, "")]
        if missing:
            raise MissingParameterFields(
                f"Parameter {param.get('name', '<unnamed>')} is missing {', '.join(missing)}",
                {"parameter": param.get("name"), "missing": missing},
            )

        attribute = CONTEXT_LOCATIONS.get(param["in"])
        if attribute is None:
            continue

        cedar_type = converter.convert(param["name"], param["schema"])
        if param.get("required"):
            cedar_type["required"] = True
        groups[attribute]["attributes"][param["name"]] = cedar_type

    return {"type": "Record", "attributes": groups}
