"""Map OpenAPI operations to Cedar actions.

How action names are computed:
  - the operation's operationId when it has one
  - otherwise '<verb> <path template>', e.g. 'get /users/{id}'

How resource types are computed:
  - default ['Application']
  - an operation-level x-cedar extension overrides them:
      x-cedar:
        appliesToResourceTypes: [User]
"""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from cedar_openapi.exceptions import InvalidCedarExtension, UnsupportedSchemaShape
from cedar_openapi.schema.context import build_context
from cedar_openapi.schema.types import TypeConverter

SUPPORTED_HTTP_METHODS = ("get", "post", "put", "patch", "delete")

ANY_METHOD_KEY = "x-amazon-apigateway-any-method"

CEDAR_EXTENSION_KEY = "x-cedar"

DEFAULT_RESOURCE_TYPES = ("Application",)

PRINCIPAL_TYPES = ("User",)


@dataclass(frozen=True)
class MappedAction:
    """One Cedar action derived from one (path, verb) pair."""

    name: str
    definition: dict[str, Any]
    annotations: dict[str, str]

    @property
    def resource_types(self) -> list[str]:
        return self.definition["appliesTo"]["resourceTypes"]


def join_path(base_path: str, path_template: str) -> str:
    """Prefix a path template with the base path ('' and '/' leave it unchanged)."""
    if not path_template.startswith("/"):
        path_template = "/" + path_template
    return base_path.rstrip("/") + path_template


def resource_types_for(operation: dict, action_name: str) -> list[str]:
    extension = operation.get(CEDAR_EXTENSION_KEY)
    if extension is None:
        return list(DEFAULT_RESOURCE_TYPES)

    if not isinstance(extension, dict):
        raise InvalidCedarExtension(
            f"{CEDAR_EXTENSION_KEY} on {action_name} must be an object",
            {"action": action_name, "extension": extension},
        )

    if "appliesToResourceTypes" not in extension:
        return list(DEFAULT_RESOURCE_TYPES)

    resource_types = extension["appliesToResourceTypes"]
    if (
        not isinstance(resource_types, list)
        or not resource_types
        or not all(isinstance(value, str) and value for value in resource_types)
    ):
        raise InvalidCedarExtension(
            f"{CEDAR_EXTENSION_KEY}.appliesToResourceTypes on {action_name} must be a non-empty list of strings",
            {"action": action_name, "appliesToResourceTypes": resource_types},
        )
    return list(resource_types)


def map_operation(
    verb: str,
    path_template: str,
    operation: dict,
    converter: TypeConverter,
    base_path: str = "",
    path_parameters: list[dict] | None = None,
) -> MappedAction:
    """Build the action for a single operation object."""
    name = operation.get("operationId") or f"{verb} {path_template}"
    parameters = list(path_parameters or []) + list(operation.get("parameters") or [])

    definition = {
        "appliesTo": {
            "context": build_context(parameters, converter),
            "principalTypes": list(PRINCIPAL_TYPES),
            "resourceTypes": resource_types_for(operation, name),
        },
    }
    annotations = {
        "httpVerb": verb,
        "httpPathTemplate": join_path(base_path, path_template),
    }
    return MappedAction(name=name, definition=definition, annotations=annotations)


def map_path_item(
    path_template: str,
    path_item: Any,
    converter: TypeConverter,
    base_path: str = "",
) -> Iterator[MappedAction]:
    """Yield an action per supported verb declared on a path item."""
    if not isinstance(path_item, dict):
        return

    verbs = list(path_item)
    # The any-method marker widens the verb set, but each verb is still
    # looked up on the path item itself.
    if ANY_METHOD_KEY in verbs:
        verbs = list(SUPPORTED_HTTP_METHODS)

    for verb in verbs:
        if verb not in SUPPORTED_HTTP_METHODS:
            continue
        operation = path_item.get(verb)
        if not operation:
            continue
        if not isinstance(operation, dict):
            raise UnsupportedSchemaShape(
                f"Operation {verb} {path_template} is not an operation object",
                {"path": path_template, "verb": verb},
            )
        yield map_operation(
            verb,
            path_template,
            operation,
            converter,
            base_path=base_path,
            path_parameters=path_item.get("parameters"),
        )
