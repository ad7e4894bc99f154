"""Starter Cedar policies for a generated schema.

Produces two policy texts: one granting the admin group every action and
one template granting a named group an explicit action list, to be edited
by hand. Parsing and validating them is left to a Cedar engine.
"""

import json
from typing import Any

from cedar_openapi.exceptions import InvalidSchemaDocument

ADMIN_GROUP = "admin"

PLACEHOLDER_GROUP = "ENTER_THE_USER_GROUP_HERE"


def read_schema_actions(schema_text: str) -> tuple[str, list[str]]:
    """Return the single namespace of a Cedar JSON schema and its action names."""
    try:
        schema = json.loads(schema_text)
    except json.JSONDecodeError as e:
        raise InvalidSchemaDocument(f"Schema is not valid JSON: {e.msg} (line {e.lineno})") from e

    if not isinstance(schema, dict):
        raise InvalidSchemaDocument("Schema must be a JSON object keyed by namespace")

    if len(schema) != 1:
        raise InvalidSchemaDocument(
            "Schema must have exactly one namespace",
            {"namespaces": list(schema)},
        )

    namespace, body = next(iter(schema.items()))
    actions: Any = body.get("actions") if isinstance(body, dict) else None
    if not isinstance(actions, dict):
        raise InvalidSchemaDocument(
            f"Namespace {namespace} has no actions object",
            {"namespace": namespace},
        )
    return namespace, list(actions)


def _action_uid(namespace: str, action: str) -> str:
    escaped = action.replace("\\", "\\\\").replace('"', '\\"')
    return f'{namespace}::Action::"{escaped}"'


def generate_policies_for_schema(schema_text: str) -> list[str]:
    """Generate starter policies for a serialized Cedar JSON schema."""
    namespace, actions = read_schema_actions(schema_text)

    admin_policy = (
        "// Allows admin usergroup access to everything\n"
        "permit (\n"
        f'    principal in {namespace}::UserGroup::"{ADMIN_GROUP}",\n'
        "    action,\n"
        "    resource\n"
        ");\n"
    )

    action_list = ",\n".join(f"        {_action_uid(namespace, action)}" for action in actions)
    group_policy = (
        "// Allows more granular user group control, change actions as needed\n"
        "permit (\n"
        f'    principal in {namespace}::UserGroup::"{PLACEHOLDER_GROUP}",\n'
        "    action in [\n"
        f"{action_list}\n"
        "    ],\n"
        "    resource\n"
        ");\n"
    )
    return [admin_policy, group_policy]
