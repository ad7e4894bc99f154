"""Cedar namespace validation."""

import re

from cedar_openapi.exceptions import InvalidNamespace, MissingNamespace

RESERVED_WORDS = frozenset({"if", "in", "is", "__cedar"})

NAMESPACE_PATTERN = re.compile(r"^[_a-zA-Z][_a-zA-Z0-9]*(?:::[_a-zA-Z][_a-zA-Z0-9]*)*$")

INVALID_NAMESPACE_MESSAGE = (
    "Invalid namespace format. Namespace must start with a letter or underscore (_), "
    "and can include alphanumeric characters and underscores. Double colons (::) can "
    "separate components, where each component must start with a letter or underscore. "
    "Reserved words cannot be used as namespaces."
)


def validate_namespace(namespace: str | None) -> None:
    """Raise if the namespace cannot be used as a Cedar schema namespace."""
    if not namespace:
        raise MissingNamespace("Invalid input - missing namespace")

    if not NAMESPACE_PATTERN.fullmatch(namespace) or namespace.lower() in RESERVED_WORDS:
        raise InvalidNamespace(INVALID_NAMESPACE_MESSAGE, {"namespace": namespace})
