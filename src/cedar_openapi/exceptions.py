"""Exception classes for cedar-openapi.

Every error raised while mapping an OpenAPI document to a Cedar schema
inherits from CedarOpenApiError. Mapping is fail-fast: the first error
aborts the whole run and no partial schema is produced.
"""

from typing import Any


class CedarOpenApiError(Exception):
    """Base exception for all cedar-openapi errors.

    Attributes:
        message: Human-readable error description.
        details: Offending names/paths, for diagnosis.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


class MissingInput(CedarOpenApiError):
    """The OpenAPI document has no paths object."""


class MissingNamespace(CedarOpenApiError):
    """No namespace was supplied."""


class InvalidNamespace(CedarOpenApiError):
    """The namespace violates the Cedar grammar or is a reserved word."""


class AmbiguousServers(CedarOpenApiError):
    """Several servers are declared and no base path was chosen."""


class BasePathMismatch(CedarOpenApiError):
    """The requested base path matches none of the declared servers."""


class UnsupportedRef(CedarOpenApiError):
    """A $ref does not point at an entry of #/components/schemas."""


class UnsupportedSchemaShape(CedarOpenApiError):
    """A schema node has neither a usable type nor a $ref (e.g. oneOf)."""


class MissingArrayItems(CedarOpenApiError):
    """An array schema does not declare its items."""


class UnsupportedParameterRef(CedarOpenApiError):
    """A parameter is a $ref instead of an inline definition."""


class MissingParameterFields(CedarOpenApiError):
    """A parameter lacks its name, location or schema."""


class InvalidCedarExtension(CedarOpenApiError):
    """The x-cedar operation extension is malformed."""


class DepthExceeded(CedarOpenApiError):
    """Schema nesting is deeper than the converter allows."""


class InvalidSchemaDocument(CedarOpenApiError):
    """A Cedar JSON schema handed to the policy generator is unusable."""


class ConfigurationError(CedarOpenApiError):
    """The generator configuration file is missing, malformed or invalid."""
