"""Input model for OpenAPI documents.

Only the parts of an OpenAPI 3 document that the Cedar mapping reads are
modelled: the paths object, the server list and components.schemas.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class Server(BaseModel):
    """A single entry of the OpenAPI servers list."""

    model_config = ConfigDict(frozen=True)

    url: str


class ApiDocument(BaseModel):
    """The subset of an OpenAPI document used to derive a Cedar schema."""

    model_config = ConfigDict(frozen=True)

    paths: dict[str, Any] | None = None
    servers: list[Server] = []
    schemas: dict[str, Any] = {}

    @classmethod
    def from_openapi(cls, doc: dict[str, Any]) -> "ApiDocument":
        """Build from a parsed OpenAPI document (JSON or YAML)."""
        servers = [
            Server(url=entry) if isinstance(entry, str) else Server(**entry)
            for entry in doc.get("servers") or []
        ]
        return cls(
            paths=doc.get("paths"),
            servers=servers,
            schemas=(doc.get("components") or {}).get("schemas") or {},
        )

    @property
    def server_urls(self) -> list[str]:
        return [server.url for server in self.servers]
