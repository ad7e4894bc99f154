"""Base path resolution from the servers declared in an OpenAPI document.

The base path is the URL path prefix shared by every operation. It is
prepended to path templates in the annotated schema so that a request path
seen by the gateway can be matched back to its Cedar action.
"""

from urllib.parse import urlsplit

from cedar_openapi.exceptions import AmbiguousServers, BasePathMismatch


def sanitize_path(path: str) -> str:
    """Normalize a URL path: one leading slash, no empty segments, no trailing slash.

    '/api//v1/' -> '/api/v1', '' -> '/'.
    """
    segments = [segment.strip() for segment in path.split("/")]
    return "/" + "/".join(segment for segment in segments if segment)


def server_path(url: str) -> str:
    """Return the sanitized path component of a server URL."""
    return sanitize_path(urlsplit(url).path)


def resolve_base_path(servers: list[str], base_path: str | None = None) -> str:
    """Derive the base path from the declared server URLs.

    Args:
        servers: Server URLs in declaration order.
        base_path: Optional base path chosen by the caller. Required when
            more than one server is declared.

    Returns:
        '' when no servers are declared, otherwise a sanitized path.
    """
    if not servers:
        return ""

    server_paths = [server_path(url) for url in servers]

    if base_path is not None:
        wanted = sanitize_path(base_path)
        if wanted not in server_paths:
            raise BasePathMismatch(
                f"Base path {base_path!r} does not match any declared server",
                {"base_path": base_path, "servers": list(servers)},
            )

    if len(servers) == 1:
        return server_paths[0]

    if base_path is None:
        raise AmbiguousServers(
            "The API declares more than one server; a base path must be supplied",
            {"servers": list(servers)},
        )
    return sanitize_path(base_path)
