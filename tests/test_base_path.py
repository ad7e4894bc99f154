import pytest

from cedar_openapi.exceptions import AmbiguousServers, BasePathMismatch
from cedar_openapi.schema.base_path import resolve_base_path, sanitize_path, server_path


class TestSanitizePath:
    def test_strips_trailing_slash(self):
        assert sanitize_path("/api/v1/") == "/api/v1"

    def test_collapses_empty_segments(self):
        assert sanitize_path("//api///v1") == "/api/v1"

    def test_adds_leading_slash(self):
        assert sanitize_path("api/v1") == "/api/v1"

    def test_trims_segments(self):
        assert sanitize_path("/ api / v1 ") == "/api/v1"

    def test_root(self):
        assert sanitize_path("") == "/"
        assert sanitize_path("/") == "/"


class TestServerPath:
    def test_absolute_url(self):
        assert server_path("http://host/api/v1/") == "/api/v1"

    def test_host_only(self):
        assert server_path("https://host") == "/"

    def test_relative_url(self):
        assert server_path("/v2") == "/v2"


class TestResolveBasePath:
    def test_no_servers(self):
        assert resolve_base_path([]) == ""

    def test_no_servers_ignores_option(self):
        assert resolve_base_path([], "/api") == ""

    def test_single_server(self):
        assert resolve_base_path(["http://host/api/v1/"]) == "/api/v1"

    def test_single_server_with_matching_option(self):
        assert resolve_base_path(["http://host/api/v1"], "/api/v1/") == "/api/v1"

    def test_single_server_with_mismatched_option(self):
        with pytest.raises(BasePathMismatch) as exc_info:
            resolve_base_path(["http://host/api/v1"], "/api/v2")
        assert exc_info.value.details["base_path"] == "/api/v2"

    def test_multiple_servers_without_option(self):
        with pytest.raises(AmbiguousServers):
            resolve_base_path(["http://a/prod", "http://b/staging"])

    def test_multiple_servers_with_option(self):
        assert resolve_base_path(["http://a/prod", "http://b/staging/"], "staging") == "/staging"

    def test_multiple_servers_with_unknown_option(self):
        with pytest.raises(BasePathMismatch):
            resolve_base_path(["http://a/prod", "http://b/staging"], "/dev")
