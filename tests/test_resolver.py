"""
test_resolver.py: URL resolution, target normalization and origins.
"""

import pytest

from apiscout.core.resolver import normalize_target, origin, resolve

BASE = "https://example.com/app/"


class TestResolve:
    def test_relative_path_joins_base(self):
        assert resolve(BASE, "api/v1/users") == "https://example.com/app/api/v1/users"

    def test_root_relative_path_uses_origin(self):
        assert resolve(BASE, "/swagger.json") == "https://example.com/swagger.json"

    def test_dot_segments_collapse(self):
        assert resolve(BASE, "./a/../b") == "https://example.com/app/b"
        assert resolve(BASE, "../openapi.json") == "https://example.com/openapi.json"

    def test_query_preserved(self):
        assert (resolve(BASE, "/swagger-ui/index.html?url=/openapi.json")
                == "https://example.com/swagger-ui/index.html?url=/openapi.json")

    def test_absolute_url_returned_unchanged(self):
        url = "http://api.other.org:8080/v2/./x?y=1"
        assert resolve(BASE, url) == url

    def test_protocol_relative(self):
        assert resolve(BASE, "//cdn.example.net/app.js") == "https://cdn.example.net/app.js"

    def test_deterministic(self):
        assert resolve(BASE, "v1/x") == resolve(BASE, "v1/x")

    @pytest.mark.parametrize("candidate", [
        "", "   ", "javascript:void(0)", "mailto:a@b.c", "http://[::1", "http://",
    ])
    def test_invalid_returns_none(self, candidate):
        assert resolve(BASE, candidate) is None

    def test_invalid_base_returns_none(self):
        assert resolve("not a url", "/api") is None
        assert resolve(None, "/api") is None


class TestNormalizeTarget:
    def test_adds_trailing_slash(self):
        assert normalize_target("https://example.com") == "https://example.com/"
        assert normalize_target("https://example.com/app") == "https://example.com/app/"

    def test_defaults_scheme(self):
        assert normalize_target("example.com") == "https://example.com/"

    def test_keeps_query(self):
        assert normalize_target("http://x.io/a?b=1") == "http://x.io/a/?b=1"

    def test_rejects_hostless(self):
        with pytest.raises(ValueError):
            normalize_target("https://")


class TestOrigin:
    def test_drops_default_port_and_path(self):
        assert origin("https://API.Example.com:443/v2/x") == "https://api.example.com"

    def test_keeps_custom_port(self):
        assert origin("http://localhost:3000/api") == "http://localhost:3000"

    def test_strips_userinfo(self):
        assert origin("https://user:pw@host.io/") == "https://host.io"

    def test_non_http(self):
        assert origin("/api/v1") is None
        assert origin("ftp://host/") is None
