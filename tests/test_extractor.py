"""
test_extractor.py: Static candidate extraction from HTML and scripts.
"""

import time

from apiscout.parsers.extractor import (
    API_STRING, CandidateExtractor, extract, find_api_strings,
    find_interesting_files, find_script_urls, find_swagger_filenames,
)

BASE = "https://shop.example.com/"

LANDING = """<!doctype html>
<html><head>
  <link rel="manifest" href="/manifest.webmanifest">
  <link rel="stylesheet" href="/styles.css">
  <meta name="app-config" content="/assets/config.json">
  <script src="/static/js/main.js"></script>
  <script type="module" src='https://cdn.example.net/vendor.js' defer></script>
  <script src="javascript:void(0)"></script>
</head><body>
  <script>
    fetch("/api/v1/products?limit=10");
    const spec = '/docs/openapi.yaml';
    const legacy = `/v2/orders/`;
    const remote = "https://api.example.com/v3/carts";
    const img = "https://cdn.example.net/logo.png";
  </script>
</body></html>
"""


# ── Patterns ───────────────────────────────────────────────────


class TestApiStrings:
    def test_quote_styles(self):
        text = """ "/api/a" '/api/b' `/api/c` """
        assert find_api_strings(text) == ["/api/a", "/api/b", "/api/c"]

    def test_percent_encoded_delimiters(self):
        assert find_api_strings("x=%22/api/users%22 y=%27/v1/z%27") == ["/api/users", "/v1/z"]

    def test_versioned_path(self):
        assert find_api_strings('"/v12/items/7"') == ["/v12/items/7"]

    def test_absolute_url_with_api_path(self):
        text = '"https://api.example.com:8443/openapi/spec" "https://x.io/swagger"'
        assert find_api_strings(text) == [
            "https://api.example.com:8443/openapi/spec", "https://x.io/swagger"]

    def test_plain_urls_and_paths_ignored(self):
        text = '"https://cdn.example.net/logo.png" "/static/app.js" "/apiary" "/v1"'
        assert find_api_strings(text) == []

    def test_unquoted_ignored(self):
        assert find_api_strings("GET /api/v1/users HTTP/1.1") == []

    def test_captures_inner_content_only(self):
        m = API_STRING.search("call('/api/x?y=1#top')")
        assert m.group(1) == "/api/x?y=1#top"

    def test_unterminated_url_is_linear(self):
        text = '"https://a.example/api' + "a" * 500000
        started = time.monotonic()
        assert find_api_strings(text) == []
        assert time.monotonic() - started < 2.0


class TestSwaggerFilenames:
    def test_finds_quoted_docs(self):
        text = """url: "/swagger/v1/swagger.json", b: 'openapi.yml', c: `/docs/OpenAPI.YAML`"""
        assert find_swagger_filenames(text) == [
            "/swagger/v1/swagger.json", "openapi.yml", "/docs/OpenAPI.YAML"]

    def test_other_files_ignored(self):
        assert find_swagger_filenames('"/config.json" "/swagger.js" swagger.json') == []

    def test_long_unterminated_name_stays_fast(self):
        text = "'" + "swagger" * 50000
        started = time.monotonic()
        assert find_swagger_filenames(text) == []
        assert time.monotonic() - started < 2.0


class TestTags:
    def test_script_urls_resolved(self):
        assert find_script_urls(LANDING, BASE) == [
            "https://shop.example.com/static/js/main.js",
            "https://cdn.example.net/vendor.js",
        ]

    def test_interesting_files(self):
        assert find_interesting_files(LANDING, BASE) == [
            "https://shop.example.com/manifest.webmanifest",
            "https://shop.example.com/assets/config.json",
        ]

    def test_attribute_order_and_quotes(self):
        markup = ("<SCRIPT defer src = '/a.js' type=\"module\"></SCRIPT>"
                  "<link href=\"/app-config.json\" rel=\"preload\">")
        assert find_script_urls(markup, BASE) == ["https://shop.example.com/a.js"]
        assert find_interesting_files(markup, BASE) == ["https://shop.example.com/app-config.json"]

    def test_unclosed_tags_stay_fast(self):
        markup = "<script " * 50000
        started = time.monotonic()
        found = extract(markup, BASE)
        assert found.script_urls == [] and found.swagger_files == []
        assert time.monotonic() - started < 2.0


# ── extract / CandidateExtractor ───────────────────────────────


class TestExtract:
    def test_landing_page(self):
        found = extract(LANDING, BASE)
        assert found.api_strings == [
            "/api/v1/products?limit=10", "/v2/orders/", "https://api.example.com/v3/carts"]
        assert found.swagger_files == [
            "/docs/openapi.yaml",
            "https://shop.example.com/manifest.webmanifest",
            "https://shop.example.com/assets/config.json",
        ]
        assert len(found.script_urls) == 2

    def test_empty_and_malformed(self):
        assert extract("", BASE).api_strings == []
        junk = "<script src=\"" + "<" * 5000 + "'\"/api/" * 100
        found = extract(junk, BASE)
        assert isinstance(found.api_strings, list)


class TestCandidateExtractor:
    def test_accumulates_across_documents(self):
        ex = CandidateExtractor(BASE)
        ex.scan_markup(LANDING)
        hints = ex.scan_script(
            'const api = axios.create({ baseURL: "https://api.example.com/v2" });\n'
            'get("/api/v1/products?limit=10"); get("/api/v1/cart");\n'
            'load("/openapi.json");')
        assert ex.api_strings == [
            "/api/v1/products?limit=10", "/v2/orders/",
            "https://api.example.com/v3/carts", "https://api.example.com/v2",
            "/api/v1/cart"]
        assert "/openapi.json" in ex.swagger_files
        assert hints == ["https://api.example.com/v2"]

    def test_script_never_adds_script_urls(self):
        ex = CandidateExtractor(BASE)
        ex.scan_script('<script src="/x.js"></script>')
        assert ex.script_urls == []

    def test_add_api_strings_dedups(self):
        ex = CandidateExtractor(BASE)
        ex.add_api_strings(["/api/a", "/api/a", "https://x/v1/"])
        assert ex.api_strings == ["/api/a", "https://x/v1/"]
