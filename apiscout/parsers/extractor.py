"""Extractor: static mining of HTML/JS text for API candidates."""

import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Tuple

from apiscout.checkers.config_hints import extract_backend_hints
from apiscout.core.resolver import resolve


# ── Patterns ───────────────────────────────────────────────────

# straight quotes, backticks and their percent-encoded forms
_DELIM = r"""(?:"|%22|'|%27|`|%60)"""

API_STRING = re.compile(
    _DELIM
    + r"((?:/api/|/v\d+/"
    + r"|https?://[A-Za-z0-9\-._]+(?::\d+)?/(?:api|v\d+|openapi|swagger))"
    + r"[A-Za-z0-9_?&=/\-#.:%]*)"
    + _DELIM)

SWAGGER_FILENAME = re.compile(
    r"""(?:["'`]|%27|%60)"""
    r"""(/?[A-Za-z0-9_\-/]{0,256}(?:swagger|openapi)[A-Za-z0-9_\-/.]{0,256}\.(?:json|yaml|yml))"""
    r"""(?:["'`]|%27|%60)""", re.I)

# one tag and its attribute text, never crossing another "<"
ASSET_TAG = re.compile(r"""<(script|link|meta)\b([^<>]*)>""", re.I)
URL_ATTR = re.compile(r"""(?:^|\s)(href|content|src)\s*=\s*(?:"([^"]*)"|'([^']*)')""", re.I)

INTERESTING_FILE = re.compile(r"manifest|config|appsettings|package", re.I)


# ── Helper functions ───────────────────────────────────────────

def find_api_strings(text: str) -> List[str]:
    """Quoted fragments that look like API paths or API URLs."""
    return _unique(m.group(1) for m in API_STRING.finditer(text) if m.group(1))


def find_swagger_filenames(text: str) -> List[str]:
    """Quoted *.json/*.yaml/*.yml paths naming swagger or openapi."""
    return _unique(m.group(1) for m in SWAGGER_FILENAME.finditer(text) if m.group(1))


def _tag_attrs(markup: str) -> Iterator[Tuple[str, str, str]]:
    """(tag, attribute, value) for every URL-bearing attribute of script, link and meta."""
    for tag in ASSET_TAG.finditer(markup):
        for attr in URL_ATTR.finditer(tag.group(2)):
            value = attr.group(2) if attr.group(2) is not None else attr.group(3)
            if value:
                yield tag.group(1).lower(), attr.group(1).lower(), value


def find_script_urls(markup: str, base: str) -> List[str]:
    """Absolute URLs of <script src>; unresolvable ones are dropped."""
    srcs = (v for tag, name, v in _tag_attrs(markup) if tag == "script" and name == "src")
    return _unique(filter(None, (resolve(base, v) for v in srcs)))


def find_interesting_files(markup: str, base: str) -> List[str]:
    """Manifest/config/appsettings/package references in link, script and meta tags."""
    refs = (v for _, _, v in _tag_attrs(markup))
    return _unique(filter(None, (resolve(base, v) for v in refs
                                 if INTERESTING_FILE.search(v))))


def _unique(items: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(items))


@dataclass
class Extraction:
    api_strings: List[str] = field(default_factory=list)
    swagger_files: List[str] = field(default_factory=list)
    script_urls: List[str] = field(default_factory=list)


def extract(markup: str, base: str) -> Extraction:
    """Everything one HTML document offers. Swagger-named files are kept raw,
    other interesting references are stored resolved."""
    markup = markup or ""
    return Extraction(
        api_strings=find_api_strings(markup),
        swagger_files=_unique(find_swagger_filenames(markup)
                              + find_interesting_files(markup, base)),
        script_urls=find_script_urls(markup, base),
    )


# ── Extractor class ────────────────────────────────────────────

class CandidateExtractor:
    """
    Accumulates candidates across every document scanned in one run.

    Usage:
        ex = CandidateExtractor(base, logger)
        ex.scan_markup(html)
        hints = ex.scan_script(js_text)
        ex.api_strings, ex.swagger_files, ex.script_urls
    """

    def __init__(self, base: str, logger=None):
        self.base = base
        self.logger = logger
        self._api: Dict[str, None] = {}
        self._swagger: Dict[str, None] = {}
        self._scripts: Dict[str, None] = {}

    @property
    def api_strings(self) -> List[str]:
        return list(self._api)

    @property
    def swagger_files(self) -> List[str]:
        return list(self._swagger)

    @property
    def script_urls(self) -> List[str]:
        return list(self._scripts)

    def add_api_strings(self, items: Iterable[str]):
        for s in items:
            self._api.setdefault(s, None)

    def scan_markup(self, markup: str) -> Extraction:
        found = extract(markup, self.base)
        self.add_api_strings(found.api_strings)
        for s in found.swagger_files:
            self._swagger.setdefault(s, None)
        for s in found.script_urls:
            self._scripts.setdefault(s, None)
        if self.logger:
            self.logger.debug(
                f"Markup: {len(found.api_strings)} API-like, "
                f"{len(found.script_urls)} scripts, "
                f"{len(found.swagger_files)} interesting files")
        return found

    def scan_script(self, text: str) -> List[str]:
        """Mine one script body; returns its backend hints."""
        text = text or ""
        self.add_api_strings(find_api_strings(text))
        for s in find_swagger_filenames(text):
            self._swagger.setdefault(s, None)
        return extract_backend_hints(text)
