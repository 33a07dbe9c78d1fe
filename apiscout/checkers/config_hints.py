"""Backend URL hints leaked through config files and bundled scripts."""

import json
import re
from itertools import islice
from typing import List, Union

from apiscout.checkers.base import BaseClassifier
from apiscout.core.models import NO_MATCH, Classification, ConfigHint, ProbeResult

MAX_LINES = 2000
SNIPPET_LEN = 800

URL_IN_TEXT = re.compile(
    r"https?://[A-Za-z0-9\-._]+(?::\d+)?(?:/[A-Za-z0-9_\-/.?=&#:%]*)?")

# keys and calls that tend to sit next to the backend address
BACKEND_KEY = re.compile(
    r"\b(?:API_URL|API_BASE_URL|BACKEND_URL|BASE_URL|REACT_APP_API_URL"
    r"|VUE_APP_API_URL|NEXT_PUBLIC_API_URL|axios\.create|proxy"
    r"|server_url|backendHost|apiHost)\b|\bfetch\(", re.I)

# one quoted value; tested for '/api' or an API URL afterwards
QUOTED = re.compile(r"""['"]([^'"]*)['"]""")
SCHEME = re.compile(r"https?://", re.I)
BASE_URL_ASSIGN = re.compile(r"""baseURL\s*[:=]\s*['"]([^'"]+)['"]""", re.I)


def extract_backend_hints(text: Union[str, bytes, None]) -> List[str]:
    """
    Collect strings that look like a backend base address.

    Every absolute URL in the text counts. On top of that the first
    MAX_LINES lines are checked for backend keys; a URL on such a line wins,
    otherwise a quoted '/api' path or quoted API URL is taken. Any
    ``baseURL: "..."`` assignment contributes its value as-is.
    Order is first discovery, without duplicates.
    """
    text = BaseClassifier.as_text(text)
    found = {}

    for m in URL_IN_TEXT.finditer(text):
        found.setdefault(m.group(0), None)

    for line in islice(text.split("\n"), MAX_LINES):
        if BACKEND_KEY.search(line):
            urls = URL_IN_TEXT.findall(line)
            if urls:
                for u in urls:
                    found.setdefault(u, None)
            else:
                q = _quoted_api_value(line)
                if q is not None:
                    found.setdefault(q, None)
        ax = BASE_URL_ASSIGN.search(line)
        if ax:
            found.setdefault(ax.group(1), None)

    return list(found)


def _quoted_api_value(line: str) -> Union[str, None]:
    quoted = [m.group(1) for m in QUOTED.finditer(line)]
    for q in quoted:
        if "/api" in q.lower():
            return q
    for q in quoted:
        m = SCHEME.search(q)
        if m and "api" in q[m.end():].lower():
            return q
    return None


def proxy_from_package_json(text: str) -> List[str]:
    """The dev-server ``proxy`` field of a package.json, if any."""
    try:
        data = json.loads(text)
    except (ValueError, TypeError, RecursionError):
        # malformed, or nested deeper than the decoder can follow
        return []
    proxy = data.get("proxy") if isinstance(data, dict) else None
    return [proxy] if isinstance(proxy, str) and proxy.strip() else []


class ConfigHintClassifier(BaseClassifier):

    name = "Config file backend hints"

    def classify(self, result: ProbeResult) -> Classification:
        # error pages link to all sorts of hosts
        if result.status >= 400:
            return NO_MATCH
        hints = extract_backend_hints(result.body)
        if not hints and result.url.split("?", 1)[0].endswith("/package.json"):
            hints = proxy_from_package_json(result.body)
        if not hints:
            return NO_MATCH
        return ConfigHint(hints=tuple(hints), snippet=result.body[:SNIPPET_LEN])
