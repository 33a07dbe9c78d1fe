"""Swagger / OpenAPI detection on probe responses."""

import re
from typing import Union

from apiscout.checkers.base import BaseClassifier
from apiscout.core.models import (
    NO_MATCH, Classification, ProbeResult, SwaggerLikely, SwaggerMaybe,
)

SNIPPET_LEN = 600

REASON_MARKER = "marker in body"
REASON_UI = "swagger-ui html"
REASON_PLAIN_JSON = "200 json (no markers)"

# content-type fragments that may carry a machine-readable document
DOC_CONTENT_TYPES = ("json", "yaml", "application/octet-stream")

BODY_KEY_MARKERS = ('"swagger"', '"openapi"')
BODY_VERSION_PATTERNS = (
    re.compile(r"swagger:\s*2\.0", re.I),
    re.compile(r"openapi:\s*3\.", re.I),
)

UI_MARKERS = ("SwaggerUIBundle", "swagger-ui", "Redoc", "swagger-editor")


def _has_doc_marker(text: str) -> bool:
    if any(m in text for m in BODY_KEY_MARKERS):
        return True
    return any(rx.search(text) for rx in BODY_VERSION_PATTERNS)


def classify_swagger(status: int, content_type: Union[str, None],
                     body: Union[str, bytes, None]) -> Classification:
    """
    Decide whether one response looks like API documentation.

    Strong evidence (a version marker in a JSON/YAML body, or a known doc UI
    in HTML) is checked before the plain-JSON fallback, so it is never
    downgraded to SwaggerMaybe.
    """
    ct = str(content_type or "").lower()
    text = BaseClassifier.as_text(body)

    if any(t in ct for t in DOC_CONTENT_TYPES) and _has_doc_marker(text):
        return SwaggerLikely(reason=REASON_MARKER, snippet=text[:SNIPPET_LEN])

    if "html" in ct and any(m in text for m in UI_MARKERS):
        return SwaggerLikely(reason=REASON_UI, snippet=text[:SNIPPET_LEN])

    ok = isinstance(status, int) and 200 <= status < 300
    if ok and "json" in ct and text.strip().startswith("{"):
        return SwaggerMaybe(reason=REASON_PLAIN_JSON)
    return NO_MATCH


class SwaggerClassifier(BaseClassifier):

    name = "Swagger / OpenAPI document"

    def classify(self, result: ProbeResult) -> Classification:
        check = classify_swagger(result.status, result.content_type, result.body)
        if check is not NO_MATCH:
            return check
        # HEAD answers carry no body; a 2xx JSON type is still worth keeping
        if result.ok and "json" in result.content_type:
            return SwaggerMaybe(reason=REASON_PLAIN_JSON)
        return NO_MATCH
