"""Keeps API-like candidates that actually answer."""

from apiscout.checkers.base import BaseClassifier
from apiscout.core.models import NO_MATCH, Classification, ProbeResult, Responsive

SNIPPET_LEN = 400


class ApiProbeClassifier(BaseClassifier):

    name = "Responsive API candidate"

    def classify(self, result: ProbeResult) -> Classification:
        if not result.ok:
            return NO_MATCH
        return Responsive(status=result.status,
                          content_type=result.content_type,
                          snippet=result.body[:SNIPPET_LEN])
