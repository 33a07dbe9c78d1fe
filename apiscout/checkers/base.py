"""Abstract base for all response classifiers."""

from abc import ABC, abstractmethod
from typing import Union

from apiscout.core.models import Classification, ProbeResult


class BaseClassifier(ABC):
    """Every classifier must implement classify() and must never raise."""

    name: str = "Unnamed Classifier"

    # ── public API ──────────────────────────────────────────────

    @abstractmethod
    def classify(self, result: ProbeResult) -> Classification:
        """
        Inspect one completed probe.
        Return NO_MATCH when the response is not interesting.
        """
        ...

    def __call__(self, result: ProbeResult) -> Classification:
        return self.classify(result)

    # ── shared helpers ──────────────────────────────────────────

    @staticmethod
    def as_text(body: Union[str, bytes, None]) -> str:
        """Decode whatever the transport handed us; never raises."""
        if body is None:
            return ""
        if isinstance(body, bytes):
            return body.decode("utf-8", errors="replace")
        return str(body)
