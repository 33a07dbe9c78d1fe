"""Shared data models for the API scout."""

from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple, Union


@dataclass(frozen=True)
class ProbeTarget:
    """A raw candidate path and the absolute URL it resolved to."""
    path: str
    url: str


@dataclass(frozen=True)
class ProbeResult:
    """One completed HTTP exchange for a probe target."""
    url: str
    status: int
    content_type: str      # lower-cased, "" when absent
    body: str              # bounded prefix of the decoded body
    method: str            # "HEAD" or "GET"

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


# ── Classification variants ────────────────────────────────────

@dataclass(frozen=True)
class SwaggerLikely:
    reason: str
    snippet: str = ""
    kind: str = field(default="swagger_likely", init=False)


@dataclass(frozen=True)
class SwaggerMaybe:
    reason: str
    kind: str = field(default="swagger_maybe", init=False)


@dataclass(frozen=True)
class ConfigHint:
    hints: Tuple[str, ...]
    snippet: str = ""
    kind: str = field(default="config_hint", init=False)


@dataclass(frozen=True)
class Responsive:
    """An API-like candidate that answered with a success status."""
    status: int
    content_type: str
    snippet: str = ""
    kind: str = field(default="responsive", init=False)


@dataclass(frozen=True)
class NoMatch:
    kind: str = field(default="no_match", init=False)


NO_MATCH = NoMatch()

Classification = Union[SwaggerLikely, SwaggerMaybe, ConfigHint, Responsive, NoMatch]


@dataclass(frozen=True)
class ProbeHit:
    """A probe whose classifier accepted the response."""
    path: str
    url: str
    status: int
    classification: Classification

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "url": self.url,
            "status": self.status,
            "check": asdict(self.classification),
        }


@dataclass
class ConfigFinding:
    """Backend hints pulled out of one scanned document."""
    source: str
    hints: List[str]
    status: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"source": self.source, "hints": list(self.hints)}
        if self.status is not None:
            data["status"] = self.status
        return data


@dataclass
class ScanReport:
    """Everything one scan discovered. Written only by the orchestrating thread."""
    target: str
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat())
    html_api_candidates: List[str] = field(default_factory=list)
    script_urls: List[str] = field(default_factory=list)
    script_api_candidates: List[str] = field(default_factory=list)
    swagger_filenames: List[str] = field(default_factory=list)
    config_files: List[ConfigFinding] = field(default_factory=list)
    swagger_probes: List[ProbeHit] = field(default_factory=list)
    api_probes: List[ProbeHit] = field(default_factory=list)
    suggested_api_bases: List[str] = field(default_factory=list)
    dynamic_requests: List[str] = field(default_factory=list)

    @property
    def swagger_found(self) -> List[ProbeHit]:
        return [h for h in self.swagger_probes
                if isinstance(h.classification, SwaggerLikely)]

    @property
    def config_hints(self) -> List[str]:
        return [h for finding in self.config_files for h in finding.hints]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "target": self.target,
            "timestamp": self.timestamp,
            "discovered": {
                "htmlApiCandidates": list(self.html_api_candidates),
                "scriptUrls": list(self.script_urls),
                "scriptApiCandidates": list(self.script_api_candidates),
                "swaggerFilenames": list(self.swagger_filenames),
                "configFiles": [c.to_dict() for c in self.config_files],
                "swaggerProbes": [h.to_dict() for h in self.swagger_probes],
                "swaggerFound": [h.to_dict() for h in self.swagger_found],
                "apiProbes": [h.to_dict() for h in self.api_probes],
                "suggestedApiBases": list(self.suggested_api_bases),
                "dynamicRequests": list(self.dynamic_requests),
            },
        }
