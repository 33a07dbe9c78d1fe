"""Folds every hint of a scan into suggested API base URLs."""

from typing import Dict, Iterable, List, Optional
from urllib.parse import urlsplit

from apiscout.core.models import ProbeHit
from apiscout.core.resolver import origin, resolve

MAX_SUGGESTED = 40


def _with_slash(url: str) -> str:
    return url if url.endswith("/") else url + "/"


def base_from_hint(hint: str, base: str) -> Optional[str]:
    """Absolute URL -> its origin; root-relative path -> resolved, kept whole."""
    hint = (hint or "").strip()
    if hint.startswith("/") and not hint.startswith("//"):
        resolved = resolve(base, hint)
        return _with_slash(resolved) if resolved else None
    o = origin(hint) if "://" in hint else None
    return o + "/" if o else None


def base_from_api_hit(url: str) -> Optional[str]:
    o = origin(url)
    return o + "/" if o else None


def base_from_swagger_hit(url: str) -> Optional[str]:
    """Origin plus the directory holding the document: /v3/api-docs -> /v3/."""
    o = origin(url)
    if not o:
        return None
    directory = urlsplit(url).path.rsplit("/", 1)[0]
    return f"{o}{directory}/"


def aggregate(config_hints: Iterable[str], api_hits: Iterable[ProbeHit],
              swagger_hits: Iterable[ProbeHit], base: str,
              limit: int = MAX_SUGGESTED) -> List[str]:
    """Config hints first, then API probes, then swagger findings."""
    suggested: Dict[str, None] = {}

    candidates = [base_from_hint(h, base) for h in config_hints]
    candidates += [base_from_api_hit(h.url) for h in api_hits]
    candidates += [base_from_swagger_hit(h.url) for h in swagger_hits]

    for c in candidates:
        if c is None:
            continue
        suggested.setdefault(_with_slash(c), None)
        if len(suggested) >= limit:
            break
    return list(suggested)
