"""URL resolution helpers. Pure functions, no I/O."""

from typing import Optional
from urllib.parse import urljoin, urlsplit, urlunsplit

_SCHEMES = ("http", "https")
_DEFAULT_PORTS = {"http": 80, "https": 443}


def resolve(base: str, candidate: str) -> Optional[str]:
    """
    Turn *candidate* into an absolute http(s) URL relative to *base*.

    Absolute candidates come back unchanged. Returns None for anything that
    cannot be resolved into an http(s) URL with a host.
    """
    if not isinstance(base, str) or not isinstance(candidate, str):
        return None
    candidate = candidate.strip()
    if not candidate:
        return None
    try:
        if _is_absolute_http(candidate):
            return candidate
        if not _is_absolute_http(base):
            return None
        joined = urljoin(base, candidate)
        return joined if _is_absolute_http(joined) else None
    except ValueError:
        return None


def _is_absolute_http(url: str) -> bool:
    parts = urlsplit(url)
    if parts.scheme.lower() not in _SCHEMES or not parts.netloc:
        return False
    # raises ValueError on a broken port or bracketed host
    parts.port
    return bool(parts.hostname)


def normalize_target(url: str) -> str:
    """Scan base: scheme defaulted to https, path always ends with '/'."""
    url = (url or "").strip()
    if "://" not in url:
        url = f"https://{url}"
    try:
        valid = _is_absolute_http(url)
    except ValueError:
        valid = False
    if not valid:
        raise ValueError(f"Invalid target URL: {url!r}")
    parts = urlsplit(url)
    path = parts.path if parts.path.endswith("/") else parts.path + "/"
    return urlunsplit((parts.scheme, parts.netloc, path, parts.query, ""))


def origin(url: str) -> Optional[str]:
    """scheme://host[:port] with default ports dropped, or None."""
    try:
        parts = urlsplit(url)
        if parts.scheme.lower() not in _SCHEMES or not parts.hostname:
            return None
        scheme = parts.scheme.lower()
        host = parts.hostname
        port = parts.port
    except ValueError:
        return None
    if ":" in host:
        host = f"[{host}]"
    if port is not None and port != _DEFAULT_PORTS[scheme]:
        return f"{scheme}://{host}:{port}"
    return f"{scheme}://{host}"
