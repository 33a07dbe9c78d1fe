"""
conftest.py: Shared pytest fixtures: a fake target site behind httpx.MockTransport.
"""

import threading

import httpx
import pytest

from apiscout.core.config import ScanConfig
from apiscout.core.prober import Prober


class FakeSite:
    """Route table keyed by path (query included). Records every request."""

    def __init__(self, routes=None, head_status=None):
        self.routes = dict(routes or {})
        self.head_status = head_status     # force a HEAD status, e.g. 405
        self.requests = []
        self._lock = threading.Lock()

    def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.raw_path.decode()
        with self._lock:
            self.requests.append((request.method, str(request.url)))
        route = self.routes.get(path)
        if isinstance(route, Exception):
            raise route
        if route is None:
            return httpx.Response(404, text="not found")
        status, ctype, body = route
        if request.method == "HEAD" and self.head_status is not None:
            return httpx.Response(self.head_status)
        return httpx.Response(status, headers={"content-type": ctype},
                              content=body.encode() if request.method != "HEAD" else b"")

    def count(self, method=None, url=None):
        return sum(1 for m, u in self.requests
                   if (method is None or m == method) and (url is None or u == url))


@pytest.fixture
def fast_config():
    return ScanConfig(polite_delay=0, concurrency=4, timeout=5)


@pytest.fixture
def make_prober(fast_config):
    created = []

    def _make(site, config=None):
        client = httpx.Client(transport=httpx.MockTransport(site))
        p = Prober(config or fast_config, client=client)
        created.append(p)
        return p

    yield _make
    for p in created:
        p.close()


@pytest.fixture
def fake_site():
    """Factory: fake_site({path: (status, content_type, body) | exception})."""
    return FakeSite
