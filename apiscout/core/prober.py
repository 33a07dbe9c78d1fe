"""Bounded-concurrency probing over a shared pull queue."""

import queue
import threading
import time
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

import httpx

from apiscout.core.config import ScanConfig
from apiscout.core.models import (
    Classification, NoMatch, ProbeHit, ProbeResult, ProbeTarget,
)
from apiscout.core.resolver import resolve

Classifier = Callable[[ProbeResult], Optional[Classification]]

FUZZ_SUFFIXES = (".json", ".yaml", ".yml")

# swallowed per target
_PROBE_ERRORS = (httpx.HTTPError, httpx.InvalidURL, UnicodeDecodeError)


def expand_fuzz(prefixes: Sequence[str], basenames: Sequence[str]) -> List[str]:
    """prefix x basename, then a .json/.yaml/.yml copy of every entry."""
    generated = [p + b for p in prefixes for b in basenames]
    out = list(generated)
    for suffix in FUZZ_SUFFIXES:
        out.extend(g + suffix for g in generated)
    return out


def build_targets(base: str, paths: Iterable[str]) -> List[ProbeTarget]:
    """Resolve paths, dropping invalid ones and collapsing duplicate URLs."""
    seen = set()
    targets: List[ProbeTarget] = []
    for p in paths:
        url = resolve(base, p)
        if url is None or url in seen:
            continue
        seen.add(url)
        targets.append(ProbeTarget(path=p, url=url))
    return targets


class ResultSink:
    """Append-only list shared by the workers of one pool run."""

    def __init__(self):
        self._items: list = []
        self._lock = threading.Lock()

    def append(self, item):
        with self._lock:
            self._items.append(item)

    def items(self) -> list:
        with self._lock:
            return list(self._items)


class Prober:
    """
    Runs HTTP probes with a fixed pool of worker threads.

    Usage:
        prober = Prober(ScanConfig(), logger=log)
        hits = prober.probe("http://example.com/", paths, classify)
    """

    def __init__(self, config: ScanConfig | None = None, logger=None,
                 client: httpx.Client | None = None):
        self.config = config or ScanConfig()
        self.logger = logger
        self.client = client or httpx.Client(
            verify=self.config.verify, proxy=self.config.proxy,
            follow_redirects=self.config.follow_redirects,
            timeout=self.config.timeout,
            headers={"User-Agent": self.config.user_agent})

    def close(self):
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    # ── public API ──────────────────────────────────────────────

    def probe(self, base: str, paths: Iterable[str], classify: Classifier,
              concurrency: int | None = None) -> List[ProbeHit]:
        """
        Request every unique resolved path and keep the ones *classify* accepts.
        Result order is not meaningful.
        """
        targets = build_targets(base, paths)
        if self.logger:
            self.logger.debug(f"Probing {len(targets)} unique URLs")

        def handle(target: ProbeTarget, sink: ResultSink):
            result = self._request(target.url)
            if result is None:
                return
            check = classify(result)
            if check is None or isinstance(check, NoMatch):
                return
            sink.append(ProbeHit(path=target.path, url=target.url,
                                 status=result.status, classification=check))

        return self._run_pool(targets, handle, concurrency)

    def fetch(self, url: str, limit: int | None = None) -> Optional[ProbeResult]:
        """Single GET with the bounded-body reader. Errors return None."""
        try:
            return self._attempt("GET", url, limit or self.config.max_body_bytes)
        except _PROBE_ERRORS as exc:
            if self.logger:
                self.logger.debug(f"GET {url} failed: {exc}")
            return None

    def fetch_documents(self, urls: Iterable[str],
                        limit: int | None = None) -> List[Tuple[str, str]]:
        """GET each URL through the worker pool; returns (url, text) pairs."""
        limit = limit or self.config.max_script_bytes
        targets = [ProbeTarget(path=u, url=u) for u in dict.fromkeys(urls)]

        def handle(target: ProbeTarget, sink: ResultSink):
            result = self.fetch(target.url, limit)
            if result is not None:
                sink.append((target.url, result.body))

        return self._run_pool(targets, handle, None)

    # ── worker pool ─────────────────────────────────────────────

    def _run_pool(self, targets: List[ProbeTarget], handle, concurrency):
        work: "queue.Queue[ProbeTarget]" = queue.Queue()
        for t in targets:
            work.put(t)

        sink = ResultSink()
        failures = ResultSink()

        def worker():
            while True:
                try:
                    target = work.get_nowait()
                except queue.Empty:
                    return
                try:
                    handle(target, sink)
                except Exception as exc:
                    # only a faulty classifier gets here; stop this worker
                    failures.append(exc)
                    return
                finally:
                    if self.config.polite_delay:
                        time.sleep(self.config.polite_delay)

        n = max(1, concurrency or self.config.concurrency)
        n = min(n, len(targets)) or 1
        threads = [threading.Thread(target=worker, name=f"probe-{i}", daemon=True)
                   for i in range(n)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        errors = failures.items()
        if errors:
            raise errors[0]
        return sink.items()

    # ── request protocol ────────────────────────────────────────

    def _request(self, url: str) -> Optional[ProbeResult]:
        """HEAD first, one GET fallback. Any failure yields None."""
        limit = self.config.max_body_bytes
        if self.config.head_first:
            try:
                result = self._attempt("HEAD", url, limit)
                if result.status < 400:
                    return result
            except _PROBE_ERRORS as exc:
                if self.logger:
                    self.logger.debug(f"HEAD {url} failed: {exc}")
        try:
            return self._attempt("GET", url, limit)
        except _PROBE_ERRORS as exc:
            if self.logger:
                self.logger.debug(f"GET {url} failed: {exc}")
            return None

    def _attempt(self, method: str, url: str, limit: int) -> ProbeResult:
        deadline = time.monotonic() + self.config.timeout
        with self.client.stream(method, url) as resp:
            chunks: List[bytes] = []
            size = 0
            if method != "HEAD":
                for chunk in resp.iter_bytes():
                    if time.monotonic() > deadline:
                        raise httpx.ReadTimeout(
                            f"deadline of {self.config.timeout}s exceeded",
                            request=resp.request)
                    chunks.append(chunk)
                    size += len(chunk)
                    if size >= limit:
                        break
            raw = b"".join(chunks)[:limit]
            encoding = resp.encoding or "utf-8"
            try:
                body = raw.decode(encoding, errors="replace")
            except LookupError:
                body = raw.decode("utf-8", errors="replace")
            return ProbeResult(
                url=url,
                status=resp.status_code,
                content_type=(resp.headers.get("content-type") or "").lower(),
                body=body,
                method=method,
            )
