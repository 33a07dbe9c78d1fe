"""Optional runtime observation of a page in a headless browser."""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List

from apiscout.core.config import USER_AGENT

NAV_TIMEOUT_MS = 20000

# runtime requests worth keeping
INTERESTING_REQUEST = re.compile(r"/api/|/v\d+/|swagger|openapi", re.I)


class ObserverUnavailable(RuntimeError):
    """The browser backend is not installed or cannot start."""


@dataclass
class Observation:
    rendered_markup: str = ""
    observed_urls: List[str] = field(default_factory=list)


class DynamicObserver(ABC):
    """Loads a page for real and reports what it requested."""

    @abstractmethod
    def observe(self, url: str) -> Observation:
        ...


class PlaywrightObserver(DynamicObserver):
    """Headless Chromium via Playwright (``pip install apiscout[browser]``)."""

    def __init__(self, user_agent: str = USER_AGENT, logger=None,
                 timeout_ms: int = NAV_TIMEOUT_MS):
        self.user_agent = user_agent
        self.logger = logger
        self.timeout_ms = timeout_ms

    def observe(self, url: str) -> Observation:
        try:
            from playwright.sync_api import Error as PlaywrightError
            from playwright.sync_api import sync_playwright
        except ImportError as exc:
            raise ObserverUnavailable(
                "playwright not installed. Install with: "
                "pip install playwright && playwright install chromium") from exc

        seen = {}

        def on_request(req):
            if INTERESTING_REQUEST.search(req.url):
                seen.setdefault(req.url, None)

        with sync_playwright() as pw:
            try:
                browser = pw.chromium.launch(
                    headless=True, args=["--no-sandbox", "--disable-setuid-sandbox"])
            except PlaywrightError as exc:
                raise ObserverUnavailable(f"browser launch failed: {exc}") from exc
            try:
                context = browser.new_context(
                    ignore_https_errors=True, user_agent=self.user_agent)
                page = context.new_page()
                page.on("request", on_request)
                try:
                    page.goto(url, wait_until="networkidle", timeout=self.timeout_ms)
                except PlaywrightError as exc:
                    # keep whatever loaded before the failure
                    if self.logger:
                        self.logger.warn(f"Browser navigation error: {exc}")
                markup = page.content()
            finally:
                browser.close()

        return Observation(rendered_markup=markup, observed_urls=list(seen))
