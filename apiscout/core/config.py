"""Scan-wide settings."""

from dataclasses import dataclass
from typing import Optional

USER_AGENT = "apiscout/1.0 (+authorized-testing-only)"


@dataclass(frozen=True)
class ScanConfig:
    timeout: float = 10.0          # seconds, hard deadline per request
    concurrency: int = 8
    polite_delay: float = 0.015    # seconds, per worker between targets
    user_agent: str = USER_AGENT
    proxy: Optional[str] = None
    verify: bool = False
    follow_redirects: bool = True
    head_first: bool = True
    max_body_bytes: int = 512 * 1024
    max_script_bytes: int = 2 * 1024 * 1024
    max_api_candidates: int = 1000
    max_suggested: int = 40

    def __post_init__(self):
        if self.concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        if self.timeout <= 0:
            raise ValueError("timeout must be > 0")
        if self.polite_delay < 0:
            raise ValueError("polite_delay must be >= 0")
        if self.max_body_bytes < 1 or self.max_script_bytes < 1:
            raise ValueError("body limits must be positive")
