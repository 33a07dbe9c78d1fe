from typing import List

from apiscout.checkers.api_probe import ApiProbeClassifier
from apiscout.checkers.config_hints import ConfigHintClassifier
from apiscout.checkers.swagger import SwaggerClassifier
from apiscout.core.aggregator import aggregate
from apiscout.core.config import ScanConfig
from apiscout.core.models import (
    ConfigFinding, ConfigHint, ProbeHit, ScanReport, SwaggerLikely,
)
from apiscout.core.observer import DynamicObserver, ObserverUnavailable
from apiscout.core.prober import Prober, expand_fuzz
from apiscout.core.resolver import normalize_target
from apiscout.core.wordlists import Wordlists
from apiscout.parsers.extractor import CandidateExtractor


class Engine:
    def __init__(self, config: ScanConfig | None = None,
                 wordlists: Wordlists | None = None, logger=None,
                 prober: Prober | None = None,
                 observer: DynamicObserver | None = None):
        self.config = config or ScanConfig()
        self.wordlists = wordlists or Wordlists()
        self.logger = logger
        self.prober = prober or Prober(self.config, logger=logger)
        self.observer = observer

    def close(self):
        self.prober.close()

    # ---------- probe lists ----------
    def swagger_paths(self, fuzz: bool = False) -> List[str]:
        wl = self.wordlists
        paths = list(dict.fromkeys(wl.swagger_paths + wl.extra_paths))
        if fuzz:
            paths += wl.aggressive_paths
            paths += expand_fuzz(wl.fuzz_prefixes, wl.fuzz_basenames)
        return paths
    # ----------------------------------

    def scan(self, target: str, fuzz: bool = False) -> ScanReport:
        base = normalize_target(target)
        report = ScanReport(target=base)
        extractor = CandidateExtractor(base, logger=self.logger)
        log = self.logger

        if log:
            log.info(f"Target: {base}")

        # 1) landing page
        if log:
            log.info("Fetching base HTML...")
        landing = self.prober.fetch(base)
        markup = landing.body if landing else ""
        if landing is None and log:
            log.fail(f"Failed to fetch target HTML: {base}")

        # 2) static extraction
        extractor.scan_markup(markup)

        # 3) runtime observation
        if self.observer is not None:
            self._observe(base, extractor, report)

        report.html_api_candidates = extractor.api_strings
        report.script_urls = extractor.script_urls
        if log:
            log.ok(f"Found {len(report.html_api_candidates)} API-like strings in HTML, "
                   f"{len(report.script_urls)} external scripts, "
                   f"{len(extractor.swagger_files)} swagger-like filenames.")

        # 4) external scripts
        if report.script_urls:
            if log:
                log.info("Fetching external scripts (best-effort)...")
            docs = self.prober.fetch_documents(report.script_urls)
            for url, text in sorted(docs):
                hints = extractor.scan_script(text)
                if hints:
                    report.config_files.append(ConfigFinding(source=url, hints=hints))
        report.script_api_candidates = extractor.api_strings[:self.config.max_api_candidates]
        report.swagger_filenames = extractor.swagger_files

        # 5) config files
        if log:
            log.info("Probing common config files (package.json, appsettings.json, .env)...")
        config_paths = list(self.wordlists.config_paths) + extractor.swagger_files
        for hit in self._sorted(self.prober.probe(base, config_paths, ConfigHintClassifier())):
            check = hit.classification
            if isinstance(check, ConfigHint):
                report.config_files.append(
                    ConfigFinding(source=hit.url, hints=list(check.hints), status=hit.status))
                if log:
                    log.finding("config", hit.url, f"{len(check.hints)} hints", hit.status)

        # 6) swagger / openapi
        if fuzz and log:
            log.warn("Aggressive fuzz mode enabled: generating additional "
                     "swagger-like paths (this may be loud)...")
        if log:
            log.info("Probing common swagger/openapi paths...")
        report.swagger_probes = self._sorted(
            self.prober.probe(base, self.swagger_paths(fuzz), SwaggerClassifier()))
        if log:
            for hit in report.swagger_probes:
                strong = isinstance(hit.classification, SwaggerLikely)
                log.finding("swagger" if strong else "maybe", hit.url,
                            hit.classification.reason, hit.status)
            if not report.swagger_probes:
                log.warn("No swagger/openapi discovered in common paths.")

        # 7) API-like candidates
        if log:
            log.info("Probing discovered API-like candidates...")
        candidates = list(dict.fromkeys(extractor.api_strings + report.dynamic_requests))
        candidates = candidates[:self.config.max_api_candidates]
        report.api_probes = self._sorted(
            self.prober.probe(base, candidates, ApiProbeClassifier()))
        if log:
            for hit in report.api_probes:
                log.finding("api", hit.url, code=hit.status)

        # 8) suggestions
        report.suggested_api_bases = aggregate(
            report.config_hints, report.api_probes, report.swagger_probes, base,
            limit=self.config.max_suggested)
        return report

    def _observe(self, base: str, extractor: CandidateExtractor, report: ScanReport):
        if self.logger:
            self.logger.info("Dynamic mode enabled: launching headless browser...")
        try:
            seen = self.observer.observe(base)
        except ObserverUnavailable as exc:
            if self.logger:
                self.logger.warn(f"Dynamic observation skipped: {exc}")
            return
        except Exception as exc:
            if self.logger:
                self.logger.warn(f"Dynamic observation failed: {exc}")
            return
        extractor.scan_markup(seen.rendered_markup)
        report.dynamic_requests = list(dict.fromkeys(seen.observed_urls))
        if self.logger:
            self.logger.ok(f"Observed {len(report.dynamic_requests)} runtime API requests")

    @staticmethod
    def _sorted(hits: List[ProbeHit]) -> List[ProbeHit]:
        # pool output is unordered; keep reports stable
        return sorted(hits, key=lambda h: h.url)
