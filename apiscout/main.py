import argparse
import sys

from apiscout.core.config import ScanConfig
from apiscout.core.engine import Engine
from apiscout.core.observer import PlaywrightObserver
from apiscout.core.wordlists import Wordlists, load_paths_file
from apiscout.reporters.console import Log
from apiscout.reporters.json_report import write_json


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="apiscout",
        description="Find API endpoints, Swagger/OpenAPI docs and leaked "
                    "backend URLs. Only scan assets you are allowed to test.")
    p.add_argument("target", help="Target URL (ej: https://example.com)")
    p.add_argument("--out", default="results.json", help="JSON report file")
    p.add_argument("--paths", help="Extra probe paths, one per line")
    p.add_argument("--puppeteer", action="store_true",
                   help="Capture runtime requests in a headless browser")
    p.add_argument("--fuzz", action="store_true",
                   help="Aggressive swagger/openapi path fuzzing (loud)")
    p.add_argument("--proxy", help="Proxy (ej: http://127.0.0.1:8080)")
    p.add_argument("--concurrency", type=int, default=8)
    p.add_argument("--timeout", type=float, default=10.0,
                   help="Seconds per request")
    p.add_argument("--no-head", action="store_true",
                   help="Skip the HEAD check and always GET")
    p.add_argument("-v", "--verbose", action="count", default=1,
                   help="-v, -vv")
    return p


def run(args) -> int:
    log = Log(verbose=args.verbose)
    config = ScanConfig(timeout=args.timeout, concurrency=args.concurrency,
                        proxy=args.proxy, head_first=not args.no_head)

    wordlists = Wordlists()
    if args.paths:
        try:
            extra = load_paths_file(args.paths)
            wordlists = wordlists.with_extra_paths(extra)
            log.info(f"Loaded {len(extra)} extra paths from {args.paths}")
        except OSError as exc:
            log.warn(f"Could not read paths file: {exc}")

    observer = PlaywrightObserver(config.user_agent, logger=log) if args.puppeteer else None
    engine = Engine(config=config, wordlists=wordlists, logger=log, observer=observer)
    try:
        report = engine.scan(args.target, fuzz=args.fuzz)
    finally:
        engine.close()

    try:
        path = write_json(report, args.out)
        log.ok(f"Results saved to {path}")
    except OSError as exc:
        log.fail(f"Failed to write results file: {exc}")

    log.summary(report)
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return run(args)
    except KeyboardInterrupt:
        print("Interrupted")
        return 130
    except Exception as exc:
        Log().fail(f"Fatal error: {exc!r}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
