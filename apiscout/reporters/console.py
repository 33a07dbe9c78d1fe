import threading
from colorama import init as colorama_init, Fore, Style
from datetime import datetime
colorama_init(autoreset=True)


class Log:
    def __init__(self, verbose: int = 1):
        self.verbose = verbose
        self.URL = Fore.MAGENTA
        self._lock = threading.Lock()

    def _time(self):
        return datetime.now().strftime("[%H:%M:%S]")

    def _fmt(self, level: str, color: str):
        return f"{self._time()} {color}[{level}]{Style.RESET_ALL}"

    def _print(self, line: str):
        # worker threads log too
        with self._lock:
            print(line)

    def info(self, msg: str):
        if self.verbose >= 1:
            self._print(f"{self._fmt('INFO', Fore.CYAN)} {msg}")

    def warn(self, msg: str):
        if self.verbose >= 0:
            self._print(f"{self._fmt('WARNING', Fore.YELLOW)} {msg}")

    def ok(self, msg: str):
        self._print(f"{self._fmt('SUCCESS', Fore.GREEN)} {msg}")

    def fail(self, msg: str):
        self._print(f"{self._fmt('FAIL', Fore.RED)} {msg}")

    def debug(self, msg: str):
        if self.verbose >= 2:
            self._print(f"{self._fmt('DEBUG', Fore.MAGENTA)} {msg}")

    def finding(self, label: str, url: str, reason: str = "", code: int | None = None):
        col = {"swagger": Fore.BLUE, "maybe": Fore.CYAN, "config": Fore.YELLOW,
               "api": Fore.RED}.get(label, Fore.WHITE)
        extra = f" [{reason}]" if reason else ""
        status = f" {Style.DIM}(HTTP {code}){Style.RESET_ALL}" if code else ""
        self._print(f"{self._fmt('FOUND', col)} {self.URL}{url}{Style.RESET_ALL}"
                    f"{extra}{status}")

    def summary(self, report):
        rows = [
            ("Discovered HTML API-like candidates:", len(report.html_api_candidates)),
            ("External scripts fetched:", len(report.script_urls)),
            ("Discovered config-file hints:", len(report.config_files)),
            ("Swagger/openapi candidates found:", len(report.swagger_probes)),
            ("Confirmed swagger/openapi documents:", len(report.swagger_found)),
            ("Responding API probes:", len(report.api_probes)),
            ("Runtime requests observed:", len(report.dynamic_requests)),
        ]
        self._print(f"\n{Style.BRIGHT}=== Summary ==={Style.RESET_ALL}")
        for label, count in rows:
            self._print(f"{Fore.BLUE}{label}{Style.RESET_ALL} {count}")
        self._print(f"{Fore.GREEN}Suggested API base(s):{Style.RESET_ALL}")
        if not report.suggested_api_bases:
            self._print(f"{Fore.YELLOW}  (none found){Style.RESET_ALL}")
        for base in report.suggested_api_bases:
            self._print(f"  - {self.URL}{base}{Style.RESET_ALL}")
