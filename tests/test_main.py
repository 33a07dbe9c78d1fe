"""
test_main.py: CLI wiring and exit codes (no network: the engine is stubbed).
"""

import json

import pytest

from apiscout import main as cli
from apiscout.core.models import ScanReport


class StubEngine:
    last = None

    def __init__(self, config=None, wordlists=None, logger=None, observer=None):
        self.config = config
        self.wordlists = wordlists
        self.observer = observer
        self.closed = False
        StubEngine.last = self

    def scan(self, target, fuzz=False):
        self.fuzz = fuzz
        report = ScanReport(target=target)
        report.suggested_api_bases = ["https://api.example.com/"]
        return report

    def close(self):
        self.closed = True


class FailingEngine(StubEngine):
    def scan(self, target, fuzz=False):
        raise RuntimeError("boom")


@pytest.fixture
def stub_engine(monkeypatch):
    monkeypatch.setattr(cli, "Engine", StubEngine)
    return StubEngine


def test_missing_target_exits_2(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main([])
    assert exc.value.code == 2


def test_writes_report(tmp_path, stub_engine):
    out = tmp_path / "nested" / "scan.json"
    assert cli.main(["https://example.com", f"--out={out}"]) == 0
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["target"] == "https://example.com"
    assert data["discovered"]["suggestedApiBases"] == ["https://api.example.com/"]
    assert stub_engine.last.closed


def test_flags_reach_engine(tmp_path, stub_engine):
    paths = tmp_path / "paths.txt"
    paths.write_text("/a\n\n/b\n", encoding="utf-8")
    cli.main(["example.com", f"--out={tmp_path / 'r.json'}", f"--paths={paths}",
              "--fuzz", "--puppeteer", "--no-head", "--concurrency", "3"])
    engine = stub_engine.last
    assert engine.fuzz is True
    assert engine.wordlists.extra_paths == ("/a", "/b")
    assert engine.observer is not None
    assert engine.config.head_first is False
    assert engine.config.concurrency == 3


def test_unreadable_paths_file_is_a_warning(tmp_path, stub_engine, capsys):
    code = cli.main(["example.com", f"--out={tmp_path / 'r.json'}",
                     f"--paths={tmp_path / 'missing.txt'}"])
    assert code == 0
    assert "Could not read paths file" in capsys.readouterr().out


def test_unhandled_failure_exits_1(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(cli, "Engine", FailingEngine)
    assert cli.main(["example.com", f"--out={tmp_path / 'r.json'}"]) == 1
    assert "Fatal error" in capsys.readouterr().out
    assert FailingEngine.last.closed


def test_invalid_config_exits_1(tmp_path, stub_engine):
    assert cli.main(["example.com", "--concurrency", "0"]) == 1
