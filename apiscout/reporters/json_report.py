import json
from pathlib import Path


def write_json(report, filename: str) -> Path:
    """Serialize a ScanReport to *filename* and return the written path."""
    path = Path(filename)
    if path.parent and not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(report.to_dict(), indent=2, ensure_ascii=False),
                    encoding="utf-8")
    return path
