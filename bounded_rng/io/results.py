from __future__ import annotations

import json
from pathlib import Path

from bounded_rng.analysis.uniformity import UniformityReport


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def write_report(path: Path, report: UniformityReport) -> Path:
    ensure_dir(path.parent)
    path.write_text(json.dumps(report.to_dict(), indent=2), encoding="utf-8")
    return path


def load_report(path: Path) -> UniformityReport:
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError(f"Report file must contain a mapping: {path}")
    return UniformityReport(**payload)
