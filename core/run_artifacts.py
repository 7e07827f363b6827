"""Documentation run reports.

A run report is a JSON file describing one documentor run: its outcome, the
CSV files it generated, the per-file counters and the error that stopped it,
if any. Reports are named ``eventdoc-<run_id>.json``.
"""

from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Sequence

REPORT_PREFIX = "eventdoc"
DEFAULT_REPORT_DIR = "output/run_reports"
PIPELINE_NAME = "eventsource_documentor"


def build_run_report(
    status: str,
    generated_files: Sequence[str] = (),
    stats: Optional[Mapping[str, int]] = None,
    error: Optional[str] = None,
) -> dict[str, Any]:
    """Assemble the report payload of a documentation run.

    Args:
        status: ``"success"`` or ``"failed"``.
        generated_files: Paths of the CSV files written by the run.
        stats: Per-file counters of the run.
        error: Message of the error that stopped the run.
    """
    report: dict[str, Any] = {
        "pipeline": PIPELINE_NAME,
        "status": status,
        "generated_files": list(generated_files),
        "generated_count": len(generated_files),
        "stats": dict(stats or {}),
    }
    if error is not None:
        report["error"] = error
    return report


def run_report_path(run_id: str, output_dir: str = DEFAULT_REPORT_DIR) -> str:
    return os.path.join(output_dir, f"{REPORT_PREFIX}-{run_id}.json")


def write_run_report(
    report: Mapping[str, Any],
    run_id: str,
    output_dir: str = DEFAULT_REPORT_DIR,
) -> str:
    """Write a run report and return its path.

    ``run_id`` and ``timestamp_utc`` are filled in unless the report already
    carries them.
    """
    os.makedirs(output_dir, exist_ok=True)
    payload = dict(report)
    payload.setdefault("run_id", run_id)
    payload.setdefault("timestamp_utc", datetime.now(timezone.utc).isoformat())
    path = run_report_path(run_id, output_dir)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, sort_keys=True)
    return path
