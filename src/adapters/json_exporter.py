"""JSON export of a check run.

Why JSON:
- Machine-readable counterpart of the console transcript (CI artifacts,
  dashboards, diffs between runs).
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import CheckRun


def export_check_run_json(*, run: CheckRun, output_path: Path) -> Path:
    """Export `CheckRun` to UTF-8 JSON with a stable layout."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = run.model_dump(mode="json")
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
