"""Infrastructure adapter for summary export targets."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def save_summary_json(path: Path, summary: dict[str, Any]) -> None:
    """Write the dashboard summary; record ids of non-JSON types are stringified."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(summary, indent=2, ensure_ascii=False, default=str), encoding="utf-8")
