"""Marketing Dashboard entrypoint."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from marketing_dashboard.application.dashboard_service import run_dashboard
from marketing_dashboard.application.sorting import resolve_direction, resolve_sort_field
from marketing_dashboard.config import load_settings
from marketing_dashboard.domain.models import FilterCriteria, SortDirection, SortField, SortSpec
from marketing_dashboard.infrastructure.data_repository import DataLoadError


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Aggregate, filter and export marketing performance records.")
    parser.add_argument("--input", type=Path, help="Dataset file (.json, .csv or .xlsx)")
    parser.add_argument("--output-dir", type=Path, help="Directory for summary.json and export.csv")
    parser.add_argument("--channel", default="", help="Exact channel to keep")
    parser.add_argument("--region", default="", help="Exact region to keep")
    parser.add_argument("--query", default="", help="Case-insensitive search over channel or region")
    parser.add_argument(
        "--sort-by",
        default=SortField.SPEND.value,
        choices=[item.value for item in SortField],
    )
    parser.add_argument(
        "--direction",
        default=SortDirection.DESC.value,
        choices=[item.value for item in SortDirection],
    )
    parser.add_argument("--export", action=argparse.BooleanOptionalAction, default=True)
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = load_settings()
    if args.input is not None:
        settings = replace(settings, data_path=args.input)
    if args.output_dir is not None:
        settings = replace(settings, output_dir=args.output_dir)

    criteria = FilterCriteria(channel=args.channel, region=args.region, query=args.query)
    sort_field = resolve_sort_field(args.sort_by) or SortField.SPEND
    sort = SortSpec(field=sort_field, direction=resolve_direction(args.direction))

    try:
        result = run_dashboard(settings, criteria=criteria, sort=sort, export=args.export)
    except DataLoadError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(result.summary, indent=2, ensure_ascii=False))
    stage_text = ", ".join([f"{name}={seconds:.3f}s" for name, seconds in result.stage_timings])
    print(f"Stage Timing: {stage_text}")
    print(f"Saved JSON: {settings.summary_path}")
    if result.export_saved:
        print(f"Saved CSV: {settings.export_path}")
    elif args.export:
        print(f"CSV export skipped: {result.export_message}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
