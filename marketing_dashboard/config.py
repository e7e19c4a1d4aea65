"""Environment-driven settings for the dashboard entrypoint."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

DEFAULT_DATA_PATH = "public/marketing_dashboard_data.json"
DEFAULT_OUTPUT_DIR = "output"
DEFAULT_CURRENCY_SYMBOL = "₹"
DEFAULT_TOP_CHANNELS = 8
DEFAULT_PARSE_ERROR_THRESHOLD = 0.01
EXPORT_FILENAME = "export.csv"
SUMMARY_FILENAME = "summary.json"


@dataclass(frozen=True)
class DashboardSettings:
    data_path: Path
    output_dir: Path
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL
    top_channels: int = DEFAULT_TOP_CHANNELS
    parse_error_threshold: float = DEFAULT_PARSE_ERROR_THRESHOLD

    @property
    def export_path(self) -> Path:
        return self.output_dir / EXPORT_FILENAME

    @property
    def summary_path(self) -> Path:
        return self.output_dir / SUMMARY_FILENAME


def _parse_top_channels(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid MARKETING_TOP_CHANNELS: {raw}") from exc
    if value <= 0:
        raise ValueError(f"MARKETING_TOP_CHANNELS must be positive, got {value}")
    return value


def _parse_error_threshold(raw: str) -> float:
    try:
        threshold = float(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid MARKETING_PARSE_ERROR_THRESHOLD: {raw}") from exc
    if threshold < 0 or threshold > 1:
        raise ValueError(f"MARKETING_PARSE_ERROR_THRESHOLD must be in [0, 1], got {threshold}")
    return threshold


def load_settings(environ: Mapping[str, str] | None = None) -> DashboardSettings:
    env = os.environ if environ is None else environ
    symbol = env.get("MARKETING_CURRENCY_SYMBOL", DEFAULT_CURRENCY_SYMBOL)
    return DashboardSettings(
        data_path=Path(env.get("MARKETING_DATA_PATH", DEFAULT_DATA_PATH)),
        output_dir=Path(env.get("MARKETING_OUTPUT_DIR", DEFAULT_OUTPUT_DIR)),
        currency_symbol=symbol,
        top_channels=_parse_top_channels(env.get("MARKETING_TOP_CHANNELS", str(DEFAULT_TOP_CHANNELS))),
        parse_error_threshold=_parse_error_threshold(
            env.get("MARKETING_PARSE_ERROR_THRESHOLD", str(DEFAULT_PARSE_ERROR_THRESHOLD))
        ),
    )
