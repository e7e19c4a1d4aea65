"""Infrastructure layer package."""

from .data_repository import DataLoadError, load_records, save_export
from .report_exporter import save_summary_json

__all__ = ["DataLoadError", "load_records", "save_export", "save_summary_json"]
