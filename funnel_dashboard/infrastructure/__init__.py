"""Infrastructure layer package."""

from .csv_repository import CsvCodec, PolarsCsvCodec
from .report_exporter import save_csv_text, save_output_workbook, save_summary_json

__all__ = [
    "CsvCodec",
    "PolarsCsvCodec",
    "save_csv_text",
    "save_output_workbook",
    "save_summary_json",
]
