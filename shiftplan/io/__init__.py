"""I/O utilities for CSV import/export."""

from .export_csv import export_predictions_csv, export_shifts_csv, export_staff_csv
from .import_csv import import_forecasts_csv, import_staff_csv

__all__ = [
    "import_staff_csv",
    "import_forecasts_csv",
    "export_shifts_csv",
    "export_staff_csv",
    "export_predictions_csv",
]
