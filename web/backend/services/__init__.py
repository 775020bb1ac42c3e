"""Web service helpers."""
from .export_service import CSV_COLUMNS, selections_to_csv

__all__ = ['CSV_COLUMNS', 'selections_to_csv']
