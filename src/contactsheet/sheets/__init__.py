from .base import (
    CellRange,
    CellStyle,
    SortKey,
    Spreadsheet,
    SpreadsheetOpener,
    StoreError,
    StorePermissionError,
    StoreUnavailable,
    Worksheet,
    select_worksheet,
)
from .client import SheetsApiClient, SheetsApiError
from .memory import MemoryStore

__all__ = [
    "CellRange",
    "CellStyle",
    "SortKey",
    "Spreadsheet",
    "SpreadsheetOpener",
    "StoreError",
    "StorePermissionError",
    "StoreUnavailable",
    "Worksheet",
    "select_worksheet",
    "SheetsApiClient",
    "SheetsApiError",
    "MemoryStore",
]
