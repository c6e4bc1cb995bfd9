"""
Spreadsheet capability used by the intake pipeline.

Rows and columns are 1-based, matching how spreadsheet users address cells.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Protocol, Sequence, Tuple

Row = List[Any]


class StoreError(RuntimeError):
    """Raised by a store implementation when an operation fails."""


class StoreUnavailable(StoreError):
    """The spreadsheet or worksheet cannot be reached."""


class StorePermissionError(StoreError):
    """The store rejected the operation (credentials or sharing)."""


@dataclass(frozen=True)
class CellRange:
    """A rectangular block of cells."""

    row: int
    column: int
    num_rows: int = 1
    num_columns: int = 1

    @property
    def last_row(self) -> int:
        return self.row + self.num_rows - 1

    @property
    def last_column(self) -> int:
        return self.column + self.num_columns - 1

    def is_empty(self) -> bool:
        return self.num_rows <= 0 or self.num_columns <= 0


@dataclass(frozen=True)
class CellStyle:
    """
    Formatting applied to a range. Fields left as None are not touched.

    horizontal_alignment is one of "left", "center", "right".
    """

    background: Optional[str] = None
    font_color: Optional[str] = None
    bold: Optional[bool] = None
    font_size: Optional[int] = None
    horizontal_alignment: Optional[str] = None
    border_color: Optional[str] = None


@dataclass(frozen=True)
class SortKey:
    column: int
    ascending: bool = True


class Worksheet(Protocol):
    title: str

    def last_row(self) -> int:
        """Index of the last row holding data, 0 when the sheet is empty."""
        ...

    def last_column(self) -> int:
        ...

    def get_values(self, cells: CellRange) -> List[Row]:
        ...

    def append_row(self, values: Sequence[Any]) -> None:
        ...

    def freeze_rows(self, count: int) -> None:
        ...

    def apply_formats(self, formats: Sequence[Tuple[CellRange, CellStyle]]) -> None:
        ...

    def auto_resize_columns(self, first_column: int, count: int) -> None:
        ...

    def sort_range(self, cells: CellRange, keys: Sequence[SortKey]) -> None:
        ...


class Spreadsheet(Protocol):
    url: str

    def worksheet(self, title: str) -> Optional[Worksheet]:
        ...

    def worksheets(self) -> List[Worksheet]:
        ...


class SpreadsheetOpener(Protocol):
    def __call__(self, spreadsheet_id: str) -> Spreadsheet:
        ...


def select_worksheet(spreadsheet: Spreadsheet, title: str) -> Worksheet:
    """
    Return the named worksheet, or the first one when it does not exist.

    Raises:
        StoreUnavailable: If the spreadsheet has no worksheets.
    """
    sheet = spreadsheet.worksheet(title)
    if sheet is not None:
        return sheet
    sheets = spreadsheet.worksheets()
    if not sheets:
        raise StoreUnavailable(f"Spreadsheet {spreadsheet.url} has no worksheets")
    return sheets[0]
