from __future__ import annotations

from dataclasses import dataclass, field, fields
from operator import itemgetter
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .base import CellRange, CellStyle, Row, SortKey, StoreUnavailable


@dataclass
class MemoryWorksheet:
    """
    In-process worksheet.

    Formatting is recorded per cell so tests can inspect the final appearance
    regardless of how many times it was applied.
    """

    title: str
    rows: List[Row] = field(default_factory=list)
    frozen_rows: int = 0
    styles: Dict[Tuple[int, int], CellStyle] = field(default_factory=dict)
    resized_columns: List[int] = field(default_factory=list)

    def last_row(self) -> int:
        return len(self.rows)

    def last_column(self) -> int:
        return max((len(r) for r in self.rows), default=0)

    def get_values(self, cells: CellRange) -> List[Row]:
        out: List[Row] = []
        for r in range(cells.row, cells.last_row + 1):
            src = self.rows[r - 1] if r <= len(self.rows) else []
            out.append(
                [src[c - 1] if c <= len(src) else "" for c in range(cells.column, cells.last_column + 1)]
            )
        return out

    def append_row(self, values: Sequence[Any]) -> None:
        self.rows.append(list(values))

    def freeze_rows(self, count: int) -> None:
        self.frozen_rows = count

    def apply_formats(self, formats: Sequence[Tuple[CellRange, CellStyle]]) -> None:
        for cells, style in formats:
            for r in range(cells.row, cells.last_row + 1):
                for c in range(cells.column, cells.last_column + 1):
                    self.styles[(r, c)] = _merge(self.styles.get((r, c)), style)

    def auto_resize_columns(self, first_column: int, count: int) -> None:
        for c in range(first_column, first_column + count):
            if c not in self.resized_columns:
                self.resized_columns.append(c)

    def sort_range(self, cells: CellRange, keys: Sequence[SortKey]) -> None:
        if cells.is_empty():
            return
        start, stop = cells.row - 1, cells.last_row
        block = self.rows[start:stop]
        # list.sort is stable, so sorting by the least significant key first
        # yields a multi-key ordering.
        for key in reversed(keys):
            block.sort(key=itemgetter(key.column - 1), reverse=not key.ascending)
        self.rows[start:stop] = block

    def style_at(self, row: int, column: int) -> Optional[CellStyle]:
        return self.styles.get((row, column))


def _merge(current: Optional[CellStyle], update: CellStyle) -> CellStyle:
    if current is None:
        return update
    merged = {
        f.name: getattr(update, f.name) if getattr(update, f.name) is not None else getattr(current, f.name)
        for f in fields(CellStyle)
    }
    return CellStyle(**merged)


@dataclass
class MemorySpreadsheet:
    spreadsheet_id: str
    sheets: List[MemoryWorksheet] = field(default_factory=list)

    @property
    def url(self) -> str:
        return f"memory://{self.spreadsheet_id}"

    def worksheet(self, title: str) -> Optional[MemoryWorksheet]:
        for sheet in self.sheets:
            if sheet.title == title:
                return sheet
        return None

    def worksheets(self) -> List[MemoryWorksheet]:
        return list(self.sheets)


class MemoryStore:
    """
    Opener for in-process spreadsheets, keyed by id.

    Used by the local runner (CONTACTSHEET_STORE=memory) and the test suite.
    """

    def __init__(self) -> None:
        self._spreadsheets: Dict[str, MemorySpreadsheet] = {}

    def create(self, spreadsheet_id: str, *titles: str) -> MemorySpreadsheet:
        spreadsheet = MemorySpreadsheet(
            spreadsheet_id, [MemoryWorksheet(t) for t in (titles or ("Sheet1",))]
        )
        self._spreadsheets[spreadsheet_id] = spreadsheet
        return spreadsheet

    def __call__(self, spreadsheet_id: str) -> MemorySpreadsheet:
        try:
            return self._spreadsheets[spreadsheet_id]
        except KeyError:
            raise StoreUnavailable(f"Spreadsheet '{spreadsheet_id}' not found") from None
