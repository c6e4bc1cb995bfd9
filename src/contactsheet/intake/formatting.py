from __future__ import annotations

from typing import List, Tuple

from loguru import logger

from ..config import IntakeConfig
from ..sheets import CellRange, CellStyle, SortKey, Worksheet

DATE_COLUMN = 4
TIME_COLUMN = 5
LEFT_ALIGNED = 3  # name, phone, location


def format_sheet(sheet: Worksheet, config: IntakeConfig) -> None:
    """
    Restyle the submissions worksheet.

    Sorts data rows oldest first (date, then time), freezes and styles the
    header, bands data rows by parity, borders and aligns data cells, and
    auto-sizes the columns. Running it twice leaves the sheet unchanged.
    """
    width = len(config.headers)
    last_row = sheet.last_row()
    data_rows = max(last_row - 1, 0)
    data = CellRange(2, 1, data_rows, width)

    if data_rows > 1:
        sheet.sort_range(data, [SortKey(DATE_COLUMN), SortKey(TIME_COLUMN)])

    sheet.freeze_rows(1)

    palette = config.palette
    formats: List[Tuple[CellRange, CellStyle]] = [
        (
            CellRange(1, 1, 1, width),
            CellStyle(
                background=palette.header_background,
                font_color=palette.header_text,
                bold=True,
                font_size=config.header_font_size,
                horizontal_alignment="center",
            ),
        )
    ]
    if data_rows:
        for row in range(2, last_row + 1):
            color = palette.even_row if row % 2 == 0 else palette.odd_row
            formats.append((CellRange(row, 1, 1, width), CellStyle(background=color)))
        formats.extend(
            [
                (data, CellStyle(border_color=palette.border)),
                (CellRange(2, 1, data_rows, LEFT_ALIGNED), CellStyle(horizontal_alignment="left")),
                (
                    CellRange(2, LEFT_ALIGNED + 1, data_rows, width - LEFT_ALIGNED),
                    CellStyle(horizontal_alignment="center"),
                ),
            ]
        )
    sheet.apply_formats(formats)
    sheet.auto_resize_columns(1, width)


def format_sheet_safely(sheet: Worksheet, config: IntakeConfig) -> bool:
    """Run format_sheet, logging and swallowing any failure."""
    try:
        format_sheet(sheet, config)
    except Exception:
        logger.exception("Formatting worksheet '{}' failed; submission already saved", sheet.title)
        return False
    return True
