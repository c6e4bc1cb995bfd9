from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..config import IntakeConfig
from ..errors import ErrorType
from ..sheets import StoreError, Worksheet


@dataclass(frozen=True)
class HealthStatus:
    is_healthy: bool
    message: str
    error_type: Optional[ErrorType] = None
    row_count: Optional[int] = None
    warning: Optional[str] = None


def check_sheet_health(sheet: Worksheet, config: IntakeConfig) -> HealthStatus:
    """
    Check that the worksheet can take another row.

    Crossing the warning threshold stays healthy and sets `warning`; the
    caller emails it once the row is saved. Reaching max_rows, or failing to
    read the sheet, is unhealthy.
    """
    try:
        row_count = max(sheet.last_row() - 1, 0)
    except StoreError as exc:
        return HealthStatus(False, f"Cannot read worksheet '{sheet.title}': {exc}", ErrorType.SHEET_UNAVAILABLE)

    if row_count >= config.max_rows:
        return HealthStatus(
            False,
            f"Worksheet '{sheet.title}' is full: {row_count} of {config.max_rows} rows used",
            ErrorType.ROW_LIMIT_REACHED,
            row_count,
        )

    warning = None
    if row_count >= config.warning_rows:
        warning = (
            f"Worksheet '{sheet.title}' is nearly full: {row_count} of {config.max_rows} rows used. "
            "Archive older submissions soon."
        )

    return HealthStatus(True, "Worksheet is healthy", row_count=row_count, warning=warning)
