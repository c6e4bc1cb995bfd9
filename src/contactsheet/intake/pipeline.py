from __future__ import annotations

import traceback
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Mapping, Optional, Type
from zoneinfo import ZoneInfo

from loguru import logger

from ..config import IntakeConfig
from ..errors import (
    ErrorType,
    IntakeError,
    PermissionDenied,
    RowLimitReached,
    SheetUnavailable,
    UnknownError,
)
from ..notify import ErrorNotifier
from ..sheets import SpreadsheetOpener, StoreError, StoreUnavailable, Worksheet, select_worksheet
from .formatting import format_sheet_safely
from .health import check_sheet_health
from .parsing import parse_payload
from .submission import Submission, build_submission

SUCCESS_MESSAGE = "Thank you! Your information has been received."

Clock = Callable[[], datetime]
# Schedules a callable to run after the response, e.g. BackgroundTasks.add_task.
Deferrer = Callable[..., Any]

UNHEALTHY_ERRORS: Dict[ErrorType, Type[IntakeError]] = {
    ErrorType.SHEET_UNAVAILABLE: SheetUnavailable,
    ErrorType.ROW_LIMIT_REACHED: RowLimitReached,
}


@dataclass(frozen=True)
class IntakeResult:
    status: str
    message: str
    status_code: int = 200
    timestamp: Optional[str] = None
    submission: Optional[Submission] = None

    @property
    def ok(self) -> bool:
        return self.status == "success"


def zone_clock(timezone: str) -> Clock:
    zone = ZoneInfo(timezone)
    return lambda: datetime.now(zone)


class IntakePipeline:
    """
    Turns one contact-form request into one stored row or one operator email.

    Every failure is caught here and converted into a generic client-facing
    result; details only reach the log and the notifier.
    """

    def __init__(
        self,
        config: IntakeConfig,
        opener: SpreadsheetOpener,
        notifier: ErrorNotifier,
        clock: Optional[Clock] = None,
    ) -> None:
        self.config = config
        self.opener = opener
        self.notifier = notifier
        self.clock = clock or zone_clock(config.timezone)

    def handle(
        self,
        params: Mapping[str, Any],
        body: str = "",
        defer: Optional[Deferrer] = None,
    ) -> IntakeResult:
        """
        Process a single submission.

        Args:
            params: Decoded named parameters (form fields and query string).
            body: Raw request body.
            defer: Optional scheduler for post-write formatting. Formatting runs
                inline when omitted.

        Returns:
            The result to send back to the caller.
        """
        try:
            request = parse_payload(params, body).resolve()
            submission = build_submission(request, self.clock())
            sheet = self._open_sheet()
            self._ensure_header(sheet)

            health = check_sheet_health(sheet, self.config)
            if not health.is_healthy:
                error_cls = UNHEALTHY_ERRORS.get(health.error_type, UnknownError)
                raise error_cls(health.message)

            self._write_row(sheet, submission.as_row())
        except IntakeError as exc:
            return self._fail(exc)
        except Exception as exc:
            return self._fail(UnknownError(f"{type(exc).__name__}: {exc}", trace=traceback.format_exc()))

        logger.info(
            "Saved submission to '{}' at {} ({} rows before append)",
            sheet.title,
            submission.timestamp,
            health.row_count,
        )

        if health.warning:
            logger.warning(health.warning)
            self.notifier.notify(health.warning, ErrorType.ROW_LIMIT_REACHED)

        if defer is not None:
            defer(format_sheet_safely, sheet, self.config)
        else:
            format_sheet_safely(sheet, self.config)

        return IntakeResult(
            "success", SUCCESS_MESSAGE, timestamp=submission.timestamp, submission=submission
        )

    def _open_sheet(self) -> Worksheet:
        try:
            spreadsheet = self.opener(self.config.spreadsheet_id)
            return select_worksheet(spreadsheet, self.config.sheet_name)
        except StoreError as exc:
            raise SheetUnavailable(f"Cannot open spreadsheet '{self.config.spreadsheet_id}': {exc}") from exc

    def _ensure_header(self, sheet: Worksheet) -> None:
        try:
            empty = sheet.last_row() == 0
        except StoreError as exc:
            raise SheetUnavailable(f"Cannot read worksheet '{sheet.title}': {exc}") from exc
        if empty:
            logger.info("Worksheet '{}' is empty; writing header row", sheet.title)
            self._write_row(sheet, list(self.config.headers))

    def _write_row(self, sheet: Worksheet, values: list) -> None:
        try:
            sheet.append_row(values)
        except StoreUnavailable as exc:
            raise SheetUnavailable(f"Worksheet '{sheet.title}' became unavailable during append: {exc}") from exc
        except StoreError as exc:
            raise PermissionDenied(f"Append to worksheet '{sheet.title}' was rejected: {exc}") from exc

    def _fail(self, exc: IntakeError) -> IntakeResult:
        if exc.notify_operator:
            logger.error("Submission failed ({}): {}", exc.error_type.value, exc.detail)
            self.notifier.notify(exc.detail, exc.error_type, exc.trace)
        else:
            logger.warning("Submission rejected ({}): {}", exc.error_type.value, exc.detail)
        return IntakeResult("error", exc.client_message, status_code=exc.status_code)
