"""
# Google Sheets HTTP Client

Thin wrapper around the Sheets REST API (v4) implementing the worksheet
capability the intake pipeline needs:

- GET  /spreadsheets/{id}                      (worksheet titles and ids)
- GET  /spreadsheets/{id}/values/{range}       (extents and cell values)
- POST /spreadsheets/{id}/values/{range}:append
- POST /spreadsheets/{id}:batchUpdate          (freeze, format, resize, sort)

Authentication is a bearer access token obtained outside this module.

## Usage
client = SheetsApiClient(access_token="...")
sheet = select_worksheet(client.open("1AbC..."), "Submissions")
sheet.append_row(["Jane Doe", "0551234567", "Accra", "2026-10-19", "09:30:00"])
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple, cast
from urllib.parse import quote

import requests

from .base import (
    CellRange,
    CellStyle,
    Row,
    SortKey,
    StoreError,
    StorePermissionError,
    StoreUnavailable,
)

JsonDict = Dict[str, Any]

SHEETS_API_URL = "https://sheets.googleapis.com/v4"


class SheetsApiError(StoreError):
    """
    Exception raised when the Sheets API returns a non-2xx response or cannot be reached.
    """

    def __init__(
        self, status_code: int, message: str, url: str, details: Optional[Any] = None
    ) -> None:
        super().__init__(f"[SheetsApiError] {status_code} {message} | url={url} | details={details}")
        self.status_code = status_code
        self.message = message
        self.url = url
        self.details = details


class SheetsPermissionError(SheetsApiError, StorePermissionError):
    pass


class SheetsUnavailableError(SheetsApiError, StoreUnavailable):
    pass


def _error_class(status_code: int) -> type:
    if status_code in (401, 403):
        return SheetsPermissionError
    if status_code in (404, 408, 429) or status_code >= 500 or status_code == 0:
        return SheetsUnavailableError
    return SheetsApiError


def column_letter(column: int) -> str:
    """Convert a 1-based column number to A1 letters (1 -> A, 27 -> AA)."""
    letters = ""
    while column > 0:
        column, rem = divmod(column - 1, 26)
        letters = chr(ord("A") + rem) + letters
    return letters


def a1_range(title: str, cells: CellRange) -> str:
    escaped = title.replace("'", "''")
    return (
        f"'{escaped}'!{column_letter(cells.column)}{cells.row}"
        f":{column_letter(cells.last_column)}{cells.last_row}"
    )


def hex_to_rgb(color: str) -> Dict[str, float]:
    value = color.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"Expected #RRGGBB colour, got {color!r}")
    r, g, b = (int(value[i : i + 2], 16) / 255.0 for i in (0, 2, 4))
    return {"red": r, "green": g, "blue": b}


# -----------------------------------------------------------------------------
# Client
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class SheetsApiClient:
    """
    A small client for the Sheets REST API.

    Attributes:
        access_token: OAuth bearer token with spreadsheet scope.
        base_url: API root, overridable for tests.
        timeout_s: Request timeout in seconds.
        session: Optional requests.Session for connection reuse.
    """

    access_token: str
    base_url: str = SHEETS_API_URL
    timeout_s: float = 10.0
    session: Optional[requests.Session] = None

    def _url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}{path}"

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[JsonDict] = None,
    ) -> JsonDict:
        """
        Perform an HTTP request and return the JSON response.

        Args:
            method: HTTP method (GET, POST, etc.)
            path: Route path below base_url, e.g. "/spreadsheets/abc"
            params: Optional query parameters
            json_body: Optional JSON request body

        Returns:
            Parsed JSON as dict.

        Raises:
            SheetsApiError: If the server returns non-2xx or cannot be reached.
        """
        url = self._url(path)
        sess = self.session or requests

        try:
            resp = sess.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                headers={"Authorization": f"Bearer {self.access_token}"},
                timeout=self.timeout_s,
            )
        except requests.RequestException as exc:
            raise SheetsUnavailableError(0, type(exc).__name__, url, str(exc)) from exc

        try:
            payload = resp.json()
        except ValueError:
            payload = None

        if not (200 <= resp.status_code < 300):
            details = payload.get("error") if isinstance(payload, dict) else payload
            raise _error_class(resp.status_code)(resp.status_code, resp.reason, url, details)

        if not isinstance(payload, dict):
            raise SheetsApiError(resp.status_code, "Expected JSON object response", url, payload)

        return cast(JsonDict, payload)

    def open(self, spreadsheet_id: str) -> "RemoteSpreadsheet":
        """
        Fetch worksheet metadata for a spreadsheet.

        Raises:
            SheetsUnavailableError: If the spreadsheet does not exist or the API is down.
        """
        payload = self.request(
            "GET",
            f"/spreadsheets/{spreadsheet_id}",
            params={"fields": "spreadsheetUrl,sheets.properties(sheetId,title)"},
        )
        sheets = [
            RemoteWorksheet(self, spreadsheet_id, int(p["sheetId"]), str(p["title"]))
            for p in (s.get("properties", {}) for s in payload.get("sheets", []))
        ]
        url = payload.get(
            "spreadsheetUrl", f"https://docs.google.com/spreadsheets/d/{spreadsheet_id}/edit"
        )
        return RemoteSpreadsheet(url=url, sheets=sheets)

    __call__ = open


@dataclass(frozen=True)
class RemoteSpreadsheet:
    url: str
    sheets: List["RemoteWorksheet"]

    def worksheet(self, title: str) -> Optional["RemoteWorksheet"]:
        return next((s for s in self.sheets if s.title == title), None)

    def worksheets(self) -> List["RemoteWorksheet"]:
        return list(self.sheets)


class RemoteWorksheet:
    """One tab of a remote spreadsheet. Every call is a round trip."""

    def __init__(self, client: SheetsApiClient, spreadsheet_id: str, sheet_id: int, title: str) -> None:
        self.client = client
        self.spreadsheet_id = spreadsheet_id
        self.sheet_id = sheet_id
        self.title = title

    # -------------------------
    # Values
    # -------------------------

    def _values_path(self, a1: str, suffix: str = "") -> str:
        return f"/spreadsheets/{self.spreadsheet_id}/values/{quote(a1, safe='')}{suffix}"

    def _all_values(self) -> List[Row]:
        escaped = self.title.replace("'", "''")
        payload = self.client.request("GET", self._values_path(f"'{escaped}'"))
        return cast(List[Row], payload.get("values", []))

    def last_row(self) -> int:
        return len(self._all_values())

    def last_column(self) -> int:
        return max((len(r) for r in self._all_values()), default=0)

    def get_values(self, cells: CellRange) -> List[Row]:
        payload = self.client.request("GET", self._values_path(a1_range(self.title, cells)))
        return cast(List[Row], payload.get("values", []))

    def append_row(self, values: Sequence[Any]) -> None:
        # RAW keeps phone numbers such as 0551234567 as text.
        self.client.request(
            "POST",
            self._values_path(a1_range(self.title, CellRange(1, 1)), ":append"),
            params={"valueInputOption": "RAW", "insertDataOption": "INSERT_ROWS"},
            json_body={"values": [list(values)]},
        )

    # -------------------------
    # batchUpdate helpers
    # -------------------------

    def _batch(self, requests_: List[JsonDict]) -> None:
        if not requests_:
            return
        self.client.request(
            "POST",
            f"/spreadsheets/{self.spreadsheet_id}:batchUpdate",
            json_body={"requests": requests_},
        )

    def _grid(self, cells: CellRange) -> JsonDict:
        return {
            "sheetId": self.sheet_id,
            "startRowIndex": cells.row - 1,
            "endRowIndex": cells.last_row,
            "startColumnIndex": cells.column - 1,
            "endColumnIndex": cells.last_column,
        }

    def freeze_rows(self, count: int) -> None:
        self._batch(
            [
                {
                    "updateSheetProperties": {
                        "properties": {"sheetId": self.sheet_id, "gridProperties": {"frozenRowCount": count}},
                        "fields": "gridProperties.frozenRowCount",
                    }
                }
            ]
        )

    def _style_requests(self, cells: CellRange, style: CellStyle) -> List[JsonDict]:
        fmt: JsonDict = {}
        fields: List[str] = []
        text: JsonDict = {}
        if style.background is not None:
            fmt["backgroundColor"] = hex_to_rgb(style.background)
            fields.append("userEnteredFormat.backgroundColor")
        if style.font_color is not None:
            text["foregroundColor"] = hex_to_rgb(style.font_color)
            fields.append("userEnteredFormat.textFormat.foregroundColor")
        if style.bold is not None:
            text["bold"] = style.bold
            fields.append("userEnteredFormat.textFormat.bold")
        if style.font_size is not None:
            text["fontSize"] = style.font_size
            fields.append("userEnteredFormat.textFormat.fontSize")
        if text:
            fmt["textFormat"] = text
        if style.horizontal_alignment is not None:
            fmt["horizontalAlignment"] = style.horizontal_alignment.upper()
            fields.append("userEnteredFormat.horizontalAlignment")

        out: List[JsonDict] = []
        if fields:
            out.append(
                {
                    "repeatCell": {
                        "range": self._grid(cells),
                        "cell": {"userEnteredFormat": fmt},
                        "fields": ",".join(fields),
                    }
                }
            )
        if style.border_color is not None:
            border = {"style": "SOLID", "color": hex_to_rgb(style.border_color)}
            out.append(
                {
                    "updateBorders": {
                        "range": self._grid(cells),
                        "top": border,
                        "bottom": border,
                        "left": border,
                        "right": border,
                        "innerHorizontal": border,
                        "innerVertical": border,
                    }
                }
            )
        return out

    def apply_formats(self, formats: Sequence[Tuple[CellRange, CellStyle]]) -> None:
        batch: List[JsonDict] = []
        for cells, style in formats:
            if not cells.is_empty():
                batch.extend(self._style_requests(cells, style))
        self._batch(batch)

    def auto_resize_columns(self, first_column: int, count: int) -> None:
        self._batch(
            [
                {
                    "autoResizeDimensions": {
                        "dimensions": {
                            "sheetId": self.sheet_id,
                            "dimension": "COLUMNS",
                            "startIndex": first_column - 1,
                            "endIndex": first_column - 1 + count,
                        }
                    }
                }
            ]
        )

    def sort_range(self, cells: CellRange, keys: Sequence[SortKey]) -> None:
        if cells.is_empty():
            return
        self._batch(
            [
                {
                    "sortRange": {
                        "range": self._grid(cells),
                        "sortSpecs": [
                            {
                                "dimensionIndex": k.column - 1,
                                "sortOrder": "ASCENDING" if k.ascending else "DESCENDING",
                            }
                            for k in keys
                        ],
                    }
                }
            ]
        )
