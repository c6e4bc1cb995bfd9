import pytest
import requests

from contactsheet.sheets import CellRange, CellStyle, SortKey, StorePermissionError, StoreUnavailable
from contactsheet.sheets.client import SheetsApiClient, SheetsApiError, a1_range, column_letter, hex_to_rgb

METADATA = {
    "spreadsheetUrl": "https://docs.google.com/spreadsheets/d/abc/edit",
    "sheets": [
        {"properties": {"sheetId": 0, "title": "Form Responses"}},
        {"properties": {"sheetId": 42, "title": "Submissions"}},
    ],
}


class FakeResponse:
    def __init__(self, status_code=200, payload=None, reason="OK"):
        self.status_code = status_code
        self.reason = reason
        self._payload = payload

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class FakeSession:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def open_sheet(*responses, title="Submissions"):
    session = FakeSession(FakeResponse(payload=METADATA), *responses)
    client = SheetsApiClient("token", base_url="https://sheets.test/v4", session=session)
    return client.open("abc").worksheet(title), session


@pytest.mark.parametrize("column, letters", [(1, "A"), (5, "E"), (26, "Z"), (27, "AA"), (703, "AAA")])
def test_column_letter(column, letters):
    assert column_letter(column) == letters


def test_a1_range_quotes_titles():
    assert a1_range("Bob's Sheet", CellRange(2, 1, 3, 5)) == "'Bob''s Sheet'!A2:E4"


def test_hex_to_rgb():
    assert hex_to_rgb("#FF0000") == {"red": 1.0, "green": 0.0, "blue": 0.0}
    with pytest.raises(ValueError):
        hex_to_rgb("red")


def test_open_lists_worksheets_and_sends_token():
    sheet, session = open_sheet()

    assert sheet.sheet_id == 42
    method, url, kwargs = session.calls[0]
    assert (method, url) == ("GET", "https://sheets.test/v4/spreadsheets/abc")
    assert kwargs["headers"]["Authorization"] == "Bearer token"


def test_last_row_counts_value_rows():
    sheet, _ = open_sheet(FakeResponse(payload={"values": [["Name"], ["Jane"], ["Kofi"]]}))
    assert sheet.last_row() == 3


def test_last_row_of_empty_sheet_is_zero():
    sheet, _ = open_sheet(FakeResponse(payload={"range": "'Submissions'!A1:Z1000"}))
    assert sheet.last_row() == 0


def test_append_row_uses_raw_values():
    sheet, session = open_sheet(FakeResponse(payload={"updates": {}}))

    sheet.append_row(["Jane Doe", "0551234567", "Accra", "2026-10-19", "09:30:15"])

    method, url, kwargs = session.calls[1]
    assert method == "POST"
    assert url.endswith(":append")
    assert kwargs["params"]["valueInputOption"] == "RAW"
    assert kwargs["json"] == {"values": [["Jane Doe", "0551234567", "Accra", "2026-10-19", "09:30:15"]]}


def test_apply_formats_builds_repeat_cell_and_borders():
    sheet, session = open_sheet(FakeResponse(payload={}))

    sheet.apply_formats(
        [
            (CellRange(1, 1, 1, 5), CellStyle(background="#000000", bold=True, horizontal_alignment="center")),
            (CellRange(2, 1, 3, 5), CellStyle(border_color="#FFFFFF")),
            (CellRange(2, 1, 0, 5), CellStyle(background="#FFFFFF")),
        ]
    )

    _, url, kwargs = session.calls[1]
    assert url.endswith("/spreadsheets/abc:batchUpdate")
    reqs = kwargs["json"]["requests"]
    assert len(reqs) == 2
    repeat = reqs[0]["repeatCell"]
    assert repeat["range"] == {
        "sheetId": 42,
        "startRowIndex": 0,
        "endRowIndex": 1,
        "startColumnIndex": 0,
        "endColumnIndex": 5,
    }
    assert repeat["cell"]["userEnteredFormat"]["horizontalAlignment"] == "CENTER"
    assert repeat["cell"]["userEnteredFormat"]["textFormat"] == {"bold": True}
    assert "userEnteredFormat.backgroundColor" in repeat["fields"]
    assert reqs[1]["updateBorders"]["innerHorizontal"]["style"] == "SOLID"


def test_sort_range_sort_specs():
    sheet, session = open_sheet(FakeResponse(payload={}))

    sheet.sort_range(CellRange(2, 1, 10, 5), [SortKey(4), SortKey(5, ascending=False)])

    specs = session.calls[1][2]["json"]["requests"][0]["sortRange"]["sortSpecs"]
    assert specs == [
        {"dimensionIndex": 3, "sortOrder": "ASCENDING"},
        {"dimensionIndex": 4, "sortOrder": "DESCENDING"},
    ]


def test_forbidden_is_a_permission_error():
    sheet, _ = open_sheet(FakeResponse(403, {"error": {"message": "denied"}}, "Forbidden"))

    with pytest.raises(StorePermissionError) as info:
        sheet.append_row(["x"])
    assert isinstance(info.value, SheetsApiError)
    assert info.value.details == {"message": "denied"}


@pytest.mark.parametrize(
    "response",
    [FakeResponse(404, None, "Not Found"), FakeResponse(503, None, "Unavailable"), requests.ConnectionError("dns")],
)
def test_unreachable_sheet_is_unavailable(response):
    session = FakeSession(response)
    client = SheetsApiClient("token", session=session)

    with pytest.raises(StoreUnavailable):
        client.open("missing")
