import pytest

from conftest import fill_sheet
from contactsheet.errors import ErrorType
from contactsheet.intake import HealthStatus, check_sheet_health
from contactsheet.sheets import StoreUnavailable


def test_unreadable_sheet_is_unavailable(sheet, config, monkeypatch):
    def down():
        raise StoreUnavailable("quota exceeded")

    monkeypatch.setattr(sheet, "last_row", down)

    status = check_sheet_health(sheet, config)

    assert status.is_healthy is False
    assert status.error_type == ErrorType.SHEET_UNAVAILABLE
    assert status.row_count is None
    assert "quota exceeded" in status.message


@pytest.mark.parametrize(
    "existing, healthy, error_type, warned",
    [
        (899, True, None, False),
        (900, True, None, True),
        (1000, False, ErrorType.ROW_LIMIT_REACHED, False),
    ],
)
def test_row_count_thresholds(sheet, config, existing, healthy, error_type, warned):
    fill_sheet(sheet, config.headers, existing)

    status = check_sheet_health(sheet, config)

    assert status.is_healthy is healthy
    assert status.error_type == error_type
    assert status.row_count == existing
    assert (status.warning is not None) is warned


def test_empty_sheet_counts_zero_rows(sheet, config):
    assert check_sheet_health(sheet, config) == HealthStatus(True, "Worksheet is healthy", row_count=0)
