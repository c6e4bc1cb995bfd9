from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from contactsheet.config import IntakeConfig
from contactsheet.intake import IntakePipeline
from contactsheet.notify import ErrorNotifier, NotificationError
from contactsheet.sheets import MemoryStore

FIXED_NOW = datetime(2026, 10, 19, 9, 30, 15, tzinfo=ZoneInfo("Africa/Accra"))


class RecordingChannel:
    def __init__(self, name: str = "recording", fail: bool = False) -> None:
        self.name = name
        self.fail = fail
        self.sent: list[tuple[str, str, str]] = []

    def send(self, recipient: str, subject: str, body: str) -> None:
        if self.fail:
            raise NotificationError(f"{self.name} is down")
        self.sent.append((recipient, subject, body))


def fill_sheet(sheet, headers, data_rows: int) -> None:
    sheet.append_row(list(headers))
    for i in range(data_rows):
        sheet.append_row([f"Person {i}", f"055{i:07d}", "Kumasi", "2026-01-01", "08:00:00"])


@pytest.fixture
def config() -> IntakeConfig:
    return IntakeConfig(spreadsheet_id="test-sheet", operator_email="ops@example.org")


@pytest.fixture
def store(config) -> MemoryStore:
    store = MemoryStore()
    store.create(config.spreadsheet_id, config.sheet_name)
    return store


@pytest.fixture
def sheet(store, config):
    return store(config.spreadsheet_id).worksheet(config.sheet_name)


@pytest.fixture
def channel() -> RecordingChannel:
    return RecordingChannel()


@pytest.fixture
def notifier(config, channel) -> ErrorNotifier:
    return ErrorNotifier(config.operator_email, [channel], config.spreadsheet_url, lambda: FIXED_NOW)


@pytest.fixture
def pipeline(config, store, notifier) -> IntakePipeline:
    return IntakePipeline(config, store, notifier, clock=lambda: FIXED_NOW)
