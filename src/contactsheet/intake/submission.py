from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List

from ..errors import ValidationError
from .parsing import FIELDS, SubmissionRequest

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M:%S"


@dataclass(frozen=True)
class Submission:
    """A validated contact-form entry, ready to append as one row."""

    name: str
    phone: str
    location: str
    date: str
    time: str

    def as_row(self) -> List[str]:
        return [self.name, self.phone, self.location, self.date, self.time]

    @property
    def timestamp(self) -> str:
        return f"{self.date} {self.time}"


def missing_fields(request: SubmissionRequest) -> List[str]:
    """Fields that are absent or blank, checked on the raw value and again after trimming."""
    missing = []
    for field_name in FIELDS:
        raw = getattr(request, field_name)
        if not raw or not raw.strip():
            missing.append(field_name)
    return missing


def build_submission(request: SubmissionRequest, now: datetime) -> Submission:
    """
    Validate a request and stamp it with the server's current time.

    Args:
        request: Parsed form fields.
        now: Timezone-aware current time.

    Raises:
        ValidationError: If any required field is empty.
    """
    missing = missing_fields(request)
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    return Submission(
        name=request.name.strip(),
        phone=request.phone.strip(),
        location=request.location.strip(),
        date=now.strftime(DATE_FORMAT),
        time=now.strftime(TIME_FORMAT),
    )
