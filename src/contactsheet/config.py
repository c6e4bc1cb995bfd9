from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple


@dataclass(frozen=True)
class Palette:
    """Colours used when formatting the submissions sheet (hex strings)."""

    header_background: str = "#1F4E79"
    header_text: str = "#FFFFFF"
    even_row: str = "#EAF1FB"
    odd_row: str = "#FFFFFF"
    border: str = "#B7C4D6"


@dataclass(frozen=True)
class IntakeConfig:
    """
    Static configuration for the intake pipeline.

    Attributes:
        spreadsheet_id: Identifier of the backing spreadsheet.
        sheet_name: Worksheet that receives submissions. The first worksheet is
            used when no worksheet has this title.
        operator_email: Address that receives failure notifications.
        sender_email: From address for notifications.
        max_rows: Data-row capacity of the worksheet (header excluded).
        warning_ratio: Fraction of max_rows at which a warning email is sent.
        timezone: IANA zone used for submission and notification timestamps.
        headers: Header row written to an empty worksheet.
        header_font_size: Font size for the header row.
        palette: Formatting colours.
    """

    spreadsheet_id: str = "contact-form-submissions"
    sheet_name: str = "Submissions"
    operator_email: str = "office@example.org"
    sender_email: str = "no-reply@example.org"
    max_rows: int = 1000
    warning_ratio: float = 0.9
    timezone: str = "Africa/Accra"
    headers: Tuple[str, ...] = ("Name", "Phone", "Location", "Date", "Time")
    header_font_size: int = 11
    palette: Palette = field(default_factory=Palette)

    @property
    def warning_rows(self) -> int:
        return int(self.max_rows * self.warning_ratio)

    @property
    def spreadsheet_url(self) -> str:
        return f"https://docs.google.com/spreadsheets/d/{self.spreadsheet_id}/edit"

    @classmethod
    def from_env(cls) -> "IntakeConfig":
        """
        Build the default config, overlaying deployment identifiers from the environment.

        Env vars:
            CONTACTSHEET_SPREADSHEET_ID, CONTACTSHEET_SHEET_NAME,
            CONTACTSHEET_OPERATOR_EMAIL, CONTACTSHEET_SENDER_EMAIL
        """
        base = cls()
        return replace(
            base,
            spreadsheet_id=os.getenv("CONTACTSHEET_SPREADSHEET_ID", base.spreadsheet_id),
            sheet_name=os.getenv("CONTACTSHEET_SHEET_NAME", base.sheet_name),
            operator_email=os.getenv("CONTACTSHEET_OPERATOR_EMAIL", base.operator_email),
            sender_email=os.getenv("CONTACTSHEET_SENDER_EMAIL", base.sender_email),
        )


@dataclass(frozen=True)
class Credentials:
    """Secrets for the outbound services. Empty values disable the matching collaborator."""

    sheets_token: Optional[str] = None
    smtp_host: Optional[str] = None
    smtp_port: int = 587
    smtp_username: Optional[str] = None
    smtp_password: Optional[str] = None
    mail_api_url: str = "https://api.sendgrid.com/v3/mail/send"
    mail_api_key: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Credentials":
        return cls(
            sheets_token=os.getenv("CONTACTSHEET_SHEETS_TOKEN") or None,
            smtp_host=os.getenv("CONTACTSHEET_SMTP_HOST") or None,
            smtp_port=int(os.getenv("CONTACTSHEET_SMTP_PORT", "587")),
            smtp_username=os.getenv("CONTACTSHEET_SMTP_USERNAME") or None,
            smtp_password=os.getenv("CONTACTSHEET_SMTP_PASSWORD") or None,
            mail_api_url=os.getenv("CONTACTSHEET_MAIL_API_URL", cls.mail_api_url),
            mail_api_key=os.getenv("CONTACTSHEET_MAIL_API_KEY") or None,
        )


def store_backend_from_env() -> str:
    """
    Determine which backing store to use.

    Env var:
        CONTACTSHEET_STORE: "sheets" (default) or "memory"
    """
    return os.getenv("CONTACTSHEET_STORE", "sheets").strip().lower()
