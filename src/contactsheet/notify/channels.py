from __future__ import annotations

import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from typing import Optional, Protocol

import requests


class NotificationError(RuntimeError):
    """Raised by a channel when an email could not be handed off."""


class NotificationChannel(Protocol):
    name: str

    def send(self, recipient: str, subject: str, body: str) -> None:
        ...


@dataclass(frozen=True)
class SmtpChannel:
    """
    Send plain-text email through an SMTP relay with STARTTLS.

    Attributes:
        host: SMTP server hostname.
        port: SMTP submission port.
        sender: From address.
        username: Login name, login is skipped when None.
        password: Login password.
        timeout_s: Socket timeout in seconds.
    """

    host: str
    sender: str
    port: int = 587
    username: Optional[str] = None
    password: Optional[str] = None
    timeout_s: float = 10.0
    name: str = "smtp"

    def send(self, recipient: str, subject: str, body: str) -> None:
        msg = EmailMessage()
        msg["From"] = self.sender
        msg["To"] = recipient
        msg["Subject"] = subject
        msg.set_content(body)

        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout_s) as server:
                server.starttls()
                if self.username:
                    server.login(self.username, self.password or "")
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as exc:
            raise NotificationError(f"SMTP delivery via {self.host}:{self.port} failed: {exc}") from exc


@dataclass(frozen=True)
class HttpMailChannel:
    """
    Send email through a JSON mail API (SendGrid v3 `mail/send` request shape).
    """

    url: str
    api_key: str
    sender: str
    timeout_s: float = 10.0
    session: Optional[requests.Session] = None
    name: str = "http"

    def send(self, recipient: str, subject: str, body: str) -> None:
        payload = {
            "personalizations": [{"to": [{"email": recipient}]}],
            "from": {"email": self.sender},
            "subject": subject,
            "content": [{"type": "text/plain", "value": body}],
        }
        sess = self.session or requests
        try:
            resp = sess.post(
                self.url,
                json=payload,
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=self.timeout_s,
            )
        except requests.RequestException as exc:
            raise NotificationError(f"Mail API request to {self.url} failed: {exc}") from exc

        if not (200 <= resp.status_code < 300):
            raise NotificationError(f"Mail API returned {resp.status_code} {resp.reason}")
