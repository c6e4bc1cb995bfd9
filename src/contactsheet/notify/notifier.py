from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional, Sequence

from loguru import logger

from ..errors import ErrorType
from .channels import NotificationChannel

Clock = Callable[[], datetime]

SUBJECT_TEMPLATE = "[Contact Form] {error_type}: submission problem"

BODY_TEMPLATE = """The contact form backend reported a problem.

Error type: {error_type}
Message: {message}
Time: {timestamp}

Spreadsheet: {store_url}
"""


class ErrorNotifier:
    """
    Emails the operator about failures.

    Channels are tried in order and the first successful one wins. If every
    channel fails the notification is logged and dropped, it never raises.
    """

    def __init__(
        self,
        recipient: str,
        channels: Sequence[NotificationChannel],
        store_url: str,
        clock: Clock,
    ) -> None:
        self.recipient = recipient
        self.channels = list(channels)
        self.store_url = store_url
        self.clock = clock

    def compose(self, message: str, error_type: ErrorType, trace: Optional[str] = None) -> tuple[str, str]:
        label = ErrorType(error_type).value
        subject = SUBJECT_TEMPLATE.format(error_type=label)
        body = BODY_TEMPLATE.format(
            error_type=label,
            message=message,
            timestamp=self.clock().strftime("%Y-%m-%d %H:%M:%S %Z").strip(),
            store_url=self.store_url,
        )
        if trace:
            body += f"\nTrace:\n{trace}\n"
        return subject, body

    def notify(self, message: str, error_type: ErrorType, trace: Optional[str] = None) -> bool:
        """
        Send one notification.

        Returns:
            True if a channel accepted the email, False otherwise.
        """
        subject, body = self.compose(message, error_type, trace)
        for channel in self.channels:
            try:
                channel.send(self.recipient, subject, body)
            except Exception as exc:
                logger.warning("Notification channel {} failed: {}", channel.name, exc)
                continue
            logger.info("Operator notified via {} ({})", channel.name, error_type.value)
            return True

        logger.error(
            "All notification channels failed; dropping {} notification: {}",
            error_type.value,
            message,
        )
        return False
