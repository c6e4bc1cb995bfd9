from .channels import HttpMailChannel, NotificationChannel, NotificationError, SmtpChannel
from .notifier import ErrorNotifier

__all__ = [
    "ErrorNotifier",
    "HttpMailChannel",
    "NotificationChannel",
    "NotificationError",
    "SmtpChannel",
]
