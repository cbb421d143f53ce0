from carepair.notifications.notifier import (
    ConfirmationNotifier,
    NotificationResult,
    RenderedMessage,
)
from carepair.notifications.smtp import SmtpTransport

__all__ = ["ConfirmationNotifier", "NotificationResult", "RenderedMessage", "SmtpTransport"]
