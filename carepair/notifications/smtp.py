"""SMTP message transport for confirmation emails."""

import logging
import smtplib
import uuid
from datetime import datetime, timezone
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

from carepair.config import MailConfig

logger = logging.getLogger(__name__)


class SmtpTransport:
    """
    Sends multipart (plain + HTML) messages over SMTP with STARTTLS.

    ``send_message`` returns False instead of raising so callers can treat
    delivery as best-effort.
    """

    def __init__(self, config: MailConfig, from_name: Optional[str] = None) -> None:
        self._config = config
        self._from_name = from_name

    @property
    def configured(self) -> bool:
        return bool(self._config.smtp_host and self._config.sender)

    def build_message(
        self, recipient: str, subject: str, html_body: str, text_body: str
    ) -> MIMEMultipart:
        sender = self._config.sender.strip()
        display_from = (
            f"{self._from_name} <{sender}>" if self._from_name and "<" not in sender else sender
        )
        domain = sender.split("@")[-1] if "@" in sender else "localhost"

        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = display_from
        msg["To"] = recipient
        msg["Message-ID"] = f"<{uuid.uuid4()}@{domain}>"
        msg["Date"] = datetime.now(timezone.utc).strftime("%a, %d %b %Y %H:%M:%S +0000")
        msg.attach(MIMEText(text_body or "", "plain", _charset="utf-8"))
        msg.attach(MIMEText(html_body or "", "html", _charset="utf-8"))
        return msg

    def send_message(
        self, recipient: str, subject: str, html_body: str, text_body: str
    ) -> bool:
        if not self.configured:
            logger.error("SMTP not configured; cannot send email")
            return False

        msg = self.build_message(recipient, subject, html_body, text_body)
        try:
            with smtplib.SMTP(
                self._config.smtp_host, self._config.smtp_port,
                timeout=self._config.timeout_sec,
            ) as server:
                server.starttls()
                if self._config.smtp_user or self._config.smtp_pass:
                    server.login(self._config.smtp_user, self._config.smtp_pass)
                server.sendmail(self._config.sender, [recipient], msg.as_string())
        except (smtplib.SMTPException, OSError) as e:
            logger.exception("SMTP send to %s failed: %s", recipient, e)
            return False

        logger.info("Confirmation email sent to %s", recipient)
        return True
