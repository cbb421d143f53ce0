"""
Booking confirmation notifier.

Renders a rich (HTML) and a plain-text confirmation from Jinja2 templates
and hands both to a message transport. Failures are reported as a
``NotificationResult``; nothing here ever raises into the booking flow.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional, Protocol

from jinja2 import Environment, FileSystemLoader, select_autoescape

from carepair.config import BusinessConfig
from carepair.schemas.booking_schema import BookingRecord

logger = logging.getLogger(__name__)

_templates_dir = os.path.join(os.path.dirname(__file__), "..", "templates")
_jinja_env = Environment(
    loader=FileSystemLoader(_templates_dir),
    autoescape=select_autoescape(["html", "xml"]),
    trim_blocks=True,
    lstrip_blocks=True,
)

HTML_TEMPLATE = "booking_confirmation.html"
TEXT_TEMPLATE = "booking_confirmation.txt"


class MessageTransport(Protocol):
    def send_message(
        self, recipient: str, subject: str, html_body: str, text_body: str
    ) -> bool: ...


@dataclass(frozen=True)
class RenderedMessage:
    subject: str
    html: str
    text: str


@dataclass(frozen=True)
class NotificationResult:
    success: bool
    error: Optional[str] = None


class ConfirmationNotifier:
    """Formats and sends the customer's booking confirmation."""

    def __init__(self, transport: MessageTransport, business: BusinessConfig) -> None:
        self._transport = transport
        self._business = business

    def render(self, record: BookingRecord, booking_id: str) -> RenderedMessage:
        context = {
            "business": self._business,
            "booking_id": booking_id,
            "customer_name": record.customer_name,
            "customer": record.customer,
            "vehicle": record.vehicle,
            "service": record.service,
            "service_date": record.service.date.strftime("%A, %B %d, %Y"),
        }
        return RenderedMessage(
            subject=f"Booking Confirmation - {self._business.name}",
            html=_jinja_env.get_template(HTML_TEMPLATE).render(**context),
            text=_jinja_env.get_template(TEXT_TEMPLATE).render(**context).strip(),
        )

    def send(self, record: BookingRecord, booking_id: str) -> NotificationResult:
        recipient = record.customer.email
        if not recipient:
            return NotificationResult(success=False, error="Booking has no email address")

        try:
            message = self.render(record, booking_id)
            sent = self._transport.send_message(
                recipient, message.subject, message.html, message.text
            )
        except Exception as e:
            logger.exception("Confirmation for booking %s failed", booking_id)
            return NotificationResult(success=False, error=f"{type(e).__name__}: {e}")

        if not sent:
            return NotificationResult(
                success=False, error=f"Transport refused message to {recipient}"
            )
        return NotificationResult(success=True)
