"""Shared test fixtures and helpers."""

from typing import Any, Optional

import pytest
from fastapi.testclient import TestClient

from carepair.api.app import create_app
from carepair.booking.handler import BookingSubmissionHandler
from carepair.booking.storage import InMemoryBookingStore
from carepair.config import BusinessConfig
from carepair.form.state_machine import BookingFormStateMachine
from carepair.form.transport import HandlerTransport
from carepair.notifications.notifier import ConfirmationNotifier

COLLECTION = "bookings"


def make_payload(**overrides: Any) -> dict[str, Any]:
    """A fully valid submission payload, with optional field overrides."""
    payload = {
        "firstName": "John",
        "lastName": "Doe",
        "email": "JOHN@EX.com",
        "phone": "555-0123-4",
        "make": "Toyota",
        "model": "Corolla",
        "year": "2018",
        "licensePlate": "abc-123",
        "serviceType": "Oil Change",
        "date": "2099-01-01",
        "time": "09:00 AM",
        "notes": "",
    }
    payload.update(overrides)
    return payload


def run_now(fn, *args):
    """Synchronous dispatcher so notifier effects are visible right away."""
    fn(*args)


class RecordingTransport:
    """Message transport fake that records what it was asked to send."""

    def __init__(self, result: bool = True, error: Optional[Exception] = None) -> None:
        self.result = result
        self.error = error
        self.sent: list[dict[str, str]] = []

    def send_message(self, recipient, subject, html_body, text_body) -> bool:
        if self.error is not None:
            raise self.error
        self.sent.append({
            "recipient": recipient,
            "subject": subject,
            "html": html_body,
            "text": text_body,
        })
        return self.result


class FailingStore:
    """Store fake whose every operation fails like an unreachable database."""

    def insert_record(self, collection, document):
        raise ConnectionError("ServerSelectionTimeoutError: localhost:27017 refused")

    def query_records(self, collection, filter=None, sort=None, limit=0):
        raise ConnectionError("ServerSelectionTimeoutError: localhost:27017 refused")


@pytest.fixture
def business():
    return BusinessConfig()


@pytest.fixture
def store():
    return InMemoryBookingStore()


@pytest.fixture
def mail_transport():
    return RecordingTransport()


@pytest.fixture
def notifier(mail_transport, business):
    return ConfirmationNotifier(mail_transport, business)


@pytest.fixture
def handler(store, notifier):
    return BookingSubmissionHandler(
        store, notifier=notifier, collection=COLLECTION, dispatch=run_now
    )


@pytest.fixture
def form(handler):
    return BookingFormStateMachine(transport=HandlerTransport(handler))


@pytest.fixture
def api_client(handler):
    return TestClient(create_app(handler=handler))


def fill_step(form: BookingFormStateMachine, values: dict[str, str]) -> None:
    for name, value in values.items():
        form.edit_field(name, value)


CUSTOMER_VALUES = {
    "firstName": "John", "lastName": "Doe",
    "email": "john@example.com", "phone": "0412 345 678",
}
VEHICLE_VALUES = {
    "make": "Toyota", "model": "Corolla", "year": "2018", "licensePlate": "ABC-123",
}
SERVICE_VALUES = {
    "serviceType": "Oil Change", "date": "2099-01-01", "time": "09:00 AM",
}
