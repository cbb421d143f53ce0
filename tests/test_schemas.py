"""Tests for the booking draft and the persisted booking record."""

from datetime import datetime, timezone

import pytest

from carepair.schemas.booking_schema import BookingRecord, BookingStatus
from carepair.schemas.form_schema import FORM_STEPS, WIRE_FIELDS, BookingDraft, FormStep
from tests.conftest import make_payload


class TestBookingDraft:
    def test_steps_in_order(self):
        assert FORM_STEPS == (
            FormStep.CUSTOMER_INFO, FormStep.VEHICLE_INFO, FormStep.SERVICE_SCHEDULE,
        )

    def test_with_field_returns_new_draft(self):
        draft = BookingDraft()
        updated = draft.with_field("licensePlate", "ABC-123")

        assert updated.license_plate == "ABC-123"
        assert draft.license_plate == ""

    def test_with_unknown_field(self):
        with pytest.raises(ValueError):
            BookingDraft().with_field("vin", "1HGCM82633A004352")

    def test_get_by_wire_name(self):
        draft = BookingDraft(service_type="Oil Change")
        assert draft.get("serviceType") == "Oil Change"
        assert draft.get("unknown", "fallback") == "fallback"

    def test_payload_uses_wire_names(self):
        payload = BookingDraft(first_name="John").to_payload()

        assert set(payload) == set(WIRE_FIELDS)
        assert payload["firstName"] == "John"

    def test_from_payload(self):
        draft = BookingDraft.from_payload({"firstName": "John", "year": 2018, "notes": None})

        assert draft.first_name == "John"
        assert draft.year == "2018"
        assert draft.notes == ""


class TestBookingRecord:
    NOW = datetime(2025, 3, 15, 10, 0, tzinfo=timezone.utc)

    def test_normalization(self):
        record = BookingRecord.from_payload(
            make_payload(firstName=" John ", email=" JOHN@EX.com ", licensePlate=" abc-123 "),
            now=self.NOW,
        )

        assert record.customer.first_name == "John"
        assert record.customer.email == "john@ex.com"
        assert record.vehicle.license_plate == "ABC-123"
        assert record.vehicle.year == 2018
        assert record.service.date == datetime(2099, 1, 1, tzinfo=timezone.utc)

    def test_phone_stored_as_entered(self):
        record = BookingRecord.from_payload(make_payload(phone=" 555-0123-4 "), now=self.NOW)
        assert record.customer.phone == "555-0123-4"

    def test_status_and_timestamps(self):
        record = BookingRecord.from_payload(make_payload(), now=self.NOW)

        assert record.status == BookingStatus.PENDING
        assert record.created_at == record.updated_at == self.NOW

    def test_customer_name(self):
        assert BookingRecord.from_payload(make_payload()).customer_name == "John Doe"

    def test_document_shape(self):
        document = BookingRecord.from_payload(make_payload(), now=self.NOW).to_document()

        assert set(document) == {
            "customer", "vehicle", "service", "status", "created_at", "updated_at",
        }
        assert document["status"] == "pending"
        assert isinstance(document["service"]["date"], datetime)
        assert document["service"]["notes"] == ""
