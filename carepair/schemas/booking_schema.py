"""Persisted booking record and HTTP response models."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

from carepair.utils import as_text
from carepair.validation.field_validators import parse_date


class BookingStatus(str, Enum):
    """Lifecycle status of a booking. Only PENDING is assigned for now."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class CustomerRecord(BaseModel):
    first_name: str
    last_name: str
    email: str
    phone: str


class VehicleRecord(BaseModel):
    make: str
    model: str
    year: int
    license_plate: str


class ServiceRecord(BaseModel):
    type: str
    date: datetime
    time: str
    notes: str = ""


class BookingRecord(BaseModel):
    """Normalized booking document as written to the store."""
    customer: CustomerRecord
    vehicle: VehicleRecord
    service: ServiceRecord
    status: BookingStatus = BookingStatus.PENDING
    created_at: datetime
    updated_at: datetime

    @property
    def customer_name(self) -> str:
        return f"{self.customer.first_name} {self.customer.last_name}"

    @classmethod
    def from_payload(
        cls, payload: dict[str, Any], now: Optional[datetime] = None
    ) -> "BookingRecord":
        """
        Build a normalized record from an already-validated payload.

        Strings are trimmed, the email lower-cased, the plate upper-cased,
        the year cast to int and the date parsed to a UTC calendar instant.
        Both timestamps are set to the submission time.
        """
        def text(key: str) -> str:
            return as_text(payload.get(key)).strip()

        submitted_at = now or datetime.now(timezone.utc)
        return cls(
            customer=CustomerRecord(
                first_name=text("firstName"),
                last_name=text("lastName"),
                email=text("email").lower(),
                phone=text("phone"),
            ),
            vehicle=VehicleRecord(
                make=text("make"),
                model=text("model"),
                year=int(text("year")),
                license_plate=text("licensePlate").upper(),
            ),
            service=ServiceRecord(
                type=text("serviceType"),
                date=parse_date(text("date")).replace(tzinfo=timezone.utc),
                time=text("time"),
                notes=text("notes"),
            ),
            status=BookingStatus.PENDING,
            created_at=submitted_at,
            updated_at=submitted_at,
        )

    def to_document(self) -> dict[str, Any]:
        """Dump to a plain dict with native datetimes for the document store."""
        document = self.model_dump(mode="python")
        document["status"] = self.status.value
        return document


class BookingCreatedResponse(BaseModel):
    success: bool = True
    bookingId: str
    message: str = "Booking created successfully"


class ValidationFailedResponse(BaseModel):
    error: str = "Validation failed"
    errors: dict[str, str] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    error: str


class BookingListResponse(BaseModel):
    bookings: list[dict[str, Any]] = Field(default_factory=list)
