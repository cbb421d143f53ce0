"""Form steps and the client-held booking draft."""

from dataclasses import asdict, dataclass, replace
from enum import Enum
from typing import Any, Optional


class FormStep(str, Enum):
    """Screens of the booking form, in order, plus the terminal state."""
    CUSTOMER_INFO = "customer_info"
    VEHICLE_INFO = "vehicle_info"
    SERVICE_SCHEDULE = "service_schedule"
    SUBMITTED = "submitted"


FORM_STEPS: tuple[FormStep, ...] = (
    FormStep.CUSTOMER_INFO,
    FormStep.VEHICLE_INFO,
    FormStep.SERVICE_SCHEDULE,
)

# Wire (JSON) field name -> draft attribute
WIRE_FIELDS: dict[str, str] = {
    "firstName": "first_name",
    "lastName": "last_name",
    "email": "email",
    "phone": "phone",
    "make": "make",
    "model": "model",
    "year": "year",
    "licensePlate": "license_plate",
    "serviceType": "service_type",
    "date": "date",
    "time": "time",
    "notes": "notes",
}


@dataclass(frozen=True)
class BookingDraft:
    """
    In-progress booking data held by the form.

    Frozen: every edit goes through ``with_field`` and yields a new draft,
    so earlier form snapshots never change underneath the caller.
    """
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    make: str = ""
    model: str = ""
    year: str = ""
    license_plate: str = ""
    service_type: str = ""
    date: str = ""
    time: str = ""
    notes: str = ""

    def get(self, wire_name: str, default: Optional[str] = None) -> Optional[str]:
        attr = WIRE_FIELDS.get(wire_name)
        if attr is None:
            return default
        return getattr(self, attr)

    def with_field(self, wire_name: str, value: str) -> "BookingDraft":
        if wire_name not in WIRE_FIELDS:
            raise ValueError(f"Unknown field: {wire_name}")
        return replace(self, **{WIRE_FIELDS[wire_name]: value})

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the JSON body expected by ``POST /api/bookings``."""
        values = asdict(self)
        return {wire: values[attr] for wire, attr in WIRE_FIELDS.items()}

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "BookingDraft":
        return cls(**{
            attr: str(payload[wire])
            for wire, attr in WIRE_FIELDS.items()
            if payload.get(wire) is not None
        })
