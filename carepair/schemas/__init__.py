from carepair.schemas.booking_schema import BookingRecord, BookingStatus
from carepair.schemas.form_schema import FORM_STEPS, WIRE_FIELDS, BookingDraft, FormStep

__all__ = [
    "BookingRecord",
    "BookingStatus",
    "BookingDraft",
    "FormStep",
    "FORM_STEPS",
    "WIRE_FIELDS",
]
