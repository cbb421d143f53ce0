from carepair.booking.handler import BookingSubmissionHandler, HandlerResponse
from carepair.booking.storage import (
    BookingStore,
    InMemoryBookingStore,
    MongoBookingStore,
    create_store,
)

__all__ = [
    "BookingSubmissionHandler",
    "HandlerResponse",
    "BookingStore",
    "InMemoryBookingStore",
    "MongoBookingStore",
    "create_store",
]
