"""
Server-side booking submission handler.

Re-validates every submitted field (the form's checks are never trusted),
normalizes the payload into a ``BookingRecord``, writes it to the store and
dispatches the confirmation notifier after the write. Storage and notifier
failures are converted to generic results here; their details only reach
the log.
"""

import threading
from dataclasses import dataclass
from typing import Any, Callable, Optional

from carepair.booking.storage import BookingStore, serialize_doc
from carepair.logging_context import get_request_logger
from carepair.notifications.notifier import ConfirmationNotifier
from carepair.schemas.booking_schema import (
    BookingCreatedResponse,
    BookingListResponse,
    BookingRecord,
    ErrorResponse,
    ValidationFailedResponse,
)
from carepair.validation.aggregator import validate_payload

logger = get_request_logger(__name__)

DEFAULT_COLLECTION = "bookings"
DEFAULT_LIST_LIMIT = 100

CREATE_FAILED = "Failed to create booking"
FETCH_FAILED = "Failed to fetch bookings"
MALFORMED_BODY = "Request body must be a JSON object"

Dispatch = Callable[..., Any]


def run_in_thread(fn: Callable[..., Any], *args: Any) -> None:
    """Default dispatcher: run ``fn`` on a daemon thread so the response is not held up."""
    thread = threading.Thread(target=fn, args=args, daemon=True)
    thread.start()


@dataclass(frozen=True)
class HandlerResponse:
    """HTTP-shaped result: a status code and a JSON-serializable body."""
    status_code: int
    body: dict[str, Any]

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class BookingSubmissionHandler:
    """Validates, normalizes and stores booking submissions."""

    def __init__(
        self,
        store: BookingStore,
        notifier: Optional[ConfirmationNotifier] = None,
        collection: str = DEFAULT_COLLECTION,
        list_limit: int = DEFAULT_LIST_LIMIT,
        dispatch: Dispatch = run_in_thread,
    ) -> None:
        self._store = store
        self._notifier = notifier
        self._collection = collection
        self._list_limit = list_limit
        self._dispatch = dispatch

    @property
    def store(self) -> BookingStore:
        return self._store

    def submit(self, payload: Any, dispatch: Optional[Dispatch] = None) -> HandlerResponse:
        """
        Handle one booking submission.

        Args:
            payload: Decoded JSON body; anything other than an object is
                treated as a malformed request.
            dispatch: Overrides how the notifier is scheduled for this call
                (e.g. FastAPI ``BackgroundTasks.add_task``).

        Returns:
            201 with the new booking id, 400 with field errors, or 500.
        """
        if not isinstance(payload, dict):
            return HandlerResponse(
                400, ValidationFailedResponse(errors={"body": MALFORMED_BODY}).model_dump()
            )

        result = validate_payload(payload)
        if not result.is_valid:
            logger.info("Booking rejected: %d invalid field(s)", len(result.errors))
            return HandlerResponse(
                400, ValidationFailedResponse(errors=result.errors).model_dump()
            )

        record = BookingRecord.from_payload(payload)
        try:
            booking_id = self._store.insert_record(self._collection, record.to_document())
        except Exception:
            logger.exception("Booking insert into '%s' failed", self._collection)
            return HandlerResponse(500, ErrorResponse(error=CREATE_FAILED).model_dump())

        logger.info(
            "Booking %s created: %s on %s at %s",
            booking_id, record.service.type,
            record.service.date.date().isoformat(), record.service.time,
        )

        if self._notifier is not None:
            try:
                (dispatch or self._dispatch)(self.notify, record, booking_id)
            except Exception:
                logger.exception("Could not schedule confirmation for booking %s", booking_id)

        return HandlerResponse(201, BookingCreatedResponse(bookingId=booking_id).model_dump())

    def notify(self, record: BookingRecord, booking_id: str) -> None:
        """Send the confirmation; the outcome only goes to the log."""
        if self._notifier is None:
            return
        outcome = self._notifier.send(record, booking_id)
        if outcome.success:
            logger.info("Confirmation sent for booking %s", booking_id)
        else:
            logger.warning("Confirmation for booking %s not sent: %s", booking_id, outcome.error)

    def list_recent(self, limit: Optional[int] = None) -> HandlerResponse:
        """Return the newest bookings first, capped at the configured maximum."""
        bounded = min(limit, self._list_limit) if limit and limit > 0 else self._list_limit
        try:
            docs = self._store.query_records(
                self._collection, {}, [("created_at", -1)], bounded
            )
        except Exception:
            logger.exception("Booking query on '%s' failed", self._collection)
            return HandlerResponse(500, ErrorResponse(error=FETCH_FAILED).model_dump())

        bookings = [serialize_doc(doc) for doc in docs]
        return HandlerResponse(200, BookingListResponse(bookings=bookings).model_dump())
