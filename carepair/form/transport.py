"""
Transports that carry a serialized draft to the submission handler.

A transport is any callable taking the JSON payload and returning a
``SubmissionResult``. Transports never raise for network or server
failures; those come back as a failed result the form can display.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Optional

import httpx

from carepair.config import settings

if TYPE_CHECKING:
    from carepair.booking.handler import BookingSubmissionHandler

logger = logging.getLogger(__name__)

DEFAULT_SUBMIT_ERROR = "Failed to create booking. Please try again."


@dataclass(frozen=True)
class SubmissionResult:
    """What the form learns back from a submission attempt."""
    success: bool
    booking_id: Optional[str] = None
    error: Optional[str] = None
    field_errors: dict[str, str] = field(default_factory=dict)
    status_code: Optional[int] = None

    @classmethod
    def from_response(cls, status_code: int, body: Any) -> "SubmissionResult":
        """Map the ``POST /api/bookings`` wire contract onto a result."""
        body = body if isinstance(body, dict) else {}
        if 200 <= status_code < 300 and body.get("success"):
            return cls(
                success=True,
                booking_id=str(body.get("bookingId")) if body.get("bookingId") else None,
                status_code=status_code,
            )
        errors = body.get("errors")
        return cls(
            success=False,
            error=body.get("error") or DEFAULT_SUBMIT_ERROR,
            field_errors=dict(errors) if isinstance(errors, dict) else {},
            status_code=status_code,
        )


SubmissionTransport = Callable[[dict[str, Any]], SubmissionResult]


class HttpSubmissionTransport:
    """Posts the payload as JSON to the booking endpoint."""

    def __init__(
        self,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.url = url or settings.api.submit_url
        self._client = client or httpx.Client(
            timeout=timeout or settings.api.submit_timeout_sec
        )

    def __call__(self, payload: dict[str, Any]) -> SubmissionResult:
        try:
            response = self._client.post(self.url, json=payload)
        except httpx.HTTPError as e:
            logger.warning("Booking submission to %s failed: %s", self.url, e)
            return SubmissionResult(success=False, error=DEFAULT_SUBMIT_ERROR)

        try:
            body = response.json()
        except ValueError:
            body = {}
        return SubmissionResult.from_response(response.status_code, body)

    def close(self) -> None:
        self._client.close()


class HandlerTransport:
    """Calls an in-process submission handler directly (console demo, tests)."""

    def __init__(self, handler: BookingSubmissionHandler) -> None:
        self._handler = handler

    def __call__(self, payload: dict[str, Any]) -> SubmissionResult:
        response = self._handler.submit(payload)
        return SubmissionResult.from_response(response.status_code, response.body)
