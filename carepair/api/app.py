"""
CarePair Booking API - FastAPI application.

Exposes the booking submission and listing endpoints consumed by the
booking form, plus health and catalog endpoints.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import BackgroundTasks, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from carepair import __version__
from carepair.booking.handler import BookingSubmissionHandler
from carepair.booking.storage import create_store
from carepair.config import AppConfig, settings
from carepair.logging_context import new_request_id, set_request_id
from carepair.notifications.notifier import ConfirmationNotifier
from carepair.notifications.smtp import SmtpTransport
from carepair.tools.services import SERVICE_TYPES, TIME_SLOTS, get_all_services

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def build_handler(config: AppConfig) -> BookingSubmissionHandler:
    """Wire the handler to the configured store and, when enabled, the mailer."""
    notifier = None
    if config.mail.enabled:
        transport = SmtpTransport(config.mail, from_name=config.business.name)
        notifier = ConfirmationNotifier(transport, config.business)
    return BookingSubmissionHandler(
        store=create_store(config.storage),
        notifier=notifier,
        collection=config.storage.collection_name,
        list_limit=config.api.list_limit,
    )


def create_app(
    handler: Optional[BookingSubmissionHandler] = None,
    config: AppConfig = settings,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        handler: Pre-built submission handler (tests inject one backed by
            an in-memory store). Built from ``config`` on startup otherwise.
        config: Application configuration.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting %s...", config.service_name)
        if getattr(app.state, "handler", None) is None:
            app.state.handler = build_handler(config)
        logger.info("%s ready", config.service_name)
        yield
        store = app.state.handler.store
        if hasattr(store, "close"):
            store.close()
        logger.info("%s stopped", config.service_name)

    app = FastAPI(
        title="CarePair Booking API",
        description="Appointment booking for CarePair Auto Service",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.handler = handler

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.api.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or new_request_id()
        set_request_id(request_id)
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    def _handler(request: Request) -> BookingSubmissionHandler:
        return request.app.state.handler

    @app.post("/api/bookings")
    async def create_booking(request: Request, background_tasks: BackgroundTasks):
        """Validate and store one booking; confirmation email runs after the response."""
        try:
            payload = await request.json()
        except ValueError:
            payload = None

        result = await run_in_threadpool(
            _handler(request).submit, payload, background_tasks.add_task
        )
        return JSONResponse(status_code=result.status_code, content=result.body)

    @app.get("/api/bookings")
    async def list_bookings(
        request: Request,
        limit: Optional[int] = Query(None, ge=1, description="Maximum bookings to return"),
    ):
        result = await run_in_threadpool(_handler(request).list_recent, limit)
        return JSONResponse(status_code=result.status_code, content=result.body)

    @app.get("/api/services")
    async def list_services():
        return {
            "serviceTypes": list(SERVICE_TYPES),
            "timeSlots": list(TIME_SLOTS),
            "services": get_all_services(),
        }

    @app.get("/health")
    async def health(request: Request):
        ping = getattr(_handler(request).store, "ping", None)
        storage_ok = await run_in_threadpool(ping) if callable(ping) else True
        return {
            "status": "healthy" if storage_ok else "degraded",
            "service": config.service_name,
            "storage": "connected" if storage_ok else "unreachable",
        }

    return app


app = create_app()
