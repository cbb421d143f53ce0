"""Tests for import chains and module integrity.

Ensures all public modules can be imported without errors and
that re-exports from __init__.py files work correctly.
"""


class TestSchemaImports:
    def test_import_form_schema(self):
        from carepair.schemas import FORM_STEPS, BookingDraft, FormStep
        assert FormStep.SUBMITTED == "submitted"
        assert len(FORM_STEPS) == 3
        assert BookingDraft().first_name == ""

    def test_import_booking_schema(self):
        from carepair.schemas import BookingRecord, BookingStatus
        assert BookingStatus.PENDING == "pending"
        assert BookingRecord is not None


class TestValidationImports:
    def test_import_validators(self):
        from carepair.validation import validate_email, validate_phone
        assert validate_email("a@b.co") is None
        assert validate_phone("12345678") is None

    def test_import_aggregator(self):
        from carepair.validation import PAYLOAD_RULES, STEP_RULES
        assert len(STEP_RULES) == 3
        assert len(PAYLOAD_RULES) == 11


class TestFormImports:
    def test_import_state_machine(self):
        from carepair.form import BookingFormStateMachine, FormTrigger
        form = BookingFormStateMachine()
        assert form.current_step == "customer_info"
        assert FormTrigger.ADVANCE in form.get_valid_triggers()

    def test_import_transports(self):
        from carepair.form import HandlerTransport, HttpSubmissionTransport, SubmissionResult
        assert callable(HandlerTransport)
        assert callable(HttpSubmissionTransport)
        assert SubmissionResult(success=True).field_errors == {}


class TestBookingImports:
    def test_import_handler_and_stores(self):
        from carepair.booking import BookingSubmissionHandler, InMemoryBookingStore
        handler = BookingSubmissionHandler(InMemoryBookingStore())
        assert handler.list_recent().status_code == 200

    def test_import_notifications(self):
        from carepair.notifications import ConfirmationNotifier, SmtpTransport
        assert ConfirmationNotifier is not None
        assert SmtpTransport is not None


class TestToolImports:
    def test_import_services(self):
        from carepair.tools import SERVICE_CATALOG, SERVICE_TYPES, TIME_SLOTS, get_all_services
        assert len(SERVICE_CATALOG) >= 6
        assert SERVICE_TYPES[0] == "Oil Change"
        assert TIME_SLOTS[0] == "08:00 AM"
        assert len(get_all_services()) == len(SERVICE_CATALOG)


class TestApiImports:
    def test_import_app(self):
        from carepair.api import app, create_app
        assert app.title == "CarePair Booking API"
        assert callable(create_app)

    def test_import_config(self):
        from carepair.config import settings
        assert settings.storage.collection_name
        assert settings.service_name


class TestEntryPoints:
    def test_import_console_demo(self):
        from console_demo import ConsoleSession
        assert "booking" in ConsoleSession.SCENARIOS

    def test_import_main(self):
        import main
        assert callable(main._run_api_mode)
