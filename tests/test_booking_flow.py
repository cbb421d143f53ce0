"""End-to-end booking flows: form -> transport -> handler -> store -> notifier."""

import httpx
from fastapi.testclient import TestClient

from carepair.api.app import create_app
from carepair.form.state_machine import BookingFormStateMachine
from carepair.form.transport import HandlerTransport, HttpSubmissionTransport
from carepair.schemas.form_schema import FormStep
from console_demo import ConsoleSession
from tests.conftest import CUSTOMER_VALUES, SERVICE_VALUES, VEHICLE_VALUES, fill_step


class TestFullFormFlow:
    def test_happy_path(self, form, store, mail_transport):
        fill_step(form, CUSTOMER_VALUES)
        form.advance()
        fill_step(form, VEHICLE_VALUES)
        form.advance()
        fill_step(form, SERVICE_VALUES)
        form.edit_field("notes", "Please check the tire pressure too")

        state = form.advance()

        assert state.is_submitted
        stored = store.query_records("bookings")
        assert len(stored) == 1
        assert stored[0]["_id"] == state.booking_id
        assert stored[0]["service"]["notes"] == "Please check the tire pressure too"
        assert mail_transport.sent[0]["recipient"] == "john@example.com"

    def test_correct_errors_then_submit(self, form, store):
        form.edit_field("firstName", "J")
        form.edit_field("email", "john@")
        form.advance()
        assert form.current_step == FormStep.CUSTOMER_INFO

        fill_step(form, CUSTOMER_VALUES)
        form.advance()
        fill_step(form, {**VEHICLE_VALUES, "year": "1899"})
        form.advance()
        assert form.state.visible_errors == {"year": "Year must be 1900 or later"}

        form.edit_field("year", "2015")
        form.advance()
        fill_step(form, SERVICE_VALUES)
        form.advance()

        assert form.is_terminal()
        assert store.query_records("bookings")[0]["vehicle"]["year"] == 2015

    def test_second_booking_after_reset(self, form, store):
        for _ in range(2):
            fill_step(form, CUSTOMER_VALUES)
            form.advance()
            fill_step(form, VEHICLE_VALUES)
            form.advance()
            fill_step(form, SERVICE_VALUES)
            form.advance()
            assert form.is_terminal()
            form.reset()

        assert store.count("bookings") == 2


class TestFormOverHttp:
    def test_form_submits_through_api(self, handler, store):
        api = TestClient(create_app(handler=handler))
        # TestClient is an httpx.Client, so it can carry the form's requests
        form = BookingFormStateMachine(
            transport=HttpSubmissionTransport("/api/bookings", client=api)
        )
        fill_step(form, CUSTOMER_VALUES)
        form.advance()
        fill_step(form, VEHICLE_VALUES)
        form.advance()
        fill_step(form, SERVICE_VALUES)

        state = form.advance()

        assert state.is_submitted
        assert store.query_records("bookings")[0]["_id"] == state.booking_id

    def test_server_outage_keeps_draft(self):
        def unavailable(request):
            return httpx.Response(500, json={"error": "Failed to create booking"})

        client = httpx.Client(transport=httpx.MockTransport(unavailable))
        form = BookingFormStateMachine(
            transport=HttpSubmissionTransport("http://booking.test/api/bookings", client=client)
        )
        fill_step(form, CUSTOMER_VALUES)
        form.advance()
        fill_step(form, VEHICLE_VALUES)
        form.advance()
        fill_step(form, SERVICE_VALUES)

        state = form.advance()

        assert state.step == FormStep.SERVICE_SCHEDULE
        assert state.submit_error == "Failed to create booking"
        assert state.draft.email == "john@example.com"


class TestConsoleScenarios:
    def test_booking_scenario_completes(self, handler, store, capsys):
        session = ConsoleSession(transport=HandlerTransport(handler))

        session.run_scenario("booking")

        assert session.form.is_terminal()
        stored = store.query_records("bookings")[0]
        assert stored["customer"]["email"] == "john@ex.com"
        assert stored["vehicle"]["license_plate"] == "ABC-123"
        assert "Appointment Confirmed!" in capsys.readouterr().out

    def test_corrections_scenario_completes(self, handler, store):
        session = ConsoleSession(transport=HandlerTransport(handler))

        session.run_scenario("corrections")

        assert session.form.is_terminal()
        assert store.query_records("bookings")[0]["service"]["type"] == "Caliper Painting"

    def test_unknown_scenario(self, capsys):
        ConsoleSession().run_scenario("nonexistent")
        assert "Unknown scenario" in capsys.readouterr().out
