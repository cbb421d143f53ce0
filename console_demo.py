"""
Console booking form - drives the real form state machine from a terminal.

By default submissions go to an in-process handler backed by the in-memory
store, so no database, SMTP server or running API is needed. Pass ``--url``
to submit to a running API instead.

Usage:
    python console_demo.py
    python console_demo.py --scenario booking
    python console_demo.py --scenario corrections
    python console_demo.py --url http://localhost:8000/api/bookings
"""

import argparse
from typing import Optional

from carepair.booking.handler import BookingSubmissionHandler
from carepair.booking.storage import InMemoryBookingStore
from carepair.config import settings
from carepair.form.state_machine import BookingFormStateMachine, InvalidTransitionError
from carepair.form.transport import HandlerTransport, HttpSubmissionTransport, SubmissionTransport
from carepair.schemas.form_schema import FormStep
from carepair.tools.services import SERVICE_TYPES, TIME_SLOTS
from carepair.validation.aggregator import STEP_RULES

BLUE = "\033[94m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"

STEP_TITLES: dict[FormStep, str] = {
    FormStep.CUSTOMER_INFO: "Customer Information",
    FormStep.VEHICLE_INFO: "Vehicle Information",
    FormStep.SERVICE_SCHEDULE: "Service & Scheduling",
}

FIELD_HINTS: dict[str, str] = {
    "serviceType": ", ".join(SERVICE_TYPES),
    "time": ", ".join(TIME_SLOTS),
    "date": "YYYY-MM-DD",
}


def _inline_handler() -> BookingSubmissionHandler:
    # Synchronous dispatch keeps notifier output in order with the form output
    return BookingSubmissionHandler(
        InMemoryBookingStore(),
        collection=settings.storage.collection_name,
        dispatch=lambda fn, *args: fn(*args),
    )


class ConsoleSession:
    """Walks the booking form step by step in the terminal."""

    # (field, value) pairs fill the draft; "continue" and "back" are form actions
    SCENARIOS: dict[str, list[tuple[str, str]]] = {
        "booking": [
            ("firstName", "John"), ("lastName", "Doe"),
            ("email", "JOHN@EX.com"), ("phone", "555-0123-4"),
            ("continue", ""),
            ("make", "Toyota"), ("model", "Corolla"),
            ("year", "2018"), ("licensePlate", "abc-123"),
            ("continue", ""),
            ("serviceType", "Oil Change"), ("date", "2099-01-01"),
            ("time", "09:00 AM"), ("notes", "Please check the tire pressure too"),
            ("continue", ""),
        ],
        "corrections": [
            ("firstName", "J"), ("lastName", "Doe"),
            ("email", "john@"), ("phone", "123"),
            ("continue", ""),
            ("firstName", "John"), ("email", "john@example.com"), ("phone", "555 0123 456"),
            ("continue", ""),
            ("make", "Honda"), ("model", "Civic"), ("year", "1899"), ("licensePlate", "X"),
            ("continue", ""),
            ("back", ""),
            ("continue", ""),
            ("year", "2015"), ("licensePlate", "XYZ 987"),
            ("continue", ""),
            ("serviceType", "Caliper Painting"), ("date", "2099-03-15"), ("time", "02:00 PM"),
            ("continue", ""),
        ],
    }

    def __init__(self, transport: Optional[SubmissionTransport] = None) -> None:
        self.form = BookingFormStateMachine(
            transport=transport or HandlerTransport(_inline_handler())
        )

    def form_say(self, text: str) -> None:
        print(f"{GREEN}{text}{RESET}")

    def system_log(self, text: str) -> None:
        print(f"{DIM}  >> {text}{RESET}")

    def _banner(self, title: str) -> None:
        print()
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  {title}{RESET}")
        print(f"{BOLD}  Business: {settings.business.name}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")

    def _footer(self) -> None:
        print(f"\n{BOLD}{'=' * 60}{RESET}")
        print(f"{DIM}  Step trace: {' -> '.join(self.form.get_step_trace())}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")

    def _show_step(self) -> None:
        step = self.form.current_step
        if step in STEP_TITLES:
            self.form_say(f"\n{BOLD}{STEP_TITLES[step]}{RESET}")

    def _show_outcome(self) -> None:
        state = self.form.state
        for field_name, message in state.visible_errors.items():
            print(f"{RED}  {field_name}: {message}{RESET}")
        if state.submit_error:
            print(f"{RED}  {state.submit_error}{RESET}")
        if state.is_submitted:
            draft = state.draft
            self.form_say("Appointment Confirmed!")
            self.form_say(f"  Booking ID: {state.booking_id}")
            self.form_say(f"  Customer:   {draft.first_name} {draft.last_name}")
            self.form_say(f"  Vehicle:    {draft.year} {draft.make} {draft.model}")
            self.form_say(f"  Service:    {draft.service_type} on {draft.date} at {draft.time}")
        self.system_log(f"Step: {self.form.current_step.value}")

    def _apply(self, action: str, value: str) -> None:
        previous = self.form.current_step
        try:
            if action == "continue":
                self.form.advance()
            elif action == "back":
                self.form.back()
            else:
                self.form.edit_field(action, value)
                return
        except InvalidTransitionError as e:
            print(f"{YELLOW}  {e}{RESET}")
            return
        self._show_outcome()
        if self.form.current_step != previous:
            self._show_step()

    def run_scenario(self, scenario: str) -> None:
        """Auto-play a pre-scripted scenario for demo purposes."""
        steps = self.SCENARIOS.get(scenario)
        if not steps:
            print(f"{RED}Unknown scenario: {scenario}{RESET}")
            return

        self._banner(f"BOOKING FORM - Scenario: {scenario}")
        self._show_step()
        for action, value in steps:
            if self.form.is_terminal():
                break
            label = f"{action} = {value!r}" if value else f"[{action}]"
            print(f"{BLUE}[Customer] {RESET}{label}")
            self._apply(action, value)
        self._footer()

    def run(self) -> None:
        self._banner("BOOKING FORM - Console")
        print(f"{BOLD}  Enter keeps the current value. 'b' goes back, 'q' quits.{RESET}")
        self._show_step()

        while not self.form.is_terminal():
            step = self.form.current_step
            field_names = [rule.name for rule in STEP_RULES[step]]
            labels = {rule.name: rule.label for rule in STEP_RULES[step]}
            if step == FormStep.SERVICE_SCHEDULE:
                field_names.append("notes")
                labels["notes"] = "Additional notes (optional)"

            for name in field_names:
                current = self.form.state.draft.get(name) or ""
                hint = f" ({FIELD_HINTS[name]})" if name in FIELD_HINTS else ""
                raw = input(f"{BLUE}{labels[name]}{hint} [{current}]: {RESET}").strip()
                if raw.lower() == "q":
                    print(f"\n{DIM}Session ended.{RESET}")
                    return
                if raw:
                    self.form.edit_field(name, raw)

            choice = input(f"{BLUE}[c]ontinue / [b]ack: {RESET}").strip().lower()
            if choice == "q":
                print(f"\n{DIM}Session ended.{RESET}")
                return
            self._apply("back" if choice == "b" else "continue", "")

        self._footer()


def main() -> None:
    parser = argparse.ArgumentParser(description="Console booking form")
    parser.add_argument(
        "--scenario",
        choices=sorted(ConsoleSession.SCENARIOS),
        default=None,
        help="Auto-play a pre-scripted scenario instead of interactive mode",
    )
    parser.add_argument(
        "--url",
        default=None,
        help="Submit to a running booking API instead of the in-process handler",
    )
    args = parser.parse_args()

    transport = HttpSubmissionTransport(args.url) if args.url else None
    session = ConsoleSession(transport=transport)
    if args.scenario:
        session.run_scenario(args.scenario)
    else:
        session.run()


if __name__ == "__main__":
    main()
