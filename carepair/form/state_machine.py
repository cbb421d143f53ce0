"""
Finite state machine for the multi-step booking form.

Steps run customer_info -> vehicle_info -> service_schedule, ending in the
terminal submitted state. Forward moves are gated by the validation
aggregator; every operation produces a new immutable ``FormState``
snapshot and the machine keeps the full snapshot history.

Usage:
    form = BookingFormStateMachine(transport=HandlerTransport(handler))
    form.edit_field("firstName", "John")
    ...
    form.advance()
    assert form.current_step == FormStep.VEHICLE_INFO
"""

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

from carepair.form.transport import (
    DEFAULT_SUBMIT_ERROR,
    SubmissionResult,
    SubmissionTransport,
)
from carepair.schemas.form_schema import FORM_STEPS, WIRE_FIELDS, BookingDraft, FormStep
from carepair.validation.aggregator import fields_for_step, validate_step

logger = logging.getLogger(__name__)


class FormTrigger(str, Enum):
    """Events that move the form between steps."""
    ADVANCE = "advance"
    BACK = "back"
    SUBMISSION_SUCCEEDED = "submission_succeeded"
    RESET = "reset"


@dataclass(frozen=True)
class Transition:
    """A single valid step transition."""
    from_step: FormStep
    to_step: FormStep
    trigger: FormTrigger


@dataclass(frozen=True)
class FormState:
    """Snapshot of the form: draft, active step, errors and submission status."""
    draft: BookingDraft = field(default_factory=BookingDraft)
    step: FormStep = FormStep.CUSTOMER_INFO
    errors: Mapping[str, str] = field(default_factory=dict)
    submitting: bool = False
    submit_error: Optional[str] = None
    booking_id: Optional[str] = None

    def __post_init__(self):
        # Read-only copy; history snapshots must not share a mutable dict
        object.__setattr__(self, "errors", MappingProxyType(dict(self.errors)))

    @property
    def visible_errors(self) -> dict[str, str]:
        """Errors for the fields on the active step only."""
        visible = fields_for_step(self.step)
        return {name: msg for name, msg in self.errors.items() if name in visible}

    @property
    def is_submitted(self) -> bool:
        return self.step == FormStep.SUBMITTED


@dataclass(frozen=True)
class StateEntry:
    """Recorded history entry for one operation."""
    state: FormState
    recorded_at: datetime
    action: str


class InvalidTransitionError(Exception):
    """Raised when an operation is not valid from the current step."""


class BookingFormStateMachine:
    """
    Controller for the booking form.

    Field edits clear that field's error immediately without re-validating;
    validation only runs when the user tries to move forward or submit.
    """

    TRANSITIONS: list[Transition] = [
        Transition(FormStep.CUSTOMER_INFO, FormStep.VEHICLE_INFO, FormTrigger.ADVANCE),
        Transition(FormStep.VEHICLE_INFO, FormStep.SERVICE_SCHEDULE, FormTrigger.ADVANCE),
        Transition(FormStep.VEHICLE_INFO, FormStep.CUSTOMER_INFO, FormTrigger.BACK),
        Transition(FormStep.SERVICE_SCHEDULE, FormStep.VEHICLE_INFO, FormTrigger.BACK),
        Transition(FormStep.SERVICE_SCHEDULE, FormStep.SUBMITTED,
                   FormTrigger.SUBMISSION_SUCCEEDED),
        Transition(FormStep.SUBMITTED, FormStep.CUSTOMER_INFO, FormTrigger.RESET),
    ]

    FINAL_STEP = FORM_STEPS[-1]

    def __init__(self, transport: Optional[SubmissionTransport] = None) -> None:
        self._transport = transport
        self._state = FormState()
        self._history: list[StateEntry] = [
            StateEntry(state=self._state, recorded_at=datetime.now(timezone.utc), action="init")
        ]

    @property
    def state(self) -> FormState:
        return self._state

    @property
    def current_step(self) -> FormStep:
        return self._state.step

    def _apply(self, new_state: FormState, action: str) -> FormState:
        if new_state.step != self._state.step:
            logger.debug(
                "Form step: %s -> %s (%s)",
                self._state.step.value, new_state.step.value, action,
            )
        self._state = new_state
        self._history.append(StateEntry(
            state=new_state, recorded_at=datetime.now(timezone.utc), action=action,
        ))
        return new_state

    def _target_step(self, trigger: FormTrigger) -> FormStep:
        for t in self.TRANSITIONS:
            if t.from_step == self._state.step and t.trigger == trigger:
                return t.to_step

        valid = [t.value for t in self.get_valid_triggers()]
        raise InvalidTransitionError(
            f"No valid transition from '{self._state.step.value}' "
            f"with trigger '{trigger.value}'. Valid triggers: {valid}"
        )

    def _ensure_editable(self, action: str) -> None:
        if self._state.submitting:
            raise InvalidTransitionError(f"Cannot {action} while a submission is in progress")
        if self._state.is_submitted:
            raise InvalidTransitionError(f"Cannot {action} after the booking was submitted")

    # ------------------------------------------------------------------ #
    # Operations
    # ------------------------------------------------------------------ #

    def edit_field(self, name: str, value: str) -> FormState:
        """Update one draft field and drop its recorded error, if any."""
        if name not in WIRE_FIELDS:
            raise ValueError(f"Unknown field: {name}")
        self._ensure_editable("edit fields")

        errors = self._state.errors
        if name in errors:
            errors = {k: v for k, v in errors.items() if k != name}
        return self._apply(
            replace(self._state, draft=self._state.draft.with_field(name, value), errors=errors),
            f"edit:{name}",
        )

    def advance(self) -> FormState:
        """
        Validate the active step and move forward if it passes.

        On the final step this submits the booking instead.

        Returns:
            The new form state (unchanged step plus errors when invalid).
        """
        self._ensure_editable("advance")
        if self._state.step == self.FINAL_STEP:
            return self.submit()

        target = self._target_step(FormTrigger.ADVANCE)
        result = validate_step(self._state.step, self._state.draft)
        if not result.is_valid:
            return self._apply(replace(self._state, errors=result.errors), "advance:invalid")
        return self._apply(replace(self._state, step=target, errors={}), "advance")

    def back(self) -> FormState:
        """Return to the previous step without validating; errors are kept."""
        self._ensure_editable("go back")
        target = self._target_step(FormTrigger.BACK)
        return self._apply(replace(self._state, step=target), "back")

    def submit(self) -> FormState:
        """Validate the final step and send the draft through the transport."""
        payload = self.begin_submission()
        if payload is None:
            return self._state
        if self._transport is None:
            raise RuntimeError("No submission transport configured")

        try:
            result = self._transport(payload)
        except Exception:
            logger.exception("Submission transport raised")
            result = SubmissionResult(success=False, error=DEFAULT_SUBMIT_ERROR)
        return self.complete_submission(result)

    def begin_submission(self) -> Optional[dict[str, Any]]:
        """
        Validate the final step and mark the submission as in progress.

        Returns:
            The serialized payload, or None when validation failed.

        Raises:
            InvalidTransitionError: If not on the final step.
        """
        self._ensure_editable("submit")
        if self._state.step != self.FINAL_STEP:
            raise InvalidTransitionError(
                f"Cannot submit from '{self._state.step.value}'; "
                f"submission happens on '{self.FINAL_STEP.value}'"
            )

        result = validate_step(self._state.step, self._state.draft)
        if not result.is_valid:
            self._apply(replace(self._state, errors=result.errors), "submit:invalid")
            return None

        self._apply(
            replace(self._state, errors={}, submitting=True, submit_error=None),
            "submit:start",
        )
        return self._state.draft.to_payload()

    def complete_submission(self, result: SubmissionResult) -> FormState:
        """Record the handler's answer for the in-flight submission."""
        if not self._state.submitting:
            raise InvalidTransitionError("No submission is in progress")

        if result.success:
            target = self._target_step(FormTrigger.SUBMISSION_SUCCEEDED)
            logger.info("Booking submitted: %s", result.booking_id)
            return self._apply(
                replace(
                    self._state, step=target, submitting=False,
                    submit_error=None, booking_id=result.booking_id,
                ),
                "submit:success",
            )

        logger.info("Booking submission failed: %s", result.error)
        return self._apply(
            replace(
                self._state, submitting=False,
                submit_error=result.error or DEFAULT_SUBMIT_ERROR,
            ),
            "submit:failure",
        )

    def reset(self) -> FormState:
        """Start a fresh booking. Only valid once the previous one was submitted."""
        target = self._target_step(FormTrigger.RESET)
        return self._apply(FormState(step=target), "reset")

    # ------------------------------------------------------------------ #
    # Introspection
    # ------------------------------------------------------------------ #

    def get_valid_triggers(self) -> list[FormTrigger]:
        """Return all triggers valid from the current step."""
        return [t.trigger for t in self.TRANSITIONS if t.from_step == self._state.step]

    def get_history(self) -> list[StateEntry]:
        """Return every recorded snapshot, oldest first."""
        return list(self._history)

    def get_step_trace(self) -> list[str]:
        """Return the ordered list of steps visited, without repeats."""
        trace: list[str] = []
        for entry in self._history:
            if not trace or trace[-1] != entry.state.step.value:
                trace.append(entry.state.step.value)
        return trace

    def is_terminal(self) -> bool:
        return self._state.is_submitted
