from carepair.form.state_machine import (
    BookingFormStateMachine,
    FormState,
    FormTrigger,
    InvalidTransitionError,
)
from carepair.form.transport import (
    HandlerTransport,
    HttpSubmissionTransport,
    SubmissionResult,
)

__all__ = [
    "BookingFormStateMachine",
    "FormState",
    "FormTrigger",
    "InvalidTransitionError",
    "SubmissionResult",
    "HttpSubmissionTransport",
    "HandlerTransport",
]
