"""
Validation aggregator: runs field validators over a set of fields and
collects a field -> message mapping.

The same rule tables drive the form (one step at a time) and the
submission handler (the whole payload), so client and server always agree
on rule content.

Usage:
    result = validate_step(FormStep.CUSTOMER_INFO, draft)
    if not result.is_valid:
        show(result.errors)

    result = validate_payload(request_json)
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping, Optional, Protocol

from carepair.schemas.form_schema import FORM_STEPS, FormStep
from carepair.tools.services import SERVICE_TYPES, TIME_SLOTS
from carepair.utils import as_text
from carepair.validation.field_validators import (
    validate_choice,
    validate_date,
    validate_email,
    validate_license_plate,
    validate_name,
    validate_phone,
    validate_required,
    validate_year,
)

logger = logging.getLogger(__name__)


class FieldSource(Protocol):
    def get(self, key: str, default: Any = None) -> Any: ...


@dataclass(frozen=True)
class FieldRule:
    """Binds a wire field name to the validator that checks it."""
    name: str
    label: str
    check: Callable[[Any], Optional[str]]


def optional(check: Callable[[Any], Optional[str]]) -> Callable[[Any], Optional[str]]:
    """Skip ``check`` when the value is blank; run it otherwise."""
    def run(value: Any) -> Optional[str]:
        if not as_text(value).strip():
            return None
        return check(value)
    return run


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a validation pass; valid iff ``errors`` is empty."""
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors


STEP_RULES: dict[FormStep, tuple[FieldRule, ...]] = {
    FormStep.CUSTOMER_INFO: (
        FieldRule("firstName", "First name", lambda v: validate_name(v, "First name")),
        FieldRule("lastName", "Last name", lambda v: validate_name(v, "Last name")),
        FieldRule("email", "Email", optional(validate_email)),
        FieldRule("phone", "Phone number", validate_phone),
    ),
    FormStep.VEHICLE_INFO: (
        FieldRule("make", "Make", lambda v: validate_required(v, "Make")),
        FieldRule("model", "Model", lambda v: validate_required(v, "Model")),
        FieldRule("year", "Year", validate_year),
        FieldRule("licensePlate", "License plate", validate_license_plate),
    ),
    FormStep.SERVICE_SCHEDULE: (
        FieldRule(
            "serviceType", "Service type",
            lambda v: validate_choice(v, "Service type", SERVICE_TYPES),
        ),
        FieldRule("date", "Date", validate_date),
        FieldRule("time", "Time", lambda v: validate_choice(v, "Time", TIME_SLOTS)),
    ),
}

PAYLOAD_RULES: tuple[FieldRule, ...] = tuple(
    rule for step in FORM_STEPS for rule in STEP_RULES[step]
)


def fields_for_step(step: FormStep) -> tuple[str, ...]:
    """Wire names of the fields a step gates."""
    return tuple(rule.name for rule in STEP_RULES.get(step, ()))


def validate_fields(values: FieldSource, rules: Iterable[FieldRule]) -> ValidationResult:
    """Run each rule against ``values`` and collect failures by field name."""
    errors: dict[str, str] = {}
    for rule in rules:
        message = rule.check(values.get(rule.name))
        if message is not None:
            errors[rule.name] = message
    if errors:
        logger.debug("Validation failed for fields: %s", sorted(errors))
    return ValidationResult(errors=errors)


def validate_step(step: FormStep, values: FieldSource) -> ValidationResult:
    """Validate only the fields visible on ``step``."""
    return validate_fields(values, STEP_RULES.get(step, ()))


def validate_payload(payload: Mapping[str, Any]) -> ValidationResult:
    """Validate a complete submission payload against every step's rules."""
    return validate_fields(payload, PAYLOAD_RULES)
