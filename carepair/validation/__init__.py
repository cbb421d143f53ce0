from carepair.validation.aggregator import (
    PAYLOAD_RULES,
    STEP_RULES,
    FieldRule,
    ValidationResult,
    fields_for_step,
    validate_fields,
    validate_payload,
    validate_step,
)
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

__all__ = [
    "FieldRule",
    "ValidationResult",
    "STEP_RULES",
    "PAYLOAD_RULES",
    "fields_for_step",
    "validate_fields",
    "validate_step",
    "validate_payload",
    "validate_required",
    "validate_name",
    "validate_email",
    "validate_phone",
    "validate_year",
    "validate_license_plate",
    "validate_choice",
    "validate_date",
]
