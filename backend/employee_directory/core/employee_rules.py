"""Employee Rules — pure validation of create payloads and partial updates.

Invariants:
    - Every check runs before any persistence attempt
    - Create: all REQUIRED_FIELDS non-empty, gender enumerated, mobile digits-only and <= 15 chars
    - Update: email syntactically valid, mobile digits-only and >= 10 digits,
      text fields non-empty, id/created_at rejected as immutable
    - Validated payloads have surrounding whitespace stripped from text fields
    - Raises DirectoryValidationError with a stable, human-readable message

Design Decisions:
    - Two mobile rules kept apart: the create form and the edit form historically
      enforce different contracts and neither is authoritative
    - Email pattern is deliberately loose (x@y.z): deliverability is not our concern
"""

import re

from employee_directory.core.domain_types import (
    Gender, IMMUTABLE_FIELDS, MUTABLE_FIELDS, REQUIRED_FIELDS,
)
from employee_directory.core.errors import DirectoryValidationError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
DIGITS_PATTERN = re.compile(r"^\d+$")

CREATE_MOBILE_MAX_LENGTH = 15
UPDATE_MOBILE_MIN_LENGTH = 10

_TEXT_FIELDS = ("name", "email", "mobile", "designation", "course", "gender")

FIELD_LABELS = {
    "name": "Name",
    "email": "Email",
    "mobile": "Mobile number",
    "designation": "Designation",
    "course": "Course",
    "gender": "Gender",
    "image_ref": "Image",
    "active": "Active",
}


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email))


def _strip(value: object) -> object:
    return value.strip() if isinstance(value, str) else value


def check_gender(gender: str) -> None:
    allowed = [g.value for g in Gender]
    if gender not in allowed:
        raise DirectoryValidationError(
            f"Gender must be one of: {', '.join(allowed)}", field="gender",
        )


def check_create_mobile(mobile: str) -> None:
    """Create-path rule: digits only, at most 15 characters."""
    if not DIGITS_PATTERN.match(mobile):
        raise DirectoryValidationError(
            "Mobile number must contain digits only", field="mobile",
        )
    if len(mobile) > CREATE_MOBILE_MAX_LENGTH:
        raise DirectoryValidationError(
            f"Mobile number must be at most {CREATE_MOBILE_MAX_LENGTH} digits",
            field="mobile",
        )


def check_update_mobile(mobile: str) -> None:
    """Update-path rule: digits only, at least 10 digits."""
    if not DIGITS_PATTERN.match(mobile):
        raise DirectoryValidationError(
            "Mobile number must contain digits only", field="mobile",
        )
    if len(mobile) < UPDATE_MOBILE_MIN_LENGTH:
        raise DirectoryValidationError(
            f"Mobile number must be at least {UPDATE_MOBILE_MIN_LENGTH} digits",
            field="mobile",
        )


def validate_new_employee(fields: dict) -> dict:
    """Validate a create payload. Returns the cleaned payload. Pure."""
    cleaned = {name: _strip(fields.get(name)) for name in REQUIRED_FIELDS}
    for name in REQUIRED_FIELDS:
        value = cleaned[name]
        if value is None or (isinstance(value, str) and not value):
            raise DirectoryValidationError(
                f"{FIELD_LABELS[name]} is required", field=name,
            )
        if not isinstance(value, str):
            raise DirectoryValidationError(
                f"{FIELD_LABELS[name]} must be text", field=name,
            )
    check_gender(cleaned["gender"])
    check_create_mobile(cleaned["mobile"])
    cleaned["image_ref"] = fields.get("image_ref") or None
    return cleaned


def validate_employee_changes(changes: dict) -> dict:
    """Validate a partial update. Returns the cleaned changes. Pure."""
    for name in changes:
        if name in IMMUTABLE_FIELDS:
            raise DirectoryValidationError(
                f"Field '{name}' cannot be changed", field=name,
            )
        if name not in MUTABLE_FIELDS:
            raise DirectoryValidationError(
                f"Unknown employee field '{name}'", field=name,
            )

    cleaned = {name: _strip(value) for name, value in changes.items()}
    for name in _TEXT_FIELDS:
        if name not in cleaned:
            continue
        value = cleaned[name]
        if not isinstance(value, str) or not value:
            raise DirectoryValidationError(
                f"{FIELD_LABELS[name]} cannot be empty", field=name,
            )

    if "email" in cleaned and not is_valid_email(cleaned["email"]):
        raise DirectoryValidationError(
            "Please enter a valid email address", field="email",
        )
    if "mobile" in cleaned:
        check_update_mobile(cleaned["mobile"])
    if "gender" in cleaned:
        check_gender(cleaned["gender"])
    if "active" in cleaned and not isinstance(cleaned["active"], bool):
        raise DirectoryValidationError("Active must be true or false", field="active")
    if "image_ref" in cleaned:
        cleaned["image_ref"] = cleaned["image_ref"] or None
    return cleaned
