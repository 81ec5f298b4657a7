"""Employee Rules — verifies create and update validation before persistence.

Invariants:
    - Create requires every field; gender enumerated; mobile digits-only, <= 15 chars
    - Update checks email syntax; mobile digits-only, >= 10 digits
    - id/created_at are immutable; unknown fields rejected
    - Errors carry the offending field and a human-readable message
"""

import pytest

from employee_directory.core.employee_rules import (
    is_valid_email, validate_employee_changes, validate_new_employee,
)
from employee_directory.core.errors import DirectoryValidationError


def _fields(**overrides) -> dict:
    fields = {
        "name": "Ana Silva",
        "email": "ana@example.com",
        "mobile": "5511987654321",
        "designation": "Manager",
        "course": "MBA",
        "gender": "Female",
    }
    fields.update(overrides)
    return fields


# --- create -------------------------------------------------------------------

def test_valid_create_payload_is_cleaned():
    cleaned = validate_new_employee(_fields(name="  Ana Silva  "))
    assert cleaned["name"] == "Ana Silva"
    assert cleaned["image_ref"] is None


def test_create_keeps_image_ref():
    cleaned = validate_new_employee(_fields(image_ref="uploads/a.png"))
    assert cleaned["image_ref"] == "uploads/a.png"


@pytest.mark.parametrize(
    "field", ["name", "email", "mobile", "designation", "course", "gender"],
)
def test_create_rejects_missing_field(field):
    fields = _fields()
    del fields[field]
    with pytest.raises(DirectoryValidationError) as exc:
        validate_new_employee(fields)
    assert exc.value.field == field
    assert "required" in exc.value.message


def test_create_rejects_whitespace_only_field():
    with pytest.raises(DirectoryValidationError) as exc:
        validate_new_employee(_fields(designation="   "))
    assert exc.value.field == "designation"


def test_create_rejects_unknown_gender():
    with pytest.raises(DirectoryValidationError) as exc:
        validate_new_employee(_fields(gender="unknown"))
    assert exc.value.field == "gender"


def test_create_mobile_must_be_digits():
    with pytest.raises(DirectoryValidationError) as exc:
        validate_new_employee(_fields(mobile="+55 11 9876"))
    assert exc.value.message == "Mobile number must contain digits only"


def test_create_mobile_at_most_fifteen_digits():
    validate_new_employee(_fields(mobile="1" * 15))
    with pytest.raises(DirectoryValidationError):
        validate_new_employee(_fields(mobile="1" * 16))


def test_create_accepts_short_mobile():
    """Create-path rule has no minimum length."""
    assert validate_new_employee(_fields(mobile="123"))["mobile"] == "123"


# --- update -------------------------------------------------------------------

def test_empty_update_is_valid():
    assert validate_employee_changes({}) == {}


def test_update_rejects_invalid_email():
    with pytest.raises(DirectoryValidationError) as exc:
        validate_employee_changes({"email": "not-an-email"})
    assert exc.value.field == "email"
    assert exc.value.message == "Please enter a valid email address"


@pytest.mark.parametrize("email", ["a@b", "a b@c.com", "a@@b.com", "@b.com"])
def test_email_syntax_rejections(email):
    assert not is_valid_email(email)


def test_email_syntax_accepts_dotted_domain():
    assert is_valid_email("ana.silva@mail.example.com")


def test_update_mobile_needs_ten_digits():
    with pytest.raises(DirectoryValidationError) as exc:
        validate_employee_changes({"mobile": "123456789"})
    assert "at least 10" in exc.value.message
    assert validate_employee_changes({"mobile": "1234567890"}) == {"mobile": "1234567890"}


def test_update_accepts_long_mobile():
    """Update-path rule has no maximum length."""
    assert validate_employee_changes({"mobile": "1" * 20})["mobile"] == "1" * 20


@pytest.mark.parametrize("field", ["id", "created_at"])
def test_update_rejects_immutable_fields(field):
    with pytest.raises(DirectoryValidationError) as exc:
        validate_employee_changes({field: "x"})
    assert exc.value.field == field


def test_update_rejects_unknown_field():
    with pytest.raises(DirectoryValidationError):
        validate_employee_changes({"salary": 10})


def test_update_rejects_empty_name():
    with pytest.raises(DirectoryValidationError) as exc:
        validate_employee_changes({"name": " "})
    assert exc.value.message == "Name cannot be empty"


def test_update_active_must_be_bool():
    assert validate_employee_changes({"active": False}) == {"active": False}
    with pytest.raises(DirectoryValidationError):
        validate_employee_changes({"active": "no"})


def test_update_blank_image_ref_clears_image():
    assert validate_employee_changes({"image_ref": ""}) == {"image_ref": None}
