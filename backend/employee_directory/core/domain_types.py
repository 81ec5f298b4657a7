"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - EmployeeId wraps UUID — never use bare UUID in domain logic
    - EmployeeRecord is immutable; stores return fresh records, never ORM rows
    - created_at on a record is always timezone-aware UTC
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
    - frozen dataclass record: stores can be swapped without leaking backend objects
"""

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

EmployeeId = NewType("EmployeeId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class Gender(str, Enum):
    """Enumerated gender values offered by the entry forms."""
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class SortField(str, Enum):
    """Employee fields a listing may be ordered by."""
    ID = "id"
    NAME = "name"
    EMAIL = "email"
    MOBILE = "mobile"
    DESIGNATION = "designation"
    COURSE = "course"
    GENDER = "gender"
    IMAGE_REF = "image_ref"
    CREATED_AT = "created_at"
    ACTIVE = "active"


# ─── Field Sets ──────────────────────────────────────────────────

REQUIRED_FIELDS: tuple[str, ...] = (
    "name", "email", "mobile", "designation", "course", "gender",
)
MUTABLE_FIELDS: frozenset[str] = frozenset(REQUIRED_FIELDS) | {"image_ref", "active"}
IMMUTABLE_FIELDS: frozenset[str] = frozenset({"id", "created_at"})


# ─── Records ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class EmployeeRecord:
    """One employee as returned by any store implementation."""
    id: EmployeeId
    name: str
    email: str
    mobile: str
    designation: str
    course: str
    gender: str
    created_at: datetime
    active: bool = True
    image_ref: str | None = None

    def with_changes(self, **fields: object) -> "EmployeeRecord":
        return replace(self, **fields)


def as_utc(value: datetime) -> datetime:
    """Normalize a timestamp to aware UTC (SQLite drops tzinfo on read)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
