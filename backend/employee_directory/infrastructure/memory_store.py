"""In-Memory Employee Store — dict-backed EmployeeStore with the same semantics as SQL.

Invariants:
    - Same error contract as SqlEmployeeStore (ConstraintViolation / NotFound)
    - find_many orders by (sort_field, id ASC); None values sort first
    - Records are immutable values, so callers can never mutate stored state

Design Decisions:
    - Filters via predicate.matches(): proves the predicate combinators are backend-neutral
    - Two-pass stable sort (id, then field with reverse=) keeps the id tie-break ascending
      even for descending listings, matching the SQL ORDER BY
    - No locking: single event loop, and every method completes without awaiting IO
"""

import uuid
from datetime import datetime, timezone

from employee_directory.core.domain_types import (
    EmployeeId, EmployeeRecord, SortDirection, SortField,
)
from employee_directory.core.errors import (
    ConstraintViolationError, ResourceNotFoundError,
)
from employee_directory.core.search_predicate import Predicate
from employee_directory.infrastructure.employee_store import DUPLICATE_EMAIL_MESSAGE


class InMemoryEmployeeStore:
    """Process-local employee collection."""

    def __init__(self):
        self._records: dict[EmployeeId, EmployeeRecord] = {}

    def _email_taken(self, email: str, exclude: EmployeeId | None = None) -> bool:
        return any(
            r.email == email and r.id != exclude for r in self._records.values()
        )

    def _get(self, employee_id: EmployeeId) -> EmployeeRecord:
        record = self._records.get(employee_id)
        if record is None:
            raise ResourceNotFoundError("Employee", str(employee_id))
        return record

    async def insert(self, fields: dict) -> EmployeeRecord:
        if self._email_taken(fields["email"]):
            raise ConstraintViolationError(DUPLICATE_EMAIL_MESSAGE, field="email")
        record = EmployeeRecord(
            id=EmployeeId(uuid.uuid4()),
            name=fields["name"],
            email=fields["email"],
            mobile=fields["mobile"],
            designation=fields["designation"],
            course=fields["course"],
            gender=fields["gender"],
            created_at=datetime.now(timezone.utc),
            active=fields.get("active", True),
            image_ref=fields.get("image_ref"),
        )
        self._records[record.id] = record
        return record

    async def find_by_id(self, employee_id: EmployeeId) -> EmployeeRecord:
        return self._get(employee_id)

    async def find_many(
        self,
        predicate: Predicate,
        sort_field: SortField,
        sort_direction: SortDirection,
        offset: int,
        limit: int,
    ) -> list[EmployeeRecord]:
        matching = sorted(
            (r for r in self._records.values() if predicate.matches(r)),
            key=lambda r: r.id,
        )

        def sort_key(record: EmployeeRecord):
            value = getattr(record, sort_field.value)
            return (value is not None, value)

        matching.sort(key=sort_key, reverse=sort_direction == SortDirection.DESC)
        return matching[offset:offset + limit]

    async def count(self, predicate: Predicate) -> int:
        return sum(1 for r in self._records.values() if predicate.matches(r))

    async def update(self, employee_id: EmployeeId, fields: dict) -> EmployeeRecord:
        record = self._get(employee_id)
        if (
            "email" in fields
            and fields["email"] != record.email
            and self._email_taken(fields["email"], exclude=employee_id)
        ):
            raise ConstraintViolationError(DUPLICATE_EMAIL_MESSAGE, field="email")
        updated = record.with_changes(**fields)
        self._records[employee_id] = updated
        return updated

    async def delete(self, employee_id: EmployeeId) -> None:
        self._get(employee_id)
        del self._records[employee_id]
