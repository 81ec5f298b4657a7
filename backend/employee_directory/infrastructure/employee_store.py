"""SQL Employee Store — EmployeeStore implementation over an async SQLAlchemy session.

Invariants:
    - Every mutation is one commit: all-or-nothing at the single-record level
    - Duplicate email → ConstraintViolationError (pre-checked, and IntegrityError as backstop)
    - Unknown id → ResourceNotFoundError
    - Any other SQLAlchemyError → DatabaseError with the original exception chained
    - find_many orders by (sort_field, id ASC) — ties never reorder between calls
    - Returns EmployeeRecord values, never ORM rows

Design Decisions:
    - Predicates compiled here, not in core: core stays free of SQLAlchemy
    - icontains(autoescape=True): search terms are literal, % and _ carry no meaning
    - Case-insensitivity is the database's: full Unicode on PostgreSQL, ASCII-only on SQLite
    - Email pre-check gives a clean error on the common path; the unique index
      remains the source of truth under concurrent writers
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import and_, false, func, or_, select, true
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from employee_directory.core.domain_types import (
    EmployeeId, EmployeeRecord, SortDirection, SortField, as_utc,
)
from employee_directory.core.errors import (
    ConstraintViolationError, DatabaseError, ResourceNotFoundError,
)
from employee_directory.core.search_predicate import (
    ActiveIs, AllOf, MatchAll, NameContainsAny, Predicate,
)
from employee_directory.models.employee import Employee

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "An employee with this email already exists"

_INSERT_FIELDS = (
    "name", "email", "mobile", "designation", "course", "gender",
    "image_ref", "active",
)


def compile_predicate(predicate: Predicate) -> ColumnElement[bool]:
    """Translate a core predicate into a SQLAlchemy WHERE clause."""
    if isinstance(predicate, MatchAll):
        return true()
    if isinstance(predicate, NameContainsAny):
        if not predicate.terms:
            return false()
        return or_(*(
            Employee.name.icontains(term, autoescape=True)
            for term in predicate.terms
        ))
    if isinstance(predicate, ActiveIs):
        return Employee.active.is_(predicate.active)
    if isinstance(predicate, AllOf):
        return and_(*(compile_predicate(part) for part in predicate.parts))
    raise TypeError(f"Unsupported predicate: {predicate!r}")


def to_record(row: Employee) -> EmployeeRecord:
    return EmployeeRecord(
        id=EmployeeId(row.id),
        name=row.name,
        email=row.email,
        mobile=row.mobile,
        designation=row.designation,
        course=row.course,
        gender=row.gender,
        created_at=as_utc(row.created_at),
        active=bool(row.active),
        image_ref=row.image_ref,
    )


class SqlEmployeeStore:
    """Durable employee collection backed by the request's AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @asynccontextmanager
    async def _guard(self, operation: str) -> AsyncIterator[None]:
        """Map driver failures to typed errors and roll back."""
        try:
            yield
        except IntegrityError as e:
            await self.db.rollback()
            raise ConstraintViolationError(DUPLICATE_EMAIL_MESSAGE, field="email") from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"Employee store {operation} failed: {e}",
                exc_info=True, extra={"operation": operation},
            )
            raise DatabaseError("Employee store operation failed", operation) from e

    async def _get_row(self, employee_id: EmployeeId) -> Employee:
        async with self._guard("find_by_id"):
            row = await self.db.get(Employee, employee_id)
        if row is None:
            raise ResourceNotFoundError("Employee", str(employee_id))
        return row

    async def _ensure_email_free(
        self, email: str, exclude: EmployeeId | None = None,
    ) -> None:
        query = select(Employee.id).where(Employee.email == email)
        if exclude is not None:
            query = query.where(Employee.id != exclude)
        async with self._guard("email_check"):
            result = await self.db.execute(query.limit(1))
            taken = result.scalar_one_or_none() is not None
        if taken:
            raise ConstraintViolationError(DUPLICATE_EMAIL_MESSAGE, field="email")

    async def insert(self, fields: dict) -> EmployeeRecord:
        await self._ensure_email_free(fields["email"])
        row = Employee(**{k: fields[k] for k in _INSERT_FIELDS if k in fields})
        async with self._guard("insert"):
            self.db.add(row)
            await self.db.commit()
        return to_record(row)

    async def find_by_id(self, employee_id: EmployeeId) -> EmployeeRecord:
        return to_record(await self._get_row(employee_id))

    async def find_many(
        self,
        predicate: Predicate,
        sort_field: SortField,
        sort_direction: SortDirection,
        offset: int,
        limit: int,
    ) -> list[EmployeeRecord]:
        column = getattr(Employee, sort_field.value)
        ordering = column.desc() if sort_direction == SortDirection.DESC else column.asc()
        query = (
            select(Employee)
            .where(compile_predicate(predicate))
            .order_by(ordering, Employee.id.asc())
            .offset(offset)
            .limit(limit)
        )
        async with self._guard("find_many"):
            result = await self.db.execute(query)
            rows = result.scalars().all()
        return [to_record(row) for row in rows]

    async def count(self, predicate: Predicate) -> int:
        query = (
            select(func.count())
            .select_from(Employee)
            .where(compile_predicate(predicate))
        )
        async with self._guard("count"):
            result = await self.db.execute(query)
            return int(result.scalar_one())

    async def update(self, employee_id: EmployeeId, fields: dict) -> EmployeeRecord:
        row = await self._get_row(employee_id)
        if "email" in fields and fields["email"] != row.email:
            await self._ensure_email_free(fields["email"], exclude=employee_id)
        async with self._guard("update"):
            for name, value in fields.items():
                setattr(row, name, value)
            await self.db.commit()
        return to_record(row)

    async def delete(self, employee_id: EmployeeId) -> None:
        row = await self._get_row(employee_id)
        async with self._guard("delete"):
            await self.db.delete(row)
            await self.db.commit()
