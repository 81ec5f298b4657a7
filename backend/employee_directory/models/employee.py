"""Employee ORM — persists directory records.

Invariants:
    - id is UUID primary key (client-side default, never updated)
    - email is unique at the database level (uq_employees_email)
    - created_at set once on insert; active defaults to true
    - image_ref nullable: absent means no image

Design Decisions:
    - Generic Uuid type: native UUID on PostgreSQL, CHAR(32) on SQLite test databases
    - Indexes on name and created_at: the two hot paths (search, default sort)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from employee_directory.db.base import Base


class Employee(Base):
    """Employee directory record."""
    __tablename__ = "employees"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    email: Mapped[str] = mapped_column(
        String(320), nullable=False, unique=True,
    )
    mobile: Mapped[str] = mapped_column(String(20), nullable=False)
    designation: Mapped[str] = mapped_column(String(100), nullable=False)
    course: Mapped[str] = mapped_column(String(100), nullable=False)
    gender: Mapped[str] = mapped_column(String(20), nullable=False)
    image_ref: Mapped[str | None] = mapped_column(String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )
    active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True,
    )
