"""Employee Schemas — Pydantic models for the employee API boundary.

Invariants:
    - EmployeeUpdate forbids unknown fields (id, created_at are rejected at the boundary)
    - EmployeeUpdate carries types only; business rules (email syntax, mobile length)
      live in core/employee_rules.py so every transport gets the same messages
    - Responses are built from EmployeeRecord via from_attributes

Design Decisions:
    - Create is multipart (form fields + optional image), so it has no body schema;
      the route collects Form fields and the service validates them
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class EmployeeResponse(BaseModel):
    """Public-facing employee record."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    mobile: str
    designation: str
    course: str
    gender: str
    image_ref: str | None = None
    created_at: datetime
    active: bool


class EmployeeListResponse(BaseModel):
    records: list[EmployeeResponse]
    total_count: int
    total_active_count: int
    page: int
    page_size: int


class EmployeeCreateResponse(BaseModel):
    message: str
    employee: EmployeeResponse


class EmployeeUpdate(BaseModel):
    """Partial update — only fields present in the request body are applied."""
    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    email: str | None = None
    mobile: str | None = None
    designation: str | None = None
    course: str | None = None
    gender: str | None = None
    image_ref: str | None = None
    active: bool | None = None


class ToggleActiveResponse(BaseModel):
    message: str
    active: bool


class MessageResponse(BaseModel):
    message: str
