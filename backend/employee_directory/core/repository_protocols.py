"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO
"""

from typing import Protocol

from employee_directory.core.domain_types import (
    EmployeeId, EmployeeRecord, SortDirection, SortField,
)
from employee_directory.core.search_predicate import Predicate


class EmployeeStore(Protocol):
    """Contract for the durable employee collection.

    insert/update raise ConstraintViolationError on duplicate email;
    find_by_id/update/delete raise ResourceNotFoundError for unknown ids;
    find_many orders by (sort_field, id) so pagination is deterministic.
    """
    async def insert(self, fields: dict) -> EmployeeRecord: ...
    async def find_by_id(self, employee_id: EmployeeId) -> EmployeeRecord: ...
    async def find_many(
        self,
        predicate: Predicate,
        sort_field: SortField,
        sort_direction: SortDirection,
        offset: int,
        limit: int,
    ) -> list[EmployeeRecord]: ...
    async def count(self, predicate: Predicate) -> int: ...
    async def update(
        self, employee_id: EmployeeId, fields: dict,
    ) -> EmployeeRecord: ...
    async def delete(self, employee_id: EmployeeId) -> None: ...


class AssetStore(Protocol):
    """Contract for binary image storage — returns opaque reference strings."""
    async def save(self, data: bytes, filename: str) -> str: ...
    async def load(self, ref: str) -> bytes: ...
    async def remove(self, ref: str) -> None: ...
