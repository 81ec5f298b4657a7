"""Listing — pure normalization of list parameters into a stable, paginated query.

Invariants:
    - page and page_size are positive integers; page_size never exceeds max_page_size
    - offset = (page - 1) * page_size
    - sort_field is an Employee field; sort_direction is asc|desc
    - No upper bound on page: a page past the end is an empty result, never an error
    - Ties on sort_field are broken by ascending id (enforced by every store)

Design Decisions:
    - Counts and records are computed against the SAME predicate so totals always
      reflect the current search
    - Invalid parameters raise DirectoryValidationError here, before any store call
"""

from dataclasses import dataclass, field

from employee_directory.core.domain_types import (
    EmployeeRecord, SortDirection, SortField,
)
from employee_directory.core.errors import DirectoryValidationError
from employee_directory.core.search_predicate import (
    Predicate, build_search_predicate, only_active,
)

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
DEFAULT_MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class ListQuery:
    """Validated listing parameters."""
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE
    search_text: str = ""
    sort_field: SortField = SortField.CREATED_AT
    sort_direction: SortDirection = SortDirection.ASC

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def predicate(self) -> Predicate:
        return build_search_predicate(self.search_text)

    @property
    def active_predicate(self) -> Predicate:
        return only_active(self.predicate)


@dataclass(frozen=True)
class EmployeePage:
    """One page of a listing plus aggregate counts over the filtered set."""
    records: list[EmployeeRecord] = field(default_factory=list)
    total_count: int = 0
    total_active_count: int = 0
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE


def _positive_int(value: object, name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise DirectoryValidationError(f"{name} must be a positive integer", field=name)
    if number < 1:
        raise DirectoryValidationError(f"{name} must be a positive integer", field=name)
    return number


def build_list_query(
    page: object = DEFAULT_PAGE,
    page_size: object = DEFAULT_PAGE_SIZE,
    search_text: str | None = "",
    sort_field: str | SortField = SortField.CREATED_AT,
    sort_direction: str | SortDirection = SortDirection.ASC,
    max_page_size: int = DEFAULT_MAX_PAGE_SIZE,
) -> ListQuery:
    """Validate raw listing parameters. Pure."""
    page = _positive_int(page, "page")
    page_size = _positive_int(page_size, "page_size")
    if page_size > max_page_size:
        raise DirectoryValidationError(
            f"page_size must not exceed {max_page_size}", field="page_size",
        )
    try:
        field_ = SortField(sort_field)
    except ValueError:
        raise DirectoryValidationError(
            f"Cannot sort by '{sort_field}'", field="sort_field",
        )
    if isinstance(sort_direction, str) and not isinstance(sort_direction, SortDirection):
        sort_direction = sort_direction.lower()
    try:
        direction = SortDirection(sort_direction)
    except ValueError:
        raise DirectoryValidationError(
            "sort_order must be 'asc' or 'desc'", field="sort_order",
        )
    return ListQuery(
        page=page,
        page_size=page_size,
        search_text=(search_text or "").strip(),
        sort_field=field_,
        sort_direction=direction,
    )
