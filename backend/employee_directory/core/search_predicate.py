"""Search Predicates — backend-neutral filter combinators over employee records.

Invariants:
    - Predicates are immutable values; building one never touches a store
    - NameContainsAny matches when the name contains ANY term (OR), case-insensitive
    - Terms are literal substrings — no regex or wildcard semantics
    - Empty / whitespace-only search text yields MatchAll

Design Decisions:
    - Combinators instead of a query DSL: each store compiles them (SQL clause or
      in-memory matches()) so OR-of-terms semantics hold on every backend
    - Case folding of non-ASCII letters is backend-dependent: matches() uses casefold(),
      PostgreSQL lower() folds Unicode, SQLite lower() folds ASCII only
"""

from dataclasses import dataclass
from typing import Union

from employee_directory.core.domain_types import EmployeeRecord


@dataclass(frozen=True)
class MatchAll:
    """Matches every record."""

    def matches(self, record: EmployeeRecord) -> bool:
        return True


@dataclass(frozen=True)
class NameContainsAny:
    """Union of per-term substring matches on the name field."""
    terms: tuple[str, ...]

    def matches(self, record: EmployeeRecord) -> bool:
        name = record.name.casefold()
        return any(term.casefold() in name for term in self.terms)


@dataclass(frozen=True)
class ActiveIs:
    active: bool

    def matches(self, record: EmployeeRecord) -> bool:
        return bool(record.active) == self.active


@dataclass(frozen=True)
class AllOf:
    """Intersection of predicates."""
    parts: tuple["Predicate", ...]

    def matches(self, record: EmployeeRecord) -> bool:
        return all(part.matches(record) for part in self.parts)


Predicate = Union[MatchAll, NameContainsAny, ActiveIs, AllOf]


def split_search_terms(search_text: str | None) -> tuple[str, ...]:
    """Split free text on whitespace. Pure."""
    if not search_text:
        return ()
    return tuple(search_text.split())


def build_search_predicate(search_text: str | None) -> Predicate:
    """Free text → predicate. Empty text matches everything."""
    terms = split_search_terms(search_text)
    if not terms:
        return MatchAll()
    return NameContainsAny(terms)


def only_active(predicate: Predicate) -> Predicate:
    """Narrow a predicate to active records (used for the active count)."""
    if isinstance(predicate, MatchAll):
        return ActiveIs(True)
    return AllOf((predicate, ActiveIs(True)))
