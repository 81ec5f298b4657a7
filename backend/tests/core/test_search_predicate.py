"""Search Predicates — verifies OR-of-terms name matching and combinators.

Invariants:
    - Empty search matches everything
    - Any single term matching (case-insensitive substring) includes the record
    - only_active narrows without dropping the search terms
"""

from datetime import datetime, timezone
from uuid import uuid4

from employee_directory.core.domain_types import EmployeeId, EmployeeRecord
from employee_directory.core.search_predicate import (
    ActiveIs, AllOf, MatchAll, NameContainsAny,
    build_search_predicate, only_active, split_search_terms,
)


def _record(name: str, active: bool = True) -> EmployeeRecord:
    return EmployeeRecord(
        id=EmployeeId(uuid4()), name=name, email=f"{uuid4().hex}@x.com",
        mobile="1234567890", designation="Dev", course="BSc", gender="Other",
        created_at=datetime.now(timezone.utc), active=active,
    )


def test_split_search_terms_on_whitespace():
    assert split_search_terms("  ana   reis\tbob ") == ("ana", "reis", "bob")
    assert split_search_terms("") == ()
    assert split_search_terms(None) == ()


def test_blank_search_matches_all():
    assert build_search_predicate("   ") == MatchAll()
    assert build_search_predicate(None).matches(_record("Anyone"))


def test_substring_match_is_case_insensitive():
    predicate = build_search_predicate("ana")
    assert predicate.matches(_record("Ana Silva"))
    assert predicate.matches(_record("Juliana Reis"))
    assert not predicate.matches(_record("Bob"))


def test_terms_are_or_combined():
    predicate = build_search_predicate("bob reis")
    assert predicate == NameContainsAny(("bob", "reis"))
    assert predicate.matches(_record("Bob"))
    assert predicate.matches(_record("Juliana Reis"))
    assert not predicate.matches(_record("Ana Silva"))


def test_terms_are_literal():
    predicate = build_search_predicate("a.*")
    assert not predicate.matches(_record("Ana"))
    assert predicate.matches(_record("Weird a.* Name"))


def test_only_active_on_match_all():
    assert only_active(MatchAll()) == ActiveIs(True)


def test_only_active_keeps_search():
    predicate = only_active(build_search_predicate("ana"))
    assert isinstance(predicate, AllOf)
    assert predicate.matches(_record("Ana", active=True))
    assert not predicate.matches(_record("Ana", active=False))
    assert not predicate.matches(_record("Bob", active=True))


def test_in_memory_matching_folds_accented_letters():
    predicate = build_search_predicate("élise")
    assert predicate.matches(_record("Élise Dupont"))
    assert build_search_predicate("STRASSE").matches(_record("Anna Straße"))
