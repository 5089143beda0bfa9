from __future__ import annotations

import pytest

from credregistry.core.errors import NotFoundError
from credregistry.models.credential import Credential, VALIDITY_SECONDS
from credregistry.repos.credential_repo import InMemoryCredentialRepo
from credregistry.services.query_service import QueryService
from tests.conftest import FakeClock


def _cred(repo: InMemoryCredentialRepo, clock: FakeClock, **kw) -> Credential:
    fields = {
        "student_id": "s1",
        "institution_id": "i1",
        "course": "Computer Science",
        "degree": "BSc",
        "graduation_year": 2024,
        "issued_at": clock(),
    }
    fields.update(kw)
    c = Credential.new(**fields)
    repo.add(c)
    return c


@pytest.fixture
def repo() -> InMemoryCredentialRepo:
    return InMemoryCredentialRepo()


@pytest.fixture
def queries(repo: InMemoryCredentialRepo, clock: FakeClock) -> QueryService:
    return QueryService(credentials=repo, clock=clock)


# ---- verify ----


def test_verify_returns_matching_valid_credential(repo, queries, clock) -> None:
    _cred(repo, clock, student_id="other")
    match = _cred(repo, clock)
    assert queries.verify(student_id="s1", institution_id="i1") == match


def test_verify_first_match_wins(repo, queries, clock) -> None:
    first = _cred(repo, clock, course="Maths")
    _cred(repo, clock, course="Physics")
    assert queries.verify(student_id="s1", institution_id="i1") == first


def test_verify_skips_revoked(repo, queries, clock) -> None:
    revoked = _cred(repo, clock)
    repo.update(revoked.revoked_copy())
    valid = _cred(repo, clock, course="Maths")
    assert queries.verify(student_id="s1", institution_id="i1") == valid


def test_verify_rejects_revoked_only(repo, queries, clock) -> None:
    c = _cred(repo, clock)
    repo.update(c.revoked_copy())
    with pytest.raises(NotFoundError):
        queries.verify(student_id="s1", institution_id="i1")


def test_verify_rejects_expired(repo, queries, clock) -> None:
    _cred(repo, clock)
    clock.advance(VALIDITY_SECONDS + 1)
    with pytest.raises(NotFoundError):
        queries.verify(student_id="s1", institution_id="i1")


def test_verify_rejects_at_exact_expiry(repo, queries, clock) -> None:
    _cred(repo, clock)
    clock.advance(VALIDITY_SECONDS)
    with pytest.raises(NotFoundError):
        queries.verify(student_id="s1", institution_id="i1")


def test_verify_requires_both_ids_to_match(repo, queries, clock) -> None:
    _cred(repo, clock)
    with pytest.raises(NotFoundError):
        queries.verify(student_id="s1", institution_id="i2")


# ---- search ----


def test_search_without_filters_returns_everything_in_order(repo, queries, clock) -> None:
    created = [_cred(repo, clock, course=f"Course {n}") for n in range(3)]
    assert queries.search() == created


def test_search_includes_revoked_and_expired(repo, queries, clock) -> None:
    c = _cred(repo, clock)
    repo.update(c.revoked_copy())
    clock.advance(VALIDITY_SECONDS * 2)
    assert [r.id for r in queries.search(course="Computer")] == [c.id]


def test_search_course_is_case_sensitive_substring(repo, queries, clock) -> None:
    cs = _cred(repo, clock, course="Computer Science")
    _cred(repo, clock, course="Art History")
    assert queries.search(course="Science") == [cs]
    with pytest.raises(NotFoundError):
        queries.search(course="science")


def test_search_all_filters_are_conjunctive(repo, queries, clock) -> None:
    hit = _cred(repo, clock, course="Computer Science", degree="MSc", graduation_year=2022)
    _cred(repo, clock, course="Computer Science", degree="MSc", graduation_year=2023)
    _cred(repo, clock, course="Computer Science", degree="BSc", graduation_year=2022)
    _cred(repo, clock, course="History", degree="MSc", graduation_year=2022)

    assert queries.search(course="Computer", degree="MSc", graduation_year=2022) == [hit]


def test_search_year_is_exact(repo, queries, clock) -> None:
    _cred(repo, clock, graduation_year=2024)
    with pytest.raises(NotFoundError):
        queries.search(graduation_year=202)


def test_search_empty_and_zero_filters_match_everything(repo, queries, clock) -> None:
    c = _cred(repo, clock)
    assert queries.search(course="", degree="", graduation_year=0) == [c]


def test_search_no_match_is_not_found(repo, queries, clock) -> None:
    _cred(repo, clock)
    with pytest.raises(NotFoundError):
        queries.search(degree="PhD")


def test_search_empty_store_is_not_found(queries) -> None:
    with pytest.raises(NotFoundError):
        queries.search()


# ---- list_all ----


def test_list_all_empty_is_not_found(queries) -> None:
    with pytest.raises(NotFoundError, match="No credentials found"):
        queries.list_all()


def test_list_all_returns_stored(repo, queries, clock) -> None:
    a = _cred(repo, clock)
    b = _cred(repo, clock, student_id="s2")
    assert queries.list_all() == [a, b]
