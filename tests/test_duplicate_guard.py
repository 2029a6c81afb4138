"""Tests for the batch-scoped first-occurrence-wins guard."""

from candidate_intake.core.duplicate_guard import DuplicateGuard
from candidate_intake.core.schemas import CandidateFields, StorageSnapshot


def test_second_row_with_same_email_is_dropped():
    guard = DuplicateGuard()
    first = guard.admit(CandidateFields(name="Rahul", email="a@b.com"))
    second = guard.admit(CandidateFields(name="Priya", email="A@B.com "))
    assert first.accepted
    assert not second.accepted
    assert guard.in_file_duplicates == 1


def test_same_phone_is_a_duplicate():
    guard = DuplicateGuard()
    guard.admit(CandidateFields(phone="9876543210"))
    assert not guard.admit(CandidateFields(phone="98765-43210")).accepted


def test_rows_without_identifiers_are_never_duplicates():
    guard = DuplicateGuard()
    assert guard.admit(CandidateFields(name="Rahul")).accepted
    assert guard.admit(CandidateFields(name="Rahul")).accepted
    assert guard.in_file_duplicates == 0


def test_dropped_rows_do_not_register_identifiers():
    guard = DuplicateGuard()
    guard.admit(CandidateFields(email="a@b.com", phone="9876543210"))
    assert not guard.admit(CandidateFields(email="a@b.com", phone="9123456780")).accepted
    assert guard.admit(CandidateFields(email="c@d.com", phone="9123456780")).accepted


def test_storage_match_is_kept_with_info_notice():
    snapshot = StorageSnapshot.from_identifiers(emails=[" A@B.com"], phones=["+91 98765 43210"])
    guard = DuplicateGuard(snapshot)
    admission = guard.admit(CandidateFields(email="a@b.com"))
    assert admission.accepted
    assert admission.notice.severity == "INFO"
    assert admission.notice.field == "email"
    assert "already exists" in admission.notice.message
    assert guard.storage_duplicates == 1


def test_snapshot_normalizes_identifiers():
    snapshot = StorageSnapshot.from_identifiers(emails=[" A@B.com", ""], phones=["+91 98765 43210", "98765-43210", None])
    assert snapshot.emails == frozenset({"a@b.com"})
    assert snapshot.phones == frozenset({"9876543210"})


def test_fresh_guards_do_not_share_state():
    one, two = DuplicateGuard(), DuplicateGuard()
    one.admit(CandidateFields(email="a@b.com"))
    assert two.admit(CandidateFields(email="a@b.com")).accepted
