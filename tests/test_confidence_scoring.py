"""
Test suite for validation and confidence scoring.

Hard errors always block; otherwise the confidence left after missing-field
penalties decides between ready, review and blocked.
"""

import pytest
from candidate_intake.core.confidence_calculator import ConfidenceCalculator
from candidate_intake.core.schemas import CandidateFields


def complete_record(**overrides):
    fields = dict(
        name="Rahul Sharma",
        email="rahul@gmail.com",
        phone="9876543210",
        location="Bangalore",
        position="Senior Developer",
        experience=5.0,
        ctc=8.0,
        notice_period=30,
        status="interested",
    )
    fields.update(overrides)
    return CandidateFields(**fields)


def test_ready_when_only_company_and_source_missing():
    result = ConfidenceCalculator.evaluate(complete_record())
    assert result.errors == []
    assert result.confidence == 90
    assert result.category == "ready"
    assert sorted(w.field for w in result.warnings) == ["company", "source_of_cv"]


def test_blocked_by_score_without_hard_errors():
    result = ConfidenceCalculator.evaluate(CandidateFields(name="Rahul Sharma", phone="9876543210"))
    assert result.errors == []
    assert result.confidence == 20
    assert result.category == "blocked"


def test_blocked_by_score_with_email_present():
    result = ConfidenceCalculator.evaluate(
        CandidateFields(name="Rahul Sharma", phone="9876543210", email="rahul@gmail.com")
    )
    assert result.errors == []
    assert result.confidence == 30
    assert result.category == "blocked"


def test_name_with_digits_is_a_hard_error():
    result = ConfidenceCalculator.evaluate(
        CandidateFields(name="abc123", phone="9876543210", email="x@y.com")
    )
    assert [e.field for e in result.errors] == ["name"]
    assert result.errors[0].severity == "ERROR"
    assert result.category == "blocked"


def test_hard_error_blocks_regardless_of_confidence():
    result = ConfidenceCalculator.evaluate(complete_record(phone="12345", company="Infosys", source_of_cv="naukri"))
    assert result.confidence == 50
    assert result.category == "blocked"
    assert result.errors[0].message == "Phone must be 10 digits starting with 6-9"


def test_confidence_floor_is_zero():
    result = ConfidenceCalculator.evaluate(CandidateFields())
    assert result.confidence == 0
    assert {e.field for e in result.errors} == {"name", "phone"}


class TestFieldChecks:
    def test_name_messages(self):
        assert ConfidenceCalculator.name(None) == "Name is required"
        assert ConfidenceCalculator.name("N/A") == '"N/A" is placeholder text'
        assert ConfidenceCalculator.name("R@hul") == "Name must be alphabetic only"
        assert ConfidenceCalculator.name("...") == "Name must be alphabetic only"
        assert ConfidenceCalculator.name("Mary-Jane O'Brien") is None

    def test_phone_messages(self):
        assert ConfidenceCalculator.phone("") == "Phone number is required"
        assert ConfidenceCalculator.phone("5551234567") == "Phone must be 10 digits starting with 6-9"
        assert ConfidenceCalculator.phone("9876543210") is None

    def test_missing_email_is_not_an_error(self):
        assert ConfidenceCalculator.email(None) is None
        assert ConfidenceCalculator.email("rahul@gmail") == "Email format is invalid"


@pytest.mark.parametrize("has_errors,confidence,category", [
    (False, 100, "ready"),
    (False, 80, "ready"),
    (False, 79, "review"),
    (False, 50, "review"),
    (False, 49, "blocked"),
    (True, 100, "blocked"),
])
def test_categorize(has_errors, confidence, category):
    assert ConfidenceCalculator.categorize(has_errors, confidence) == category
