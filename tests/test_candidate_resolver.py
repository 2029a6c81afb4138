"""Tests for per-field resolution, tie-break policies and cross-field uniqueness."""

from candidate_intake.core.candidate_resolver import (
    TIE_BREAK_POLICIES,
    TieBreak,
    break_tie,
    enforce_uniqueness,
    resolve_candidates,
    resolve_field,
)
from candidate_intake.core.schemas import FieldCandidate


def cand(value, score, header="", column=0):
    return FieldCandidate(value=value, score=score, origin_header=header, column=column)


def test_no_candidates():
    assert resolve_field("name", []) == (None, [])


def test_unique_max_wins_and_losers_are_kept():
    value, losers = resolve_field("status", [cand("applied", 10), cand("interested", 20)])
    assert value == "interested"
    assert losers == ["applied"]


class TestTieBreakPolicies:
    def test_policy_table(self):
        assert TIE_BREAK_POLICIES["name"] == (TieBreak.PREFER_HEADER_HINT, TieBreak.PREFER_SHORTEST)
        assert TIE_BREAK_POLICIES["company"] == (TieBreak.PREFER_HEADER_HINT, TieBreak.PREFER_LONGEST)
        assert "status" not in TIE_BREAK_POLICIES

    def test_header_hint_wins_first(self):
        tied = [cand("Priya Verma", 10), cand("Amit Kumar Singh", 10, header="SPOC")]
        assert break_tie("spoc", tied).value == "Amit Kumar Singh"

    def test_shortest_for_person_fields(self):
        tied = [cand("Rahul Sharma", 10), cand("Priya", 10)]
        assert break_tie("spoc", tied).value == "Priya"

    def test_longest_for_organizations(self):
        tied = [cand("Infosys", 15), cand("Skillnix Technologies", 15)]
        assert break_tie("company", tied).value == "Skillnix Technologies"

    def test_first_seen_fallback(self):
        tied = [cand("9876543210", 10, column=1), cand("9123456780", 10, column=4)]
        assert break_tie("phone", tied).value == "9876543210"

    def test_hinted_group_is_narrowed_further(self):
        tied = [
            cand("Skillnix Technologies", 15, header="Company"),
            cand("Acme Corp", 15, header="Company Name"),
            cand("Very Long Name Industries Pvt Ltd", 15),
        ]
        assert break_tie("company", tied).value == "Skillnix Technologies"


def test_uniqueness_follows_priority():
    resolved = enforce_uniqueness({
        "name": "Priya Verma",
        "spoc": "priya verma",
        "company": "PRIYA VERMA",
        "status": "interested",
    })
    assert resolved["name"] == "Priya Verma"
    assert resolved["spoc"] is None
    assert resolved["company"] is None
    assert resolved["status"] == "interested"


def test_resolve_candidates_builds_record_with_duplicates():
    record = resolve_candidates({
        "name": [cand("Rahul Sharma", 40), cand("Priya", 28)],
        "spoc": [cand("Rahul Sharma", 10), cand("Priya", 10)],
        "phone": [cand("9876543210", 10)],
    })
    assert record.name == "Rahul Sharma"
    assert record.spoc == "Priya"
    assert record.phone == "9876543210"
    assert record.duplicates == {"name": ["Priya"], "spoc": ["Rahul Sharma"]}
    assert record.email is None
