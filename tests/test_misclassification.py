"""Tests for the correction rules and the placement-repair pass."""

from candidate_intake.core.misclassification import correct_misclassifications, repair_placements
from candidate_intake.core.schemas import DetectedRecord


class TestCorrector:
    def test_name_with_job_title_becomes_position(self):
        record, notes = correct_misclassifications(DetectedRecord(name="Sales Manager"))
        assert record.position == "Sales Manager"
        assert record.name is None
        assert len(notes) == 1

    def test_name_kept_when_position_already_set(self):
        record, notes = correct_misclassifications(
            DetectedRecord(name="Sales Manager", position="Team Lead")
        )
        assert record.name == "Sales Manager"
        assert notes == []

    def test_position_with_org_words_becomes_company(self):
        record, _ = correct_misclassifications(DetectedRecord(position="Bajaj Finance"))
        assert record.company == "Bajaj Finance"
        assert record.position is None

    def test_short_company_becomes_spoc(self):
        record, _ = correct_misclassifications(DetectedRecord(company="Ram"))
        assert record.spoc == "Ram"
        assert record.company is None

    def test_short_org_name_stays_company(self):
        record, _ = correct_misclassifications(DetectedRecord(company="TCS"))
        assert record.company == "TCS"
        assert record.spoc is None

    def test_bank_client_swaps_with_company(self):
        record, notes = correct_misclassifications(
            DetectedRecord(company="Skillnix Technologies", client="HDFC Bank")
        )
        assert record.company == "HDFC Bank"
        assert record.client == "Skillnix Technologies"
        assert notes

    def test_no_swap_when_both_are_financial(self):
        record, notes = correct_misclassifications(
            DetectedRecord(company="Axis Bank", client="HDFC Bank")
        )
        assert record.company == "Axis Bank"
        assert record.client == "HDFC Bank"
        assert notes == []

    def test_rules_run_once_in_sequence(self):
        # Rule 1 moves the name to position, then rule 2 sees that position
        record, notes = correct_misclassifications(DetectedRecord(name="Finance Manager"))
        assert record.name is None
        assert record.position is None
        assert record.company == "Finance Manager"
        assert len(notes) == 2

    def test_input_is_not_mutated(self):
        original = DetectedRecord(name="Sales Manager", duplicates={"name": ["x"]})
        record, _ = correct_misclassifications(original)
        assert original.name == "Sales Manager"
        assert record.duplicates == {"name": ["x"]}


class TestPlacementRepair:
    def test_email_in_company_moves_to_email(self):
        record, notes = repair_placements(DetectedRecord(company="rahul@gmail.com"))
        assert record.email == "rahul@gmail.com"
        assert record.company is None
        assert notes

    def test_phone_in_spoc_moves_to_phone(self):
        record, _ = repair_placements(DetectedRecord(spoc="98765 43210"))
        assert record.phone == "9876543210"
        assert record.spoc is None

    def test_salary_like_text_is_not_a_phone(self):
        record, _ = repair_placements(DetectedRecord(company="9876543210 lpa"))
        assert record.phone is None

    def test_name_that_is_experience(self):
        record, _ = repair_placements(DetectedRecord(name="5 yrs"))
        assert record.experience == 5.0
        assert record.name is None

    def test_name_that_is_experience_dropped_even_if_experience_set(self):
        record, _ = repair_placements(DetectedRecord(name="5 yrs", experience=7.0))
        assert record.experience == 7.0
        assert record.name is None

    def test_name_that_is_city(self):
        record, _ = repair_placements(DetectedRecord(name="Pune"))
        assert record.location == "Pune"
        assert record.name is None

    def test_standard_notice_in_text_field(self):
        record, _ = repair_placements(DetectedRecord(status="30"))
        assert record.notice_period == 30
        assert record.status is None

    def test_non_standard_number_stays(self):
        record, _ = repair_placements(DetectedRecord(status="31"))
        assert record.notice_period is None
        assert record.status == "31"

    def test_city_in_other_text_field(self):
        record, _ = repair_placements(DetectedRecord(company="Mumbai"))
        assert record.location == "Mumbai"
        assert record.company is None

    def test_city_stays_when_location_filled(self):
        record, notes = repair_placements(DetectedRecord(company="Mumbai", location="Pune"))
        assert record.company == "Mumbai"
        assert notes == []
