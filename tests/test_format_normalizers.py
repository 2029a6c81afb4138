"""
Unit tests for format_normalizers.

Covers the phone, salary, notice-period and experience shapes seen in real
recruitment sheets, and the "no match" sentinel for everything else.
"""

import pytest
from candidate_intake.core.format_normalizers import (
    parse_experience,
    parse_notice_period,
    parse_phone,
    parse_salary,
)


class TestParsePhone:
    @pytest.mark.parametrize("raw", ["+91 98765 43210", "9876543210", "91-9876543210"])
    def test_known_shapes_normalize_to_ten_digits(self, raw):
        assert parse_phone(raw) == "9876543210"

    def test_no_mobile_prefix_is_rejected(self):
        assert parse_phone("5551234567") is None

    def test_too_short_is_rejected(self):
        assert parse_phone("12345") is None

    def test_float_cell_from_spreadsheet(self):
        assert parse_phone(9876543210.0) == "9876543210"

    def test_empty_and_none(self):
        assert parse_phone("") is None
        assert parse_phone(None) is None

    def test_eleven_digits_without_country_code(self):
        assert parse_phone("98765432101") is None


class TestParseSalary:
    @pytest.mark.parametrize("raw", ["3 LPA", "300000", "3,00,000", "3L"])
    def test_equivalent_spellings_of_three_lakhs(self, raw):
        assert parse_salary(raw) == 3.0

    def test_thousands_suffix(self):
        assert parse_salary("150K") == 1.5
        assert parse_salary("450.5K") == 4.5

    def test_lakh_words(self):
        assert parse_salary("5 lakhs") == 5.0
        assert parse_salary("4.5 lac") == 4.5

    def test_western_grouping(self):
        assert parse_salary("1,200,000") == 12.0

    def test_grouped_amount_out_of_range(self):
        assert parse_salary("50,000") is None

    def test_one_decimal_rounding(self):
        assert parse_salary("12.55 LPA") == 12.6

    def test_bare_number_already_in_lakhs(self):
        assert parse_salary("7.5") == 7.5

    def test_bare_number_too_small(self):
        assert parse_salary("1") is None

    def test_text_is_no_match(self):
        assert parse_salary("negotiable") is None
        assert parse_salary("") is None


class TestParseNoticePeriod:
    @pytest.mark.parametrize("raw,days", [
        ("Immediate", 0),
        ("immediate joiner", 0),
        ("0 days", 0),
        ("15 days", 15),
        ("1 day", 1),
        ("2 weeks", 14),
        ("3 months", 90),
        ("1 month", 30),
        ("60", 60),
    ])
    def test_shapes(self, raw, days):
        assert parse_notice_period(raw) == days

    def test_serving_notice_is_not_guessed(self):
        assert parse_notice_period("on notice") is None
        assert parse_notice_period("serving under notice") is None

    def test_bare_integer_out_of_range(self):
        assert parse_notice_period("400") is None

    def test_fraction_is_no_match(self):
        assert parse_notice_period("2.5") is None


class TestParseExperience:
    @pytest.mark.parametrize("raw", ["Fresher", "entry level", "0 exp", "Student", "Graduate"])
    def test_zero_experience_words(self, raw):
        assert parse_experience(raw) == 0.0

    @pytest.mark.parametrize("raw,years", [
        ("7.9 Yrs", 7.9),
        ("10 years", 10.0),
        ("5+ yrs", 5.0),
        ("3y", 3.0),
        ("1 year", 1.0),
    ])
    def test_year_shapes(self, raw, years):
        assert parse_experience(raw) == years

    def test_months_convert_to_years(self):
        assert parse_experience("18 months") == 1.5

    def test_out_of_range(self):
        assert parse_experience("75 years") is None
        assert parse_experience("0.05 years") is None

    def test_words_are_no_match(self):
        assert parse_experience("senior") is None
        assert parse_experience("5") is None
