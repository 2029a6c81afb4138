"""
Parsers for the heterogeneous phone, salary, notice-period and experience
formats found in recruitment spreadsheets.

Each parser is total: it returns the canonical value or None for "no match".
None is the format-error sentinel; nothing here raises, and nothing guesses
outside the documented ranges.

Canonical units:
  phone          10-digit Indian mobile number as a string
  salary         lakhs per annum, one decimal
  notice period  whole days
  experience     years
"""

import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Optional

from candidate_intake.core.text_normalization import cell_text, digits_only


PHONE_RE = re.compile(r"^[6-9]\d{9}$")

SALARY_LPA_RE = re.compile(r"(\d+(?:\.\d+)?)\s*lpa\b")
SALARY_THOUSANDS_RE = re.compile(r"^(\d+(?:\.\d+)?)\s*k$")
# "3,00,000" (Indian grouping) or "300,000" (western grouping)
SALARY_GROUPED_RE = re.compile(r"^\d{1,3}(?:,\d{2})*,\d{3}$|^\d{1,3}(?:,\d{3})+$")
SALARY_LAKH_SHORT_RE = re.compile(r"^(\d+(?:\.\d+)?)\s*l$")
SALARY_LAKH_WORD_RE = re.compile(r"(\d+(?:\.\d+)?)\s*(?:lacs?|lakhs?)\b")
BARE_NUMBER_RE = re.compile(r"^\d+(?:\.\d+)?$")

NOTICE_IMMEDIATE_RE = re.compile(r"^(immediate|immedidate)")
NOTICE_DAYS_RE = re.compile(r"^(\d+)\s*days?$")
NOTICE_WEEKS_RE = re.compile(r"^(\d+)\s*weeks?$")
NOTICE_MONTHS_RE = re.compile(r"^(\d+)\s*months?$")
NOTICE_SERVING_RE = re.compile(r"\b(on|under)\s+notice\b")
BARE_INTEGER_RE = re.compile(r"^\d+$")

EXPERIENCE_ZERO_RE = re.compile(r"^(fresher|entry|0\s*exp|student|graduate)")
EXPERIENCE_RE = re.compile(r"^(\d+(?:\.\d+)?)\s*(\+)?\s*(yrs?|years?|y|months?)$")

LAKH = 100_000
SALARY_GROUPED_MIN = 100_000
SALARY_MAX_RUPEES = 10_000_000
SALARY_BARE_LAKH_MIN = 1.5
SALARY_BARE_LAKH_MAX = 100
NOTICE_MAX_DAYS = 365
EXPERIENCE_MAX = 70


def _one_decimal(value: float) -> float:
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def parse_phone(value: Any) -> Optional[str]:
    """
    Normalize an Indian mobile number.

    Non-digits are stripped and a leading "91" country code is dropped when
    more than ten digits remain. Only exactly ten digits starting with 6-9
    are accepted.

    Examples:
    - "+91 98765 43210" → "9876543210"
    - "91-9876543210" → "9876543210"
    - "5551234567" → None (no 6-9 prefix)
    - "12345" → None
    """
    digits = digits_only(value)
    if len(digits) > 10 and digits.startswith("91"):
        digits = digits[2:]
    if PHONE_RE.match(digits):
        return digits
    return None


def parse_salary(value: Any) -> Optional[float]:
    """
    Normalize a salary expression to lakhs per annum (one decimal).

    Accepted shapes, in order:
    - "<n> LPA"                      → n
    - "<n>K"                         → n / 100
    - "3,00,000" / "300,000"         → rupees / 100000 (only 1,00,000..1,00,00,000)
    - "<n>L", "<n> lac(s)", "<n> lakh(s)" → n
    - bare number 1.5..100           → already lakhs
    - bare number >100..10,000,000   → rupees / 100000

    Examples:
    - "3 LPA", "300000", "3,00,000", "3L" → 3.0
    - "150K" → 1.5
    - "1" → None (too small to be lakhs, too small to be rupees)
    """
    s = cell_text(value).lower()
    if not s:
        return None

    m = SALARY_LPA_RE.search(s)
    if m:
        return _one_decimal(float(m.group(1)))

    m = SALARY_THOUSANDS_RE.match(s)
    if m:
        return _one_decimal(float(m.group(1)) / 100)

    if SALARY_GROUPED_RE.match(s):
        rupees = int(s.replace(",", ""))
        if SALARY_GROUPED_MIN <= rupees <= SALARY_MAX_RUPEES:
            return _one_decimal(rupees / LAKH)
        return None

    m = SALARY_LAKH_SHORT_RE.match(s) or SALARY_LAKH_WORD_RE.search(s)
    if m:
        return _one_decimal(float(m.group(1)))

    if BARE_NUMBER_RE.match(s):
        amount = float(s)
        if SALARY_BARE_LAKH_MIN <= amount <= SALARY_BARE_LAKH_MAX:
            return _one_decimal(amount)
        if SALARY_BARE_LAKH_MAX < amount <= SALARY_MAX_RUPEES:
            return _one_decimal(amount / LAKH)

    return None


def parse_notice_period(value: Any) -> Optional[int]:
    """
    Normalize a notice period to days.

    Examples:
    - "Immediate", "immediate joiner", "0 days" → 0
    - "15 days" → 15, "2 weeks" → 14, "3 months" → 90
    - "60" → 60 (bare integers 0..365 are days)
    - "on notice", "serving under notice" → None (ambiguous, not guessed)
    """
    s = cell_text(value).lower()
    if not s:
        return None

    if NOTICE_IMMEDIATE_RE.match(s):
        return 0

    m = NOTICE_DAYS_RE.match(s)
    if m:
        return int(m.group(1))

    m = NOTICE_WEEKS_RE.match(s)
    if m:
        return int(m.group(1)) * 7

    m = NOTICE_MONTHS_RE.match(s)
    if m:
        return int(m.group(1)) * 30

    if NOTICE_SERVING_RE.search(s):
        return None

    if BARE_INTEGER_RE.match(s):
        days = int(s)
        if 0 <= days <= NOTICE_MAX_DAYS:
            return days

    return None


def parse_experience(value: Any) -> Optional[float]:
    """
    Normalize total experience to years.

    Examples:
    - "Fresher", "entry level", "0 exp", "Student", "Graduate" → 0.0
    - "7.9 Yrs" → 7.9, "10 years" → 10.0, "5+ yrs" → 5.0, "3y" → 3.0
    - "18 months" → 1.5
    - "75 years" → None (outside 0..70)
    - "senior" → None
    """
    s = cell_text(value).lower()
    if not s:
        return None

    if EXPERIENCE_ZERO_RE.match(s):
        return 0.0

    m = EXPERIENCE_RE.match(s)
    if not m:
        return None

    amount = float(m.group(1))
    if amount > EXPERIENCE_MAX or (0 < amount < 0.1):
        return None
    if m.group(3).startswith("month"):
        return _one_decimal(amount / 12)
    return amount
