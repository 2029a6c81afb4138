"""
Text helpers shared by detection, correction and auto-fix.

Everything here is pure and total: helpers accept any cell value (str, number,
None) and never raise.
"""

import re
from functools import lru_cache
from typing import Any, Iterable, List, Optional

from candidate_intake.core.keywords import (
    EMAIL_DOMAIN_CORRECTIONS,
    PLACEHOLDER_PREFIXES,
    PLACEHOLDER_VALUES,
)


# ============================================================================
# Shapes
# ============================================================================

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
NON_DIGIT_RE = re.compile(r"\D")
WHITESPACE_RE = re.compile(r"\s+")
HEADER_WORD_RE = re.compile(r"[a-z0-9]+")

# Characters (besides letters) a person name may contain
NAME_PUNCTUATION = frozenset(" -'.")


def cell_text(value: Any) -> str:
    """
    Render a raw cell as trimmed text. None becomes "".

    Spreadsheet readers hand over whole numbers as floats; those are rendered
    without the trailing ".0" so phone numbers keep their digits.
    """
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def collapse_whitespace(text: str) -> str:
    """
    Trim and collapse internal runs of whitespace.

    Examples:
    - "  Skillnix   Technologies " → "Skillnix Technologies"
    """
    return WHITESPACE_RE.sub(" ", text).strip()


def digits_only(value: Any) -> str:
    return NON_DIGIT_RE.sub("", cell_text(value))


def title_case(text: str) -> str:
    """
    Capitalize the first letter of every whitespace-separated word, lowercase the rest.

    Examples:
    - "RAHUL  sharma" → "Rahul Sharma"
    - "mary-jane" → "Mary-jane"
    """
    return " ".join(w[:1].upper() + w[1:].lower() for w in text.split())


def is_placeholder(value: Any) -> bool:
    """
    True for strings that stand for "no data" rather than content.

    Examples:
    - "N/A", "tbd", "-", "" → True
    - "As per company norms", "Will share later" → True
    - "Rahul" → False
    """
    t = cell_text(value).lower()
    if t in PLACEHOLDER_VALUES:
        return True
    if t.startswith(PLACEHOLDER_PREFIXES):
        return True
    return t.startswith("will") and "share" in t


def is_email(value: Any) -> bool:
    return bool(EMAIL_RE.match(cell_text(value).lower()))


def word_count(text: str) -> int:
    return len(text.split())


def has_only_name_chars(text: str, extra: Iterable[str] = NAME_PUNCTUATION) -> bool:
    """True when every character is a letter (any script) or one of `extra`."""
    allowed = frozenset(extra)
    return bool(text) and all(c.isalpha() or c in allowed for c in text)


# ============================================================================
# Keyword matching
# ============================================================================

@lru_cache(maxsize=None)
def _word_pattern(keyword: str) -> "re.Pattern[str]":
    return re.compile(r"\b" + re.escape(keyword) + r"\b")


def contains_keyword(text_lower: str, keyword: str) -> bool:
    """
    Keyword membership on lowercased text.

    Keywords of three characters or fewer must match a whole word so that "hr"
    does not fire inside "Shruti" and "sa" does not fire inside "Sagar".
    """
    if len(keyword) <= 3:
        return bool(_word_pattern(keyword).search(text_lower))
    return keyword in text_lower


def contains_any_keyword(text_lower: str, keywords: Iterable[str]) -> bool:
    return any(contains_keyword(text_lower, k) for k in keywords)


def contains_any_word(text_lower: str, keywords: Iterable[str]) -> bool:
    """Whole-word membership regardless of keyword length (job titles)."""
    return any(_word_pattern(k).search(text_lower) for k in keywords)


def header_words(header: str) -> List[str]:
    """
    Split a column label into lowercase alphanumeric words.

    Examples:
    - "Sr. No" → ["sr", "no"]
    - "Email_ID" → ["email", "id"]
    """
    return HEADER_WORD_RE.findall(header.lower().replace("_", " "))


# ============================================================================
# Email
# ============================================================================

def fix_email_domain(email: str) -> str:
    """
    Correct a well-known misspelled mail domain, leaving everything else untouched.

    Examples:
    - "rahul@gnail.com" → "rahul@gmail.com"
    - "rahul@company.in" → "rahul@company.in"
    """
    if not email or "@" not in email:
        return email
    local, _, domain = email.rpartition("@")
    corrected: Optional[str] = EMAIL_DOMAIN_CORRECTIONS.get(domain.lower())
    if corrected:
        return f"{local}@{corrected}"
    return email
