"""
Content-based field detection.

Every cell of a row is tested against every field class. A field class is a
ScanRule: a predicate that extracts a normalized value (or None) and a scorer
that rates how strongly the cell looks like that field. Headers never decide a
field on their own; they only veto cells whose content contradicts a strongly
labelled column and add a small boost or penalty to scores.

The rules run in a fixed order, so candidate lists come out in a stable order
(column first, then rule).
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, Tuple

from candidate_intake.core.format_normalizers import (
    NOTICE_MAX_DAYS,
    parse_experience,
    parse_notice_period,
    parse_phone,
    parse_salary,
)
from candidate_intake.core.header_mapping import classify_header
from candidate_intake.core.keywords import (
    BANK_FINANCE_KEYWORDS,
    CITY_KEYWORDS,
    FIELD_NAMES,
    NAME_HEADER_BOOST_WORDS,
    NOTICE_PHRASE_KEYWORDS,
    ORG_KEYWORDS,
    ORG_SUFFIXES,
    POSITION_KEYWORDS,
    SOURCE_KEYWORDS,
    STATUS_KEYWORDS,
    UNRELATED_HEADER_WORDS,
)
from candidate_intake.core.schemas import FieldCandidate, FieldCandidateSet
from candidate_intake.core.text_normalization import (
    cell_text,
    contains_any_keyword,
    contains_any_word,
    has_only_name_chars,
    header_words,
    is_email,
    is_placeholder,
    word_count,
)

logger = logging.getLogger(__name__)


HEADER_MATCH_BOOST = 5
HEADER_MISMATCH_PENALTY = 5

# Tokens that mark a cell as a measurement or contact detail, never a person
NON_PERSON_TOKEN_RE = re.compile(r"\b(lpa|lakhs?|lacs?|yrs?|years?|months?|phone|email)\b|@")
# Extra tokens a SPOC value must not contain (banks, portals, web addresses)
NON_SPOC_TOKEN_RE = re.compile(r"\b(bank|pvt|ltd|naukri|linkedin)\b|\.com")
ORG_SUFFIX_RE = re.compile(r"\b(" + "|".join(sorted(ORG_SUFFIXES)) + r")\b\.?")
ORG_CHARSET_RE = re.compile(r"^[a-z0-9\s&\-.,'()]+$")
DIGIT_RE = re.compile(r"\d")
SYMBOL_RE = re.compile(r"[^\w\s'\-]")


@dataclass(frozen=True)
class CellContext:
    """Everything the rules need to know about one cell, computed once."""
    text: str
    lower: str
    header: str
    header_field: Optional[str]
    column: int
    words: int
    notice: Optional[int]
    experience: Optional[float]
    salary: Optional[float]
    is_city: bool
    is_org: bool
    is_position: bool
    is_status: bool


@dataclass(frozen=True)
class ScanRule:
    field: str
    extract: Callable[[CellContext], Any]
    score: Callable[[CellContext], float]
    # Identity rules still run on columns whose header names something unrelated
    identity: bool = False


def build_context(text: str, header: str, column: int) -> CellContext:
    """
    Parse a cell once for every rule.

    Numeric interpretations are mutually exclusive: a cell that reads as a
    notice period is not also experience, and a cell that reads as either is
    not a salary.
    """
    lower = text.lower()
    notice = parse_notice_period(text)
    if notice is not None and not (0 <= notice <= NOTICE_MAX_DAYS):
        notice = None
    experience = parse_experience(text) if notice is None else None
    salary = None
    if notice is None and experience is None:
        salary = parse_salary(text)
        if salary is not None and not (0 < salary <= 100):
            salary = None

    return CellContext(
        text=text,
        lower=lower,
        header=header,
        header_field=classify_header(header) if header else None,
        column=column,
        words=word_count(text),
        notice=notice,
        experience=experience,
        salary=salary,
        is_city=contains_any_word(lower, CITY_KEYWORDS),
        is_org=_looks_like_org(lower),
        is_position=contains_any_word(lower, POSITION_KEYWORDS),
        is_status=contains_any_word(lower, STATUS_KEYWORDS),
    )


def _looks_like_org(lower: str) -> bool:
    return (
        contains_any_keyword(lower, ORG_KEYWORDS)
        or bool(ORG_SUFFIX_RE.search(lower))
        or len(lower) > 45
    )


def _is_notice_phrase(ctx: CellContext) -> bool:
    return ctx.notice is not None or contains_any_keyword(ctx.lower, NOTICE_PHRASE_KEYWORDS)


def _looks_like_person(ctx: CellContext) -> bool:
    """Shared shape test for candidate names and SPOC names."""
    if not (1 <= ctx.words <= 3 and 2 <= len(ctx.text) <= 40):
        return False
    if not has_only_name_chars(ctx.text) or DIGIT_RE.search(ctx.text):
        return False
    if NON_PERSON_TOKEN_RE.search(ctx.lower):
        return False
    if ctx.is_org or ctx.is_position or ctx.is_status or ctx.is_city:
        return False
    if _is_notice_phrase(ctx) or ctx.experience is not None:
        return False
    return not contains_any_word(ctx.lower, SOURCE_KEYWORDS)


# ============================================================================
# Rules
# ============================================================================

def _extract_email(ctx: CellContext) -> Optional[str]:
    return ctx.text if is_email(ctx.text) else None


def _extract_phone(ctx: CellContext) -> Optional[str]:
    return parse_phone(ctx.text)


def _extract_position(ctx: CellContext) -> Optional[str]:
    if ctx.is_position and "@" not in ctx.text:
        return ctx.text
    return None


def _extract_name(ctx: CellContext) -> Optional[str]:
    return ctx.text if _looks_like_person(ctx) else None


def _score_name(ctx: CellContext) -> float:
    if 2 <= ctx.words <= 4:
        score = 20
    elif ctx.words == 1:
        score = 15
    else:
        score = 10
    score += len(ctx.text)
    if DIGIT_RE.search(ctx.text):
        score -= 30
    if SYMBOL_RE.search(ctx.text):
        score -= 20
    if len(ctx.text) < 20:
        score += 5
    if ctx.words <= 2:
        score += 3
    if any(w in NAME_HEADER_BOOST_WORDS for w in header_words(ctx.header)):
        score += 20
    return score


def _extract_location(ctx: CellContext) -> Optional[str]:
    return ctx.text if ctx.is_city else None


def _extract_notice(ctx: CellContext) -> Optional[int]:
    return ctx.notice


def _extract_experience(ctx: CellContext) -> Optional[float]:
    return ctx.experience


def _extract_salary(ctx: CellContext) -> Optional[float]:
    return ctx.salary


def _score_expected_salary(ctx: CellContext) -> float:
    return 12 if "expected" in ctx.header.lower() else 10


def _extract_status(ctx: CellContext) -> Optional[str]:
    return ctx.text if ctx.is_status else None


def _extract_source(ctx: CellContext) -> Optional[str]:
    if "@" in ctx.text:
        return None
    return ctx.text if contains_any_keyword(ctx.lower, SOURCE_KEYWORDS) else None


def _extract_company(ctx: CellContext) -> Optional[str]:
    if "@" in ctx.text or NON_PERSON_TOKEN_RE.search(ctx.lower):
        return None
    if ctx.is_status or ctx.is_position or ctx.salary is not None or ctx.notice is not None:
        return None
    if ctx.is_org:
        return ctx.text
    if ctx.is_city:
        return None
    if ctx.words >= 2 and 8 < len(ctx.text) <= 50 and ORG_CHARSET_RE.match(ctx.lower):
        return ctx.text
    return None


def _score_company(ctx: CellContext) -> float:
    score = 10
    if DIGIT_RE.search(ctx.text):
        score -= 3
    if contains_any_keyword(ctx.lower, ORG_KEYWORDS):
        score += 5
    return score


def _extract_client(ctx: CellContext) -> Optional[str]:
    if _extract_company(ctx) is None:
        return None
    return ctx.text if contains_any_keyword(ctx.lower, BANK_FINANCE_KEYWORDS) else None


def _score_client(ctx: CellContext) -> float:
    return _score_company(ctx) + 5


def _extract_spoc(ctx: CellContext) -> Optional[str]:
    if NON_SPOC_TOKEN_RE.search(ctx.lower):
        return None
    return ctx.text if _looks_like_person(ctx) else None


def _fixed(points: float) -> Callable[[CellContext], float]:
    return lambda ctx: points


SCAN_RULES: Tuple[ScanRule, ...] = (
    ScanRule("email", _extract_email, _fixed(10), identity=True),
    ScanRule("phone", _extract_phone, _fixed(10), identity=True),
    ScanRule("position", _extract_position, _fixed(20)),
    ScanRule("name", _extract_name, _score_name),
    ScanRule("location", _extract_location, _fixed(10)),
    ScanRule("notice_period", _extract_notice, _fixed(25)),
    ScanRule("experience", _extract_experience, _fixed(20)),
    ScanRule("ctc", _extract_salary, _fixed(10)),
    ScanRule("expected_salary", _extract_salary, _score_expected_salary),
    ScanRule("status", _extract_status, _fixed(10)),
    ScanRule("source_of_cv", _extract_source, _fixed(10)),
    ScanRule("company", _extract_company, _score_company),
    ScanRule("client", _extract_client, _score_client),
    ScanRule("spoc", _extract_spoc, _fixed(10)),
)


# ============================================================================
# Row scan
# ============================================================================

def _is_unrelated_column(ctx: CellContext) -> bool:
    # Checked before the header field: "HR Remarks" is remarks, not spoc
    return any(w in UNRELATED_HEADER_WORDS for w in header_words(ctx.header))


def _header_vetoes(ctx: CellContext) -> bool:
    """
    A strongly labelled column whose content contradicts its label is ignored.

    - name column holding a status, job title or notice phrase
    - phone column without a single digit
    - email column without an "@"
    """
    if ctx.header_field == "name":
        return ctx.is_status or ctx.is_position or _is_notice_phrase(ctx)
    if ctx.header_field == "phone":
        return not DIGIT_RE.search(ctx.text)
    if ctx.header_field == "email":
        return "@" not in ctx.text
    return False


def _header_adjustment(ctx: CellContext, field: str) -> float:
    if ctx.header_field is None:
        return 0
    if ctx.header_field == field:
        return HEADER_MATCH_BOOST
    return -HEADER_MISMATCH_PENALTY


def scan_cell(ctx: CellContext) -> Sequence[Tuple[str, FieldCandidate]]:
    found = []
    restricted = _is_unrelated_column(ctx)
    for rule in SCAN_RULES:
        if restricted and not rule.identity:
            continue
        value = rule.extract(ctx)
        if value is None:
            continue
        score = rule.score(ctx) + _header_adjustment(ctx, rule.field)
        found.append((rule.field, FieldCandidate(
            value=value,
            score=score,
            origin_header=ctx.header,
            column=ctx.column,
        )))
    return found


def scan_row(row: Sequence[Tuple[str, Any]]) -> FieldCandidateSet:
    """
    Collect every plausible (field, value, score) from a row.

    Empty and placeholder cells contribute nothing. The result has one entry
    per field name, each a list of candidates in column order.
    """
    candidates: FieldCandidateSet = {field: [] for field in FIELD_NAMES}
    for column, (header, cell) in enumerate(row):
        text = cell_text(cell)
        if not text or is_placeholder(text):
            continue
        ctx = build_context(text, cell_text(header), column)
        if _header_vetoes(ctx):
            logger.debug(f"Header '{ctx.header}' vetoed cell '{text}'")
            continue
        for field, candidate in scan_cell(ctx):
            candidates[field].append(candidate)
    return candidates
