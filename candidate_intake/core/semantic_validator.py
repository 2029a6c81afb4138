"""
Last-resort semantic gate.

Runs after correction and repair. Each guarded field gets a shape test of its
own; a value that fails is dropped outright. A missing field only costs
confidence, a confidently wrong one gets imported.
"""

import logging
import re
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar

from candidate_intake.core.keywords import (
    CITY_NAMES,
    COMPANY_PROOF_KEYWORDS,
    COMPANY_STATUS_PHRASES,
    NAME_AS_POSITION_KEYWORDS,
    NAME_REJECT_KEYWORDS,
    ORG_KEYWORDS,
    ORG_SUFFIXES,
    POSITION_REJECT_KEYWORDS,
    STATUS_KEYWORDS,
    STATUS_REJECT_CITIES,
)
from candidate_intake.core.schemas import CandidateFields
from candidate_intake.core.text_normalization import (
    contains_any_keyword,
    contains_any_word,
    word_count,
)

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=CandidateFields)

EXPERIENCE_EXPRESSION_RE = re.compile(r"\d+(\.\d+)?\s*\+?\s*(yrs?|years?|months?)\b")
GENERIC_WORDS_RE = re.compile(r"^[a-z\s'\-]+$")

_NAME_REJECT = NAME_REJECT_KEYWORDS | STATUS_KEYWORDS | NAME_AS_POSITION_KEYWORDS | ORG_SUFFIXES
_COMPANY_PROOF = COMPANY_PROOF_KEYWORDS | ORG_KEYWORDS
_STATUS_REJECT = STATUS_REJECT_CITIES | CITY_NAMES


def name_rejection(name: str) -> Optional[str]:
    lower = name.lower()
    if contains_any_word(lower, _NAME_REJECT):
        return "holds status, job-title or organization words"
    return None


def company_rejection(company: str) -> Optional[str]:
    """
    Why a company value is not an organization, or None when it may be one.

    Examples:
    - "Not Interested" → status phrase
    - "5 yrs" → experience expression
    - "Rahul Verma" → generic words without organization vocabulary
    - "Skillnix Technologies", "Infosys" → None
    """
    lower = company.lower().strip()
    if contains_any_word(lower, COMPANY_STATUS_PHRASES):
        return "holds a status phrase"
    if EXPERIENCE_EXPRESSION_RE.search(lower):
        return "holds an experience expression"
    if contains_any_keyword(lower, _COMPANY_PROOF):
        return None
    words = word_count(lower)
    if GENERIC_WORDS_RE.match(lower):
        if words <= 2 and len(lower) < 20:
            return "is one or two generic words"
        if words == 3 and len(lower) < 25:
            return "is three generic words"
    return None


def status_rejection(status: str) -> Optional[str]:
    if contains_any_word(status.lower(), _STATUS_REJECT):
        return "holds a city name"
    return None


def position_rejection(position: str) -> Optional[str]:
    if contains_any_word(position.lower(), POSITION_REJECT_KEYWORDS):
        return "holds status vocabulary"
    return None


SEMANTIC_CHECKS: Tuple[Tuple[str, Callable[[str], Optional[str]]], ...] = (
    ("name", name_rejection),
    ("company", company_rejection),
    ("status", status_rejection),
    ("position", position_rejection),
)


def enforce_semantics(record: RecordT) -> Tuple[RecordT, List[str]]:
    """Null every guarded field whose value fails its shape test."""
    updates: Dict[str, Any] = {}
    notes: List[str] = []
    for field, check in SEMANTIC_CHECKS:
        value = getattr(record, field)
        if not isinstance(value, str) or not value.strip():
            continue
        reason = check(value)
        if reason:
            updates[field] = None
            message = f'{field} dropped: "{value}" {reason}'
            logger.debug(message)
            notes.append(message)
    if not updates:
        return record, notes
    return record.model_copy(update=updates), notes
