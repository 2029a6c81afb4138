"""
Column header classification and direct column lookup.

Headers are untrusted: they are never required, and a header can only nudge
content detection (tie-breaks, a small score boost) unless the caller supplies
an explicit column mapping. With an explicit mapping covering enough fields the
row is read column by column instead of being scanned.
"""

import logging
import re
from functools import lru_cache
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from candidate_intake.core.errors import MappingError
from candidate_intake.core.format_normalizers import (
    parse_experience,
    parse_notice_period,
    parse_phone,
    parse_salary,
)
from candidate_intake.core.keywords import (
    FIELD_NAMES,
    HEADER_FUZZY_KEYWORDS,
    HEADER_PATTERNS,
)
from candidate_intake.core.schemas import DetectedRecord
from candidate_intake.core.text_normalization import (
    cell_text,
    collapse_whitespace,
    contains_any_keyword,
    digits_only,
    is_email,
    is_placeholder,
)

logger = logging.getLogger(__name__)

# A row repeating at least this many of its own header labels is a header row
REPEATED_HEADER_MIN_MATCHES = 3

MAPPED_EXPERIENCE_MAX = 50
MAPPED_SALARY_MAX = 100
MAPPED_NOTICE_MAX = 365

_COMPILED_PATTERNS: Tuple[Tuple[str, Tuple["re.Pattern[str]", ...]], ...] = tuple(
    (field, tuple(re.compile(p) for p in patterns)) for field, patterns in HEADER_PATTERNS
)


def _normalize_label(header: str) -> str:
    return collapse_whitespace(cell_text(header).lower().replace("_", " "))


def _match_pattern(label: str) -> Optional[str]:
    for field, patterns in _COMPILED_PATTERNS:
        if any(p.search(label) for p in patterns):
            return field
    return None


def _match_fuzzy(label: str) -> Optional[str]:
    for field, keywords in HEADER_FUZZY_KEYWORDS:
        if contains_any_keyword(label, keywords):
            return field
    return None


@lru_cache(maxsize=1024)
def classify_header(header: str) -> Optional[str]:
    """
    Best-guess field for a column label, or None when it names nothing we know.

    Anchored patterns are tried first; a containment fallback catches labels
    like "Name of Company" or "Candidate Email".

    Examples:
    - "Candidate Name" → "name"
    - "Contact Person" → "spoc"
    - "Mobile No." → "phone"
    - "Sr. No" → None
    """
    label = _normalize_label(header)
    if not label:
        return None
    return _match_pattern(label) or _match_fuzzy(label)


def detect_header_mapping(headers: Sequence[str]) -> Dict[str, int]:
    """
    Suggest a field → column mapping from header labels.

    Each field maps to at most one column and each column to at most one
    field. Anchored patterns claim columns first (left to right), then the
    containment fallback fills fields still missing from unclaimed columns.
    """
    labels = [_normalize_label(h) for h in headers]
    mapping: Dict[str, int] = {}
    used_columns = set()

    for matcher in (_match_pattern, _match_fuzzy):
        for idx, label in enumerate(labels):
            if idx in used_columns or not label:
                continue
            field = matcher(label)
            if field and field not in mapping:
                mapping[field] = idx
                used_columns.add(idx)

    logger.debug(f"Header mapping suggestion: {mapping}")
    return mapping


def field_columns_from_mapping(column_mapping: Mapping[Any, Optional[str]]) -> Dict[str, int]:
    """
    Invert a caller-supplied column → field mapping into field → column.

    Columns mapped to an empty value are ignored. When two columns claim the
    same field the left-most one wins.

    Raises MappingError for an unknown field name or a column that is not a
    non-negative integer.
    """
    field_columns: Dict[str, int] = {}
    for column, field in column_mapping.items():
        if not field:
            continue
        if field not in FIELD_NAMES:
            raise MappingError(f"Unknown field '{field}' in column mapping", column=column, field=field)
        try:
            idx = int(column)
        except (TypeError, ValueError):
            raise MappingError(f"Column '{column}' is not a column position", column=column, field=field)
        if idx < 0:
            raise MappingError(f"Column position {idx} is negative", column=column, field=field)
        if field not in field_columns or idx < field_columns[field]:
            field_columns[field] = idx
    return field_columns


def is_repeated_header_row(row: Sequence[Tuple[str, str]]) -> bool:
    """
    True when a data row is a copy of the header row (sheets pasted together).

    Examples:
    - [("Name", "Name"), ("Phone", "Phone"), ("Email", "Email")] → True
    - [("Name", "Rahul"), ("Phone", "9876543210"), ("Email", "Email")] → False
    """
    labels = {cell_text(h).lower() for h, _ in row if cell_text(h)}
    matches = sum(1 for _, cell in row if cell_text(cell) and cell_text(cell).lower() in labels)
    return matches >= REPEATED_HEADER_MIN_MATCHES


def _plain_number(text: str) -> Optional[float]:
    try:
        return float(text.replace(",", ""))
    except ValueError:
        return None


def _read_mapped(field: str, text: str) -> Any:
    """Interpret one mapped cell for its field; None when it does not fit."""
    if field == "email":
        return text.lower() if "@" in text else None

    if field == "phone":
        # Unparseable digits are kept so the quality check can explain the problem
        return parse_phone(text) or digits_only(text) or None

    if field == "experience":
        years = parse_experience(text)
        if years is None:
            number = _plain_number(text)
            if number is not None and 0 <= number <= MAPPED_EXPERIENCE_MAX:
                years = number
        return years

    if field in ("ctc", "expected_salary"):
        lakhs = parse_salary(text)
        if lakhs is None:
            number = _plain_number(text)
            if number is not None and 0 <= number <= MAPPED_SALARY_MAX:
                lakhs = number
        return lakhs

    if field == "notice_period":
        days = parse_notice_period(text)
        if days is None:
            number = _plain_number(text)
            if number is not None and number.is_integer() and 0 <= number <= MAPPED_NOTICE_MAX:
                days = int(number)
        return days

    return text


def lookup_row(row: Sequence[Tuple[str, Any]], field_columns: Mapping[str, int]) -> DetectedRecord:
    """
    Read a row through an explicit field → column mapping.

    Mapped cells are trusted for their field (after format parsing). Unmapped
    columns are still checked for an email address and a phone number so a
    partial mapping does not lose the identifiers.
    """
    values: Dict[str, Any] = {}
    for field, idx in field_columns.items():
        if idx >= len(row):
            continue
        text = cell_text(row[idx][1])
        if not text or is_placeholder(text):
            continue
        value = _read_mapped(field, text)
        if value is not None:
            values[field] = value

    mapped_columns = set(field_columns.values())
    for idx, (_, cell) in enumerate(row):
        if idx in mapped_columns:
            continue
        text = cell_text(cell)
        if not text or is_placeholder(text):
            continue
        if "email" not in values and is_email(text):
            values["email"] = text
            continue
        if "phone" not in values:
            phone = parse_phone(text)
            if phone:
                values["phone"] = phone

    return DetectedRecord(**values)


def headers_of(row: Sequence[Tuple[str, Any]]) -> List[str]:
    return [cell_text(h) for h, _ in row]
