"""
Deterministic normalization of a detected record.

Each field has one fixer. A fixer must be idempotent: applied to its own output
it returns the value unchanged, so running the whole fixer twice produces an
empty changelog on the second pass.
"""

from typing import Any, Callable, Dict, List, Optional

from candidate_intake.core.format_normalizers import (
    parse_experience,
    parse_notice_period,
    parse_salary,
)
from candidate_intake.core.schemas import CandidateFields, FixedRecord
from candidate_intake.core.text_normalization import (
    collapse_whitespace,
    digits_only,
    fix_email_domain,
    title_case,
)


def _fix_name(value: Any) -> Any:
    return title_case(collapse_whitespace(str(value)))


def _fix_email(value: Any) -> Any:
    return str(value).strip().lower() or None


def _fix_phone(value: Any) -> Any:
    return digits_only(value).lstrip("0") or None


def _trim(value: Any) -> Any:
    return str(value).strip() or None


def _lower_trim(value: Any) -> Any:
    return str(value).strip().lower() or None


def _title_trim(value: Any) -> Any:
    return title_case(str(value).strip()) or None


def _numeric(parser: Callable[[Any], Optional[float]]) -> Callable[[Any], Any]:
    def fix(value: Any) -> Any:
        if isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            return float(value)
        text = str(value).strip()
        try:
            return float(text)
        except ValueError:
            return parser(text)
    return fix


def _fix_notice(value: Any) -> Any:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    text = str(value).strip()
    try:
        return int(float(text))
    except ValueError:
        return parse_notice_period(text)


FIELD_FIXERS: Dict[str, Callable[[Any], Any]] = {
    "name": _fix_name,
    "phone": _fix_phone,
    "email": _fix_email,
    "location": _trim,
    "position": _trim,
    "experience": _numeric(parse_experience),
    "ctc": _numeric(parse_salary),
    "expected_salary": _numeric(parse_salary),
    "notice_period": _fix_notice,
    "company": _trim,
    "client": _trim,
    "spoc": _title_trim,
    "status": _lower_trim,
    "source_of_cv": _lower_trim,
}


def _describe(value: Any) -> str:
    return f'"{value}"' if isinstance(value, str) else str(value)


def auto_fix(record: CandidateFields, fix_email_typos: bool = True) -> FixedRecord:
    """
    Normalize every field and record what changed.

    Returns a new FixedRecord; `record` is left untouched. The changelog holds
    one "field: old → new" entry per altered field.

    Examples:
    - name "RAHUL sharma" → "Rahul Sharma"
    - email " Rahul@GNAIL.com " → "rahul@gmail.com" (with typo fixing on)
    - phone "09876543210" → "9876543210"
    """
    fixed: Dict[str, Any] = {}
    changes: List[str] = []
    for field, original in record.field_values().items():
        if original is None:
            fixed[field] = None
            continue
        value = FIELD_FIXERS[field](original)
        if field == "email" and fix_email_typos and value:
            value = fix_email_domain(value)
        if value != original or type(value) is not type(original):
            changes.append(f"{field}: {_describe(original)} → {_describe(value)}")
        fixed[field] = value
    return FixedRecord(**fixed, changes=changes)
