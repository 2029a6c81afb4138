"""
Quality scoring for detected candidate records.

Confidence starts at 100 and loses points for every missing field (warnings)
and for every hard error. Hard errors also force the row into the blocked
bucket regardless of the remaining confidence.

Penalties:
  ERROR    name / phone / malformed email        -50 each, always blocked
  WARNING  email, location, position,            -10 each
           experience, ctc, notice period, status
  WARNING  company, source of CV                  -5 each

Categories (when there is no hard error):
  >= 80  ready   (auto-importable)
  >= 50  review  (needs a human look)
  <  50  blocked
"""

import re
from typing import List, Optional, Tuple

from candidate_intake.core.format_normalizers import PHONE_RE
from candidate_intake.core.schemas import CandidateFields, Category, ValidationIssue, ValidationResult
from candidate_intake.core.text_normalization import EMAIL_RE, has_only_name_chars, is_placeholder

HARD_ERROR_PENALTY = 50
READY_THRESHOLD = 80
REVIEW_THRESHOLD = 50

# (field, message, penalty) in report order
WARNING_RULES: Tuple[Tuple[str, str, int], ...] = (
    ("email", "Email is missing", 10),
    ("location", "Location/City is missing", 10),
    ("position", "Position/Job Title is missing", 10),
    ("experience", "Experience is missing", 10),
    ("ctc", "Current CTC is missing", 10),
    ("notice_period", "Notice Period is missing", 10),
    ("company", "Current Company is missing (freelancer?)", 5),
    ("status", "Candidate Status is missing", 10),
    ("source_of_cv", "Source of CV is missing", 5),
)

LETTER_RE = re.compile(r"[^\W\d_]")


class ConfidenceCalculator:
    """Central place for all validation and confidence logic."""

    @staticmethod
    def name(name_value: Optional[str]) -> Optional[str]:
        """
        Hard-error message for the name, or None when it is acceptable.

        A name must be present, must not be placeholder text and may only hold
        letters plus space, hyphen, apostrophe and period.
        """
        text = (name_value or "").strip()
        if not text:
            return "Name is required"
        if is_placeholder(text):
            return f'"{text}" is placeholder text'
        if not has_only_name_chars(text) or not LETTER_RE.search(text):
            return "Name must be alphabetic only"
        return None

    @staticmethod
    def phone(phone_value: Optional[str]) -> Optional[str]:
        text = (phone_value or "").strip()
        if not text:
            return "Phone number is required"
        if not PHONE_RE.match(text):
            return "Phone must be 10 digits starting with 6-9"
        return None

    @staticmethod
    def email(email_value: Optional[str]) -> Optional[str]:
        """Only a present-but-malformed email is an error; a missing one is a warning."""
        text = (email_value or "").strip()
        if text and not EMAIL_RE.match(text.lower()):
            return "Email format is invalid"
        return None

    @staticmethod
    def categorize(has_errors: bool, confidence: int) -> Category:
        if has_errors:
            return "blocked"
        if confidence >= READY_THRESHOLD:
            return "ready"
        if confidence >= REVIEW_THRESHOLD:
            return "review"
        return "blocked"

    @staticmethod
    def evaluate(record: CandidateFields) -> ValidationResult:
        errors: List[ValidationIssue] = []
        for field, check in (
            ("name", ConfidenceCalculator.name),
            ("phone", ConfidenceCalculator.phone),
            ("email", ConfidenceCalculator.email),
        ):
            message = check(getattr(record, field))
            if message:
                errors.append(ValidationIssue(field=field, message=message, severity="ERROR"))

        warnings: List[ValidationIssue] = []
        confidence = 100 - HARD_ERROR_PENALTY * len(errors)
        for field, message, penalty in WARNING_RULES:
            value = getattr(record, field)
            if value is None or (isinstance(value, str) and not value.strip()):
                warnings.append(ValidationIssue(field=field, message=message, severity="WARNING"))
                confidence -= penalty

        confidence = max(0, min(100, confidence))
        return ValidationResult(
            errors=errors,
            warnings=warnings,
            confidence=confidence,
            category=ConfidenceCalculator.categorize(bool(errors), confidence),
        )
