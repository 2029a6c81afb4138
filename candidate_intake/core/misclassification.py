"""
Fix values that detection put in the wrong field.

Two passes, each a fixed one-shot sequence of rules (never iterated until
nothing changes):

- correct_misclassifications(): the four field-swap rules
- repair_placements(): moves identifiers, cities and notice periods that
  landed in a text field into the field they belong to

Both return a new record plus human-readable notes; the input is never mutated.
"""

import logging
import re
from typing import Any, Dict, List, Tuple, TypeVar

from candidate_intake.core.format_normalizers import parse_experience, parse_phone
from candidate_intake.core.keywords import (
    BANK_FINANCE_KEYWORDS,
    CITY_NAMES,
    NAME_AS_POSITION_KEYWORDS,
    ORG_KEYWORDS,
    STANDARD_NOTICE_DAYS,
    TEXT_FIELDS,
)
from candidate_intake.core.schemas import CandidateFields
from candidate_intake.core.text_normalization import (
    contains_any_keyword,
    contains_any_word,
    is_email,
)

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=CandidateFields)

# Salary-looking text is never taken for a phone number
SALARY_HINT_RE = re.compile(r"\b(lpa|lakhs?|lacs?|ctc|k)\b")


def _note(notes: List[str], message: str) -> None:
    logger.debug(message)
    notes.append(message)


def correct_misclassifications(record: RecordT) -> Tuple[RecordT, List[str]]:
    """
    Apply the four correction rules once, in order, each seeing the previous one's output.

    1. name with job-title words and no position → becomes the position
    2. position with organization words and no company → becomes the company
    3. company under 4 characters without organization words and no SPOC → becomes the SPOC
    4. client with bank/finance words while company has none → swap client and company
    """
    values: Dict[str, Any] = record.field_values()
    notes: List[str] = []

    name = values["name"]
    if name and values["position"] is None and contains_any_word(name.lower(), NAME_AS_POSITION_KEYWORDS):
        values["position"], values["name"] = name, None
        _note(notes, f'name → position: "{name}" is a job title')

    position = values["position"]
    if position and values["company"] is None and contains_any_keyword(position.lower(), ORG_KEYWORDS):
        values["company"], values["position"] = position, None
        _note(notes, f'position → company: "{position}" is an organization')

    company = values["company"]
    if (
        company
        and len(company) < 4
        and values["spoc"] is None
        and not contains_any_keyword(company.lower(), ORG_KEYWORDS)
    ):
        values["spoc"], values["company"] = company, None
        _note(notes, f'company → spoc: "{company}" is too short for an organization')

    client, company = values["client"], values["company"]
    if (
        client
        and company
        and contains_any_keyword(client.lower(), BANK_FINANCE_KEYWORDS)
        and not contains_any_keyword(company.lower(), BANK_FINANCE_KEYWORDS)
    ):
        values["client"], values["company"] = company, client
        _note(notes, f'client ↔ company: "{client}" is the financial institution')

    return record.model_copy(update=values), notes


def _is_city(text: str) -> bool:
    return text.strip().lower() in CITY_NAMES


def repair_placements(record: RecordT) -> Tuple[RecordT, List[str]]:
    """
    Move misplaced values out of text fields.

    - an email address in another field fills an empty email
    - a valid mobile number (not salary-like) fills an empty phone
    - a name that is an experience expression fills an empty experience, and the name is dropped
    - a name that is a city fills an empty location, and the name is dropped
    - a standard notice length (0, 7, 15, 30 ... 180) fills an empty notice period
    - any other text field holding exactly a city fills an empty location

    A value that moves leaves its old field empty. Values whose target is
    already filled stay where they are, except for the name rules.
    """
    values: Dict[str, Any] = record.field_values()
    notes: List[str] = []

    for field in TEXT_FIELDS:
        value = values[field]
        if not isinstance(value, str) or not value.strip():
            continue
        text = value.strip()

        if field != "email" and values["email"] is None and is_email(text):
            values["email"], values[field] = text, None
            _note(notes, f'{field} → email: "{text}"')
            continue

        if (
            field != "phone"
            and values["phone"] is None
            and "@" not in text
            and not SALARY_HINT_RE.search(text.lower())
        ):
            phone = parse_phone(text)
            if phone:
                values["phone"], values[field] = phone, None
                _note(notes, f'{field} → phone: "{text}"')
                continue

        if field == "name":
            years = parse_experience(text)
            if years is not None:
                if values["experience"] is None:
                    values["experience"] = years
                values["name"] = None
                _note(notes, f'name → experience: "{text}"')
                continue
            if _is_city(text):
                if values["location"] is None:
                    values["location"] = text
                values["name"] = None
                _note(notes, f'name → location: "{text}"')
                continue

        if field in ("phone", "email"):
            continue

        if values["notice_period"] is None and text in STANDARD_NOTICE_DAYS:
            values["notice_period"], values[field] = int(text), None
            _note(notes, f'{field} → notice_period: "{text}"')
            continue

        if field != "location" and values["location"] is None and _is_city(text):
            values["location"], values[field] = text, None
            _note(notes, f'{field} → location: "{text}"')

    return record.model_copy(update=values), notes
