"""
First-occurrence-wins duplicate detection for one batch.

A DuplicateGuard belongs to exactly one batch pass. Its seen-sets are the only
mutable state in the pipeline, so concurrent batches must each use their own
guard, and rows must be offered in their original order.
"""

import logging
from typing import NamedTuple, Optional, Set

from candidate_intake.core.schemas import CandidateFields, StorageSnapshot, ValidationIssue
from candidate_intake.core.text_normalization import digits_only

logger = logging.getLogger(__name__)

STORAGE_DUPLICATE_MESSAGE = "already exists in your database (will update on import)"


class Admission(NamedTuple):
    accepted: bool
    notice: Optional[ValidationIssue] = None


def email_key(email: Optional[str]) -> str:
    return (email or "").strip().lower()


def phone_key(phone: Optional[str]) -> str:
    return digits_only(phone)


class DuplicateGuard:
    def __init__(self, snapshot: Optional[StorageSnapshot] = None):
        self.snapshot = snapshot or StorageSnapshot()
        self._seen_emails: Set[str] = set()
        self._seen_phones: Set[str] = set()
        self.in_file_duplicates = 0
        self.storage_duplicates = 0

    def admit(self, record: CandidateFields) -> Admission:
        """
        Decide whether a fixed record enters a bucket.

        - email or phone seen earlier in this batch → rejected, counted as an in-file duplicate
        - email or phone in the storage snapshot → accepted with an INFO notice
        - otherwise → accepted

        Identifiers of accepted rows are remembered; rows without email and
        phone are never duplicates.
        """
        email = email_key(record.email)
        phone = phone_key(record.phone)

        if (email and email in self._seen_emails) or (phone and phone in self._seen_phones):
            self.in_file_duplicates += 1
            logger.debug(f"In-file duplicate dropped (email='{email}', phone='{phone}')")
            return Admission(accepted=False)

        if email:
            self._seen_emails.add(email)
        if phone:
            self._seen_phones.add(phone)

        if (email and email in self.snapshot.emails) or (phone and phone in self.snapshot.phones):
            self.storage_duplicates += 1
            field = "email" if email and email in self.snapshot.emails else "phone"
            label = record.email if field == "email" else record.phone
            notice = ValidationIssue(
                field=field,
                message=f"{label} {STORAGE_DUPLICATE_MESSAGE}",
                severity="INFO",
            )
            return Admission(accepted=True, notice=notice)

        return Admission(accepted=True)
