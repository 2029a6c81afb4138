"""
Pick one value per field from scanned candidates.

Candidates are ordered by score (stable, so equal scores keep column order).
Ties at the top score are broken by a per-field policy, and the losing values
are kept on the record as `duplicates`. A final cross-field pass makes sure
one cell value is never claimed by two fields.
"""

import logging
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from candidate_intake.core.keywords import FIELD_NAMES, HEADER_HINTS, UNIQUENESS_PRIORITY
from candidate_intake.core.schemas import DetectedRecord, FieldCandidate, FieldCandidateSet

logger = logging.getLogger(__name__)


class TieBreak(str, Enum):
    PREFER_HEADER_HINT = "preferHeaderHint"
    PREFER_SHORTEST = "preferShortest"
    PREFER_LONGEST = "preferLongest"
    FIRST_SEEN = "firstSeen"


_PERSON_POLICY = (TieBreak.PREFER_HEADER_HINT, TieBreak.PREFER_SHORTEST)
_ORG_POLICY = (TieBreak.PREFER_HEADER_HINT, TieBreak.PREFER_LONGEST)
_DEFAULT_POLICY = (TieBreak.PREFER_HEADER_HINT, TieBreak.FIRST_SEEN)

TIE_BREAK_POLICIES: Mapping[str, Tuple[TieBreak, ...]] = MappingProxyType({
    "name": _PERSON_POLICY,
    "position": _PERSON_POLICY,
    "spoc": _PERSON_POLICY,
    "company": _ORG_POLICY,
    "client": _ORG_POLICY,
})


def _has_header_hint(candidate: FieldCandidate, field: str) -> bool:
    header = candidate.origin_header.lower()
    return bool(header) and any(hint in header for hint in HEADER_HINTS.get(field, ()))


def break_tie(field: str, tied: Sequence[FieldCandidate]) -> FieldCandidate:
    """
    Choose among candidates sharing the top score.

    Each policy step narrows the tied group; the first candidate left standing
    (column order) wins.
    """
    group = list(tied)
    for step in TIE_BREAK_POLICIES.get(field, _DEFAULT_POLICY):
        if len(group) == 1:
            break
        if step is TieBreak.PREFER_HEADER_HINT:
            hinted = [c for c in group if _has_header_hint(c, field)]
            if hinted:
                group = hinted
        elif step is TieBreak.PREFER_SHORTEST:
            shortest = min(len(str(c.value)) for c in group)
            group = [c for c in group if len(str(c.value)) == shortest]
        elif step is TieBreak.PREFER_LONGEST:
            longest = max(len(str(c.value)) for c in group)
            group = [c for c in group if len(str(c.value)) == longest]
        elif step is TieBreak.FIRST_SEEN:
            group = group[:1]
    return group[0]


def resolve_field(field: str, candidates: Sequence[FieldCandidate]) -> Tuple[Optional[Any], List[Any]]:
    """
    Return (winning value, non-winning values) for one field.

    Examples:
    - no candidates → (None, [])
    - scores 20 and 10 → the 20 wins, the 10 is a duplicate
    """
    if not candidates:
        return None, []
    ordered = sorted(candidates, key=lambda c: -c.score)
    top_score = ordered[0].score
    winner = break_tie(field, [c for c in ordered if c.score == top_score])
    losers = [c.value for c in ordered if c is not winner]
    return winner.value, losers


def enforce_uniqueness(values: Dict[str, Any]) -> Dict[str, Any]:
    """
    Drop values already claimed by a higher-priority field (case-insensitive).

    Examples:
    - name "Priya Verma" and spoc "priya verma" → spoc becomes None
    """
    resolved = dict(values)
    claimed = set()
    for field in UNIQUENESS_PRIORITY:
        value = resolved.get(field)
        if value is None:
            continue
        key = str(value).strip().lower()
        if key in claimed:
            logger.debug(f"Dropping {field}='{value}': already claimed by a higher-priority field")
            resolved[field] = None
        else:
            claimed.add(key)
    return resolved


def resolve_candidates(candidates: FieldCandidateSet) -> DetectedRecord:
    values: Dict[str, Any] = {}
    duplicates: Dict[str, List[Any]] = {}
    for field in FIELD_NAMES:
        value, losers = resolve_field(field, candidates.get(field, []))
        values[field] = value
        if losers:
            duplicates[field] = losers
    return DetectedRecord(**enforce_uniqueness(values), duplicates=duplicates)
