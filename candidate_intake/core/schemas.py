from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, FrozenSet, List, Literal, Optional, Tuple

from candidate_intake.core.format_normalizers import parse_phone
from candidate_intake.core.text_normalization import digits_only


Category = Literal["ready", "review", "blocked"]
Severity = Literal["ERROR", "WARNING", "INFO"]
DetectionMode = Literal["content", "mapped"]

# (header label or "", cell text) in column order; headers are untrusted
RawRow = List[Tuple[str, Any]]


class FieldCandidate(BaseModel):
    """One scanned match of one cell for one field class."""
    value: Any
    score: float
    origin_header: str = Field(default="", description="Column label the cell came from (may be empty)")
    column: int = Field(default=0, description="Zero-based column position in the row")


# field name -> candidates in column order
FieldCandidateSet = Dict[str, List[FieldCandidate]]


class CandidateFields(BaseModel):
    """The canonical candidate fields, each a scalar or None."""
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    location: Optional[str] = None
    position: Optional[str] = None
    experience: Optional[float] = None  # years
    ctc: Optional[float] = None  # lakhs per annum
    expected_salary: Optional[float] = None  # lakhs per annum
    notice_period: Optional[int] = None  # days
    company: Optional[str] = None
    client: Optional[str] = None
    spoc: Optional[str] = None
    status: Optional[str] = None
    source_of_cv: Optional[str] = None

    def field_values(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in CandidateFields.model_fields}


class DetectedRecord(CandidateFields):
    duplicates: Dict[str, List[Any]] = Field(
        default_factory=dict,
        description="Non-winning candidate values per field",
    )


class FixedRecord(CandidateFields):
    changes: List[str] = Field(default_factory=list, description='"field: old → new" for every altered field')


class ValidationIssue(BaseModel):
    field: str
    message: str
    severity: Severity


class ValidationResult(BaseModel):
    errors: List[ValidationIssue] = Field(default_factory=list)
    warnings: List[ValidationIssue] = Field(default_factory=list)
    confidence: int = Field(..., ge=0, le=100)
    category: Category


class RowResult(BaseModel):
    row_index: int = Field(..., description="1-based position among the batch's data rows")
    original: Dict[str, str] = Field(default_factory=dict, description="Header → raw cell, for display")
    record: FixedRecord
    validation: ValidationResult
    detection_mode: DetectionMode = "content"
    corrections: List[str] = Field(default_factory=list, description="Values moved or dropped between fields")
    alternates: Dict[str, List[Any]] = Field(default_factory=dict, description="Non-winning detected values per field")
    is_storage_duplicate: bool = False


class BatchReport(BaseModel):
    total_rows: int = 0
    ready: int = 0
    review: int = 0
    blocked: int = 0
    storage_duplicates: int = 0
    in_file_duplicates: int = 0
    skipped_rows: int = 0


class BatchResult(BaseModel):
    report: BatchReport
    ready: List[RowResult] = Field(default_factory=list)
    review: List[RowResult] = Field(default_factory=list)
    blocked: List[RowResult] = Field(default_factory=list)


class StorageSnapshot(BaseModel):
    """Normalized identifiers already stored for the current owner, loaded once per batch."""
    model_config = ConfigDict(frozen=True)

    emails: FrozenSet[str] = frozenset()
    phones: FrozenSet[str] = frozenset()

    @classmethod
    def from_identifiers(cls, emails: Optional[List[str]] = None, phones: Optional[List[str]] = None) -> "StorageSnapshot":
        """Normalize raw stored values: emails lowercased and trimmed, phones to 10 digits where possible."""
        return cls(
            emails=frozenset(e.strip().lower() for e in (emails or []) if e and e.strip()),
            phones=frozenset(d for d in (parse_phone(p) or digits_only(p) for p in (phones or [])) if d),
        )


# ===== HTTP payloads =====

class BulkValidateRequest(BaseModel):
    """Rows already read from a spreadsheet, plus what the caller knows about storage."""
    rows: List[Any] = Field(..., description="Each row a list of [header, cell] pairs in column order")
    column_mapping: Optional[Dict[str, Optional[str]]] = Field(
        default=None,
        description="Column position → field name, as confirmed in a column-mapper UI",
    )
    existing_emails: List[str] = Field(default_factory=list)
    existing_phones: List[str] = Field(default_factory=list)


class RevalidateRequest(BaseModel):
    record: Dict[str, Any] = Field(..., description="Edited field values; storage names are accepted")


class HeaderMappingRequest(BaseModel):
    headers: List[str]


class HeaderMappingResponse(BaseModel):
    mapping: Dict[str, int] = Field(default_factory=dict, description="Field → column position")
    columns: List[Optional[str]] = Field(default_factory=list, description="Suggested field per column, None when unknown")
    unmapped_fields: List[str] = Field(default_factory=list)
