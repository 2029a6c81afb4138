"""
Per-row pipeline, batch processing and single-record re-validation.

Row flow:
  content path: scan → resolve ─┐
  mapped path:  direct lookup ──┴→ correct → repair placements → semantic gate
                                   → auto-fix → score → duplicate guard → bucket

The engine does no I/O. Rows are processed strictly in order because the
duplicate guard keeps the first occurrence of an identifier.
"""

import logging
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, NamedTuple, Optional, Sequence, Tuple

from candidate_intake.core.auto_fixer import auto_fix
from candidate_intake.core.candidate_resolver import resolve_candidates
from candidate_intake.core.confidence_calculator import ConfidenceCalculator
from candidate_intake.core.config import Settings, settings as default_settings
from candidate_intake.core.duplicate_guard import DuplicateGuard
from candidate_intake.core.errors import BatchRowError
from candidate_intake.core.field_scanner import scan_row
from candidate_intake.core.header_mapping import (
    detect_header_mapping,
    field_columns_from_mapping,
    headers_of,
    is_repeated_header_row,
    lookup_row,
)
from candidate_intake.core.keywords import (
    FIELD_ALIASES,
    FIELD_NAMES,
    STATUS_DISPLAY_LABELS,
    STORAGE_FIELD_NAMES,
)
from candidate_intake.core.misclassification import correct_misclassifications, repair_placements
from candidate_intake.core.schemas import (
    BatchReport,
    BatchResult,
    DetectedRecord,
    DetectionMode,
    FixedRecord,
    RowResult,
    StorageSnapshot,
    ValidationResult,
)
from candidate_intake.core.semantic_validator import enforce_semantics
from candidate_intake.core.text_normalization import cell_text

logger = logging.getLogger(__name__)

Row = List[Tuple[str, str]]
ProgressCallback = Callable[[Dict[str, Any]], None]


class RowOutcome(NamedTuple):
    detected: DetectedRecord
    record: FixedRecord
    validation: ValidationResult
    corrections: List[str]
    mode: DetectionMode


def normalize_row(raw_row: Any, row_index: int) -> Row:
    """
    Turn one raw row into (header, cell text) pairs.

    Raises BatchRowError when the row is not a sequence of 2-item pairs.
    """
    if isinstance(raw_row, (str, bytes)) or not isinstance(raw_row, Sequence):
        raise BatchRowError(row_index, f"expected a list of (header, cell) pairs, got {type(raw_row).__name__}")
    row: Row = []
    for position, pair in enumerate(raw_row):
        if isinstance(pair, (str, bytes)) or not isinstance(pair, Sequence) or len(pair) != 2:
            raise BatchRowError(row_index, f"cell {position + 1} is not a (header, value) pair")
        header, cell = pair
        row.append((cell_text(header), cell_text(cell)))
    return row


def is_blank_row(row: Row) -> bool:
    return not any(cell for _, cell in row)


def original_cells(row: Row) -> Dict[str, str]:
    """Header → raw cell for display; unlabelled and repeated columns are numbered."""
    cells: Dict[str, str] = {}
    for idx, (header, cell) in enumerate(row):
        key = header or f"column_{idx + 1}"
        if key in cells:
            key = f"{header} (column {idx + 1})"
        cells[key] = cell
    return cells


def process_row(
    row: Row,
    field_columns: Optional[Mapping[str, int]] = None,
    fix_email_typos: bool = True,
) -> RowOutcome:
    """Run one normalized row through detection, correction, fixing and scoring."""
    if field_columns:
        detected = lookup_row(row, field_columns)
        mode: DetectionMode = "mapped"
    else:
        detected = resolve_candidates(scan_row(row))
        mode = "content"

    corrected, corrections = correct_misclassifications(detected)
    repaired, repairs = repair_placements(corrected)
    gated, dropped = enforce_semantics(repaired)

    fixed = auto_fix(gated, fix_email_typos=fix_email_typos)
    validation = ConfidenceCalculator.evaluate(fixed)
    return RowOutcome(
        detected=detected,
        record=fixed,
        validation=validation,
        corrections=corrections + repairs + dropped,
        mode=mode,
    )


class BatchProcessor:
    """
    Validate one uploaded batch of rows.

    A processor can be reused, but every call to events()/run() starts a fresh
    duplicate guard, so two batches never share seen identifiers.
    """

    def __init__(
        self,
        snapshot: Optional[StorageSnapshot] = None,
        column_mapping: Optional[Mapping[Any, Optional[str]]] = None,
        on_progress: Optional[ProgressCallback] = None,
        config: Optional[Settings] = None,
    ):
        self.config = config or default_settings
        self.snapshot = snapshot or StorageSnapshot()
        self.on_progress = on_progress
        # Raises MappingError before any row is touched
        self.field_columns = field_columns_from_mapping(column_mapping) if column_mapping else None
        if self.field_columns is not None and len(self.field_columns) < self.config.min_mapped_fields:
            logger.info(
                f"Column mapping covers {len(self.field_columns)} field(s), "
                f"below {self.config.min_mapped_fields}; using content detection"
            )
            self.field_columns = None

    def _auto_mapping(self, row: Row) -> Optional[Dict[str, int]]:
        mapping = detect_header_mapping(headers_of(row))
        if len(mapping) >= self.config.min_mapped_fields:
            logger.info(f"Using header-derived column mapping for {len(mapping)} field(s)")
            return mapping
        return None

    def _progress_event(self, report: BatchReport) -> Dict[str, Any]:
        return {
            "type": "progress",
            "phase": "validating",
            "processed": report.total_rows,
            "ready": report.ready,
            "review": report.review,
            "blocked": report.blocked,
        }

    def events(self, rows: Iterable[Any]) -> Iterator[Dict[str, Any]]:
        """
        Process rows in order, yielding a progress event every N data rows.

        The last event has type "complete" and carries the BatchResult.
        """
        guard = DuplicateGuard(self.snapshot)
        report = BatchReport()
        result = BatchResult(report=report)
        field_columns = self.field_columns
        mapping_checked = field_columns is not None or not self.config.auto_header_mapping
        every = self.config.progress_every

        for position, raw_row in enumerate(rows, start=1):
            try:
                row = normalize_row(raw_row, position)
            except BatchRowError as exc:
                report.total_rows += 1
                report.skipped_rows += 1
                logger.warning(f"Skipping row: {exc.message}")
                continue

            if is_blank_row(row) or is_repeated_header_row(row):
                logger.debug(f"Row {position} is empty or a repeated header row; not counted")
                continue

            if not mapping_checked:
                field_columns = self._auto_mapping(row)
                mapping_checked = True

            report.total_rows += 1
            row_index = report.total_rows
            try:
                outcome = process_row(row, field_columns, fix_email_typos=self.config.fix_email_typos)
            except (TypeError, ValueError, KeyError, AttributeError) as exc:
                error = BatchRowError(row_index, str(exc))
                report.skipped_rows += 1
                logger.warning(f"Skipping row: {error.message}")
                continue

            admission = guard.admit(outcome.record)
            if admission.accepted:
                validation = outcome.validation
                if admission.notice is not None:
                    validation = validation.model_copy(
                        update={"warnings": validation.warnings + [admission.notice]}
                    )
                row_result = RowResult(
                    row_index=row_index,
                    original=original_cells(row),
                    record=outcome.record,
                    validation=validation,
                    detection_mode=outcome.mode,
                    corrections=outcome.corrections,
                    alternates=outcome.detected.duplicates,
                    is_storage_duplicate=admission.notice is not None,
                )
                bucket = validation.category
                getattr(result, bucket).append(row_result)
                setattr(report, bucket, getattr(report, bucket) + 1)

            if every and report.total_rows % every == 0:
                yield self._progress_event(report)

        report.storage_duplicates = guard.storage_duplicates
        report.in_file_duplicates = guard.in_file_duplicates
        logger.info(
            f"Batch complete: total={report.total_rows} ready={report.ready} "
            f"review={report.review} blocked={report.blocked} "
            f"storage_duplicates={report.storage_duplicates} "
            f"in_file_duplicates={report.in_file_duplicates} skipped={report.skipped_rows}"
        )
        yield {"type": "complete", "result": result}

    def _notify(self, event: Dict[str, Any]) -> None:
        if self.on_progress is None:
            return
        try:
            self.on_progress(event)
        except Exception as exc:
            logger.warning(f"Progress callback failed: {exc}")

    def run(self, rows: Iterable[Any]) -> BatchResult:
        result: Optional[BatchResult] = None
        for event in self.events(rows):
            if event["type"] == "complete":
                result = event["result"]
            else:
                self._notify(event)
        return result


def validate_batch(
    rows: Iterable[Any],
    snapshot: Optional[StorageSnapshot] = None,
    column_mapping: Optional[Mapping[Any, Optional[str]]] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> BatchResult:
    return BatchProcessor(snapshot, column_mapping, on_progress).run(rows)


def _canonical_fields(record: Mapping[str, Any]) -> Dict[str, Any]:
    fields: Dict[str, Any] = {}
    for key, value in record.items():
        field = FIELD_ALIASES.get(key, key)
        if field in FIELD_NAMES and value is not None:
            fields[field] = value
    return fields


def revalidate_record(record: Mapping[str, Any], fix_email_typos: Optional[bool] = None) -> RowResult:
    """
    Re-run the pipeline on one record edited by a reviewer.

    Keys may use the canonical field names or the storage names (contact,
    companyName, expectedCtc, source); unknown keys are ignored. The values
    are read through the direct-lookup path, so every field is taken as
    labelled. No duplicate guard is applied.
    """
    fields = _canonical_fields(record)
    row: Row = [(field, cell_text(value)) for field, value in fields.items()]
    field_columns = {field: idx for idx, field in enumerate(fields)}
    if fix_email_typos is None:
        fix_email_typos = default_settings.fix_email_typos

    outcome = process_row(row, field_columns or None, fix_email_typos=fix_email_typos)
    return RowResult(
        row_index=1,
        original=original_cells(row),
        record=outcome.record,
        validation=outcome.validation,
        detection_mode=outcome.mode,
        corrections=outcome.corrections,
    )


def storage_document(record: FixedRecord) -> Dict[str, Any]:
    """
    Field values of a fixed record under the persisted candidate's names.

    Examples:
    - phone → contact, company → companyName, expected_salary → expectedCtc
    - status "selected" → "Offer"
    """
    document: Dict[str, Any] = {}
    for field, value in record.field_values().items():
        if field == "status" and isinstance(value, str):
            value = STATUS_DISPLAY_LABELS.get(value.strip().lower(), value)
        document[STORAGE_FIELD_NAMES.get(field, field)] = value
    return document
