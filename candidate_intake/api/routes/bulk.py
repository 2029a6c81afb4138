import json
import logging
from typing import Any, Dict, Iterator

from fastapi import APIRouter, HTTPException
from fastapi.responses import StreamingResponse

from candidate_intake.core.errors import MappingError
from candidate_intake.core.header_mapping import detect_header_mapping
from candidate_intake.core.keywords import FIELD_NAMES
from candidate_intake.core.pipeline import BatchProcessor, revalidate_record
from candidate_intake.core.schemas import (
    BatchResult,
    BulkValidateRequest,
    HeaderMappingRequest,
    HeaderMappingResponse,
    RevalidateRequest,
    RowResult,
    StorageSnapshot,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["bulk"])


def _processor(request: BulkValidateRequest) -> BatchProcessor:
    snapshot = StorageSnapshot.from_identifiers(request.existing_emails, request.existing_phones)
    try:
        return BatchProcessor(snapshot=snapshot, column_mapping=request.column_mapping)
    except MappingError as exc:
        logger.warning(f"Rejected column mapping: {exc.message}")
        raise HTTPException(status_code=422, detail=exc.to_dict())


@router.post(
    "/bulk/validate",
    response_model=BatchResult,
    summary="Validate Candidate Rows",
    description="Detect, correct, normalize and score spreadsheet rows. Every row lands in exactly one of the ready/review/blocked buckets, or is dropped as an in-file duplicate.",
    responses={
        200: {
            "description": "Rows bucketed with a batch report",
            "content": {
                "application/json": {
                    "example": {
                        "report": {
                            "total_rows": 2,
                            "ready": 1,
                            "review": 0,
                            "blocked": 0,
                            "storage_duplicates": 0,
                            "in_file_duplicates": 1,
                            "skipped_rows": 0
                        },
                        "ready": [],
                        "review": [],
                        "blocked": []
                    }
                }
            }
        },
        422: {"description": "Column mapping names an unknown field or an invalid column"}
    }
)
def validate_bulk(request: BulkValidateRequest):
    """
    Validate an uploaded batch.

    **Rows** are lists of `[header, cell]` pairs. Headers may be empty or
    wrong; fields are detected from cell content unless a **column_mapping**
    covering at least two fields is supplied.

    **existing_emails / existing_phones** are the identifiers already stored
    for the uploader. Matching rows stay in their bucket with an INFO notice.
    """
    return _processor(request).run(request.rows)


@router.post(
    "/bulk/validate/stream",
    summary="Validate Candidate Rows (streaming)",
    description="Same as /bulk/validate, but answers with newline-delimited JSON: progress events while rows are processed, then one event of type 'complete' holding the result.",
)
def validate_bulk_stream(request: BulkValidateRequest):
    processor = _processor(request)

    def ndjson() -> Iterator[str]:
        for event in processor.events(request.rows):
            if event["type"] == "complete":
                payload: Dict[str, Any] = {"type": "complete", "result": event["result"].model_dump()}
            else:
                payload = event
            yield json.dumps(payload) + "\n"

    return StreamingResponse(ndjson(), media_type="application/x-ndjson")


@router.post(
    "/records/revalidate",
    response_model=RowResult,
    summary="Re-validate One Record",
    description="Run an edited record through correction, normalization and scoring again. Duplicate checks are not applied.",
)
def revalidate(request: RevalidateRequest):
    return revalidate_record(request.record)


@router.post(
    "/headers/mapping",
    response_model=HeaderMappingResponse,
    summary="Suggest Column Mapping",
    description="Suggest which field each column holds, from header labels alone.",
)
def suggest_mapping(request: HeaderMappingRequest):
    mapping = detect_header_mapping(request.headers)
    columns = [None] * len(request.headers)
    for field, idx in mapping.items():
        columns[idx] = field
    return HeaderMappingResponse(
        mapping=mapping,
        columns=columns,
        unmapped_fields=[f for f in FIELD_NAMES if f not in mapping],
    )
