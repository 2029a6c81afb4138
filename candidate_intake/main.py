import logging

from fastapi import FastAPI

from candidate_intake.api.routes.bulk import router as bulk_router
from candidate_intake.core.config import settings

logging.basicConfig(level=settings.log_level)

app = FastAPI(
    title="Candidate Intake (Bulk Upload Validation Service)",
    description="Deterministic validation of bulk candidate uploads: content-based field detection, correction, normalization and ready/review/blocked triage",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=[
        {"name": "bulk", "description": "Batch validation, single-record re-validation and header mapping"},
        {"name": "health", "description": "Liveness checks"},
    ],
)

app.include_router(bulk_router)

@app.get("/", tags=["health"])
def root():
    return {"service": "candidate-intake", "status": "running"}

@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}
