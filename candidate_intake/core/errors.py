"""
Exception classes for the intake engine.

Format and validation problems are never raised: normalizers return None and
validation findings travel as ValidationIssue data. Only structural failures
use exceptions.
"""
from typing import Any, Dict, Optional


class IntakeError(Exception):
    """Base exception for the intake engine"""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/response"""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class BatchRowError(IntakeError):
    """Raised when one row's structure cannot be processed; the batch skips the row and continues"""

    def __init__(self, row_index: int, reason: str):
        super().__init__(
            f"Row {row_index} could not be processed: {reason}",
            error_code="BATCH_ROW_ERROR",
            details={"row_index": row_index, "reason": reason},
        )
        self.row_index = row_index
        self.reason = reason


class MappingError(IntakeError):
    """Raised when an explicit column mapping is unusable"""

    def __init__(self, message: str, column: Any = None, field: Optional[str] = None):
        details: Dict[str, Any] = {}
        if column is not None:
            details["column"] = column
        if field:
            details["field"] = field
        super().__init__(message, error_code="MAPPING_ERROR", details=details)
