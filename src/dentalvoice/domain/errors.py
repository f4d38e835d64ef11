"""
Domain-specific error types for business rule violations.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base domain error."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class InvalidTranscriptInputError(DomainError):
    """Transcript input is missing a required field."""

    def __init__(self, field: str, value: Any) -> None:
        message = f"Invalid transcript input. Field: {field}, Value: {value!r}"
        super().__init__(
            message, "INVALID_TRANSCRIPT_INPUT", {"field": field, "value": value}
        )


class InvalidToothNumberError(DomainError):
    """Tooth number is not a 1-2 digit string."""

    def __init__(self, tooth_number: Any) -> None:
        message = f"Invalid tooth number: {tooth_number!r}"
        super().__init__(
            message, "INVALID_TOOTH_NUMBER", {"tooth_number": tooth_number}
        )


class InvalidConfidenceError(DomainError):
    """Confidence score outside the 0-100 range."""

    def __init__(self, confidence: Any) -> None:
        message = f"Confidence must be an integer between 0 and 100, got {confidence!r}"
        super().__init__(message, "INVALID_CONFIDENCE", {"confidence": confidence})
