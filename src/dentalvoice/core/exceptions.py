"""
Exception handling for the dental voice extraction service.

This module provides custom exception classes for the infrastructure and
integration layers. Domain rule violations live in ``domain/errors.py``.
"""

from typing import Any, Dict, Optional


class DentalVoiceException(Exception):
    """Base exception class for the dental voice extraction service."""

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


class ConfigurationError(DentalVoiceException):
    """Raised when there's a configuration error."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, "CONFIG_ERROR", details)


class ExternalServiceError(DentalVoiceException):
    """Raised when there's an external service error."""

    def __init__(
        self,
        service: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: str = "EXTERNAL_SERVICE_ERROR",
    ) -> None:
        self.service = service
        full_message = f"{service} service error: {message}"
        super().__init__(full_message, error_code, details)


class ClinicalAnalysisError(ExternalServiceError):
    """Raised when the clinical analysis service fails or returns an unusable payload."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__("ClinicalAnalysis", message, details, "CLINICAL_ANALYSIS_ERROR")


class ConsultationLookupError(ExternalServiceError):
    """Raised when a consultation's patient cannot be resolved."""

    def __init__(
        self, consultation_id: str, message: str, details: Optional[Dict[str, Any]] = None
    ) -> None:
        self.consultation_id = consultation_id
        super().__init__(
            "ConsultationStore",
            f"lookup for consultation '{consultation_id}' failed: {message}",
            details,
            "CONSULTATION_LOOKUP_ERROR",
        )


class WebhookDeliveryError(ExternalServiceError):
    """Raised when a workflow webhook answers non-2xx or cannot be reached."""

    def __init__(
        self, status: Optional[int], message: str, details: Optional[Dict[str, Any]] = None
    ) -> None:
        self.status = status
        super().__init__("WorkflowWebhook", message, details, "WEBHOOK_DELIVERY_ERROR")
