"""Transcript processing DTOs."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ...domain.entities.processed_content import ProcessedContent
from ...domain.entities.tooth_diagnosis import ToothDiagnosisRecord
from ...domain.value_objects.transcript_input import DEFAULT_LANGUAGE


@dataclass
class ProcessTranscriptRequest:
    """Request DTO for processing a global consultation transcript."""

    transcript: str
    consultation_id: str
    session_id: Optional[str] = None
    language: str = DEFAULT_LANGUAGE
    patient_id: Optional[str] = None


@dataclass
class ProcessTranscriptResponse:
    """Response DTO for a processed transcript."""

    success: bool
    processed_content: ProcessedContent
    tooth_diagnoses: List[ToothDiagnosisRecord] = field(default_factory=list)
    message: str = ""
    recording_duration_seconds: int = 0

    def to_payload(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "processedContent": self.processed_content.to_dict(),
            "toothDiagnoses": [record.to_dict() for record in self.tooth_diagnoses],
            "message": self.message,
        }
