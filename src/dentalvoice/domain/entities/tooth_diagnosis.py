"""Per-tooth diagnosis record produced from a voice transcript.

Records are transient: the pipeline returns them to the caller, which decides
whether to persist them when the consultation is saved.
"""

import re
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

from ..enums.dental import RecordSource, ToothStatus, TreatmentPriority
from ..errors import InvalidToothNumberError

NOTE_AUTO_EXTRACTED = "auto-extracted"
NOTE_SYMPTOMS_ONLY = "symptoms only, awaiting diagnosis"

_TOOTH_NUMBER = re.compile(r"^\d{1,2}$")


@dataclass(frozen=True)
class PainCharacteristics:
    """Pain profile detected in a context window."""

    quality: Optional[str] = None
    triggers: List[str] = field(default_factory=list)
    duration: Optional[str] = None

    def is_empty(self) -> bool:
        return not (self.quality or self.triggers or self.duration)

    def to_dict(self) -> Dict[str, Any]:
        return {"quality": self.quality, "triggers": list(self.triggers), "duration": self.duration}


@dataclass
class ToothDiagnosisRecord:
    """Diagnosis and treatment suggestion for one tooth."""

    consultation_id: str
    patient_id: str
    tooth_number: str
    status: ToothStatus
    treatment_priority: TreatmentPriority
    primary_diagnosis: Optional[str] = None
    diagnosis_details: str = ""
    symptoms: List[str] = field(default_factory=list)
    pain_characteristics: Optional[PainCharacteristics] = None
    clinical_findings: Optional[str] = None
    recommended_treatment: Optional[str] = None
    examination_date: date = field(default_factory=date.today)
    notes: str = NOTE_AUTO_EXTRACTED
    source: RecordSource = RecordSource.CONTEXT_WINDOW

    def __post_init__(self) -> None:
        if not isinstance(self.tooth_number, str) or not _TOOTH_NUMBER.match(self.tooth_number):
            raise InvalidToothNumberError(self.tooth_number)
        # Ordered set semantics
        deduped: List[str] = []
        for symptom in self.symptoms:
            if symptom and symptom not in deduped:
                deduped.append(symptom)
        self.symptoms = deduped

    @property
    def has_diagnosis(self) -> bool:
        return bool(self.primary_diagnosis)

    @property
    def has_clinical_signal(self) -> bool:
        """A record without diagnosis and symptoms carries nothing worth charting."""
        return self.has_diagnosis or bool(self.symptoms)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "consultationId": self.consultation_id,
            "patientId": self.patient_id,
            "toothNumber": self.tooth_number,
            "status": self.status.value,
            "primaryDiagnosis": self.primary_diagnosis,
            "diagnosisDetails": self.diagnosis_details,
            "symptoms": list(self.symptoms),
            "painCharacteristics": (
                self.pain_characteristics.to_dict() if self.pain_characteristics else None
            ),
            "clinicalFindings": self.clinical_findings,
            "recommendedTreatment": self.recommended_treatment,
            "treatmentPriority": self.treatment_priority.value,
            "examinationDate": self.examination_date.isoformat(),
            "notes": self.notes,
            "source": self.source.value,
        }
