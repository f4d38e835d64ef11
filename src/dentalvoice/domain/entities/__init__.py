"""
Domain entities package.
"""

from .processed_content import (
    ChiefComplaint,
    ClinicalExamination,
    Diagnosis,
    HistoryOfPresentIllness,
    Investigations,
    MedicalHistory,
    PersonalHistory,
    ProcessedContent,
    TreatmentPlan,
)
from .tooth_diagnosis import PainCharacteristics, ToothDiagnosisRecord

__all__ = [
    "ProcessedContent",
    "ChiefComplaint",
    "HistoryOfPresentIllness",
    "MedicalHistory",
    "PersonalHistory",
    "ClinicalExamination",
    "Investigations",
    "Diagnosis",
    "TreatmentPlan",
    "ToothDiagnosisRecord",
    "PainCharacteristics",
]
