"""
Merge per-tooth classifications with teeth named in the chief complaint.

Records are keyed by tooth number and kept in insertion order: window-derived
records first, chief-complaint records appended. The first record for a tooth
wins, except that a symptom-only record is upgraded in place when a later
window for the same tooth carries a diagnosis.
"""

import re
from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple

from ...domain.entities.processed_content import ProcessedContent
from ...domain.entities.tooth_diagnosis import (
    NOTE_AUTO_EXTRACTED,
    NOTE_SYMPTOMS_ONLY,
    ToothDiagnosisRecord,
)
from ...domain.enums.dental import RecordSource, ToothStatus, TreatmentPriority
from ..ports.services.event_emitter import EventEmitter, NullEventEmitter
from .clinical_classifier import FURTHER_INVESTIGATION, ToothClassification, collect_symptoms
from .dental_keywords import matches
from .tooth_context import ContextWindow

_LOCATION_TOOTH = re.compile(r"\b(\d{1,2})\b")

ClassifiedWindow = Tuple[ContextWindow, ToothClassification]


def teeth_in_location(location_detail: str) -> List[str]:
    teeth: List[str] = []
    for number in _LOCATION_TOOTH.findall(location_detail or ""):
        if number not in teeth:
            teeth.append(number)
    return teeth


def record_from_window(
    window: ContextWindow,
    classification: ToothClassification,
    consultation_id: str,
    patient_id: str,
    examination_date: date,
) -> ToothDiagnosisRecord:
    return ToothDiagnosisRecord(
        consultation_id=consultation_id,
        patient_id=patient_id,
        tooth_number=window.tooth_number,
        status=classification.status,
        treatment_priority=classification.treatment_priority,
        primary_diagnosis=classification.primary_diagnosis,
        diagnosis_details=window.text.strip(),
        symptoms=list(classification.symptoms),
        pain_characteristics=classification.pain_characteristics,
        clinical_findings=classification.clinical_findings,
        recommended_treatment=classification.recommended_treatment,
        examination_date=examination_date,
        notes=NOTE_AUTO_EXTRACTED if classification.primary_diagnosis else NOTE_SYMPTOMS_ONLY,
        source=RecordSource.CONTEXT_WINDOW,
    )


def record_from_complaint(
    tooth_number: str,
    content: ProcessedContent,
    consultation_id: str,
    patient_id: str,
    examination_date: date,
) -> ToothDiagnosisRecord:
    complaint = content.chief_complaint
    complaint_text = " ".join(
        part for part in (complaint.primary_complaint, complaint.patient_description) if part
    ).lower()
    is_caries = matches(complaint_text, "caries")
    # Free complaint text only counts when it names a symptom or caries.
    symptoms = list(complaint.associated_symptoms) or collect_symptoms(complaint_text)
    if not symptoms and is_caries and complaint.primary_complaint:
        symptoms = [complaint.primary_complaint]
    return ToothDiagnosisRecord(
        consultation_id=consultation_id,
        patient_id=patient_id,
        tooth_number=tooth_number,
        status=ToothStatus.CARIES if is_caries else ToothStatus.ATTENTION,
        treatment_priority=TreatmentPriority.MEDIUM,
        diagnosis_details=complaint.patient_description or complaint.primary_complaint,
        symptoms=symptoms,
        recommended_treatment=FURTHER_INVESTIGATION,
        examination_date=examination_date,
        notes=NOTE_SYMPTOMS_ONLY,
        source=RecordSource.CHIEF_COMPLAINT,
    )


def reconcile(
    classified_windows: Iterable[ClassifiedWindow],
    processed_content: ProcessedContent,
    consultation_id: str,
    patient_id: str,
    examination_date: Optional[date] = None,
    events: Optional[EventEmitter] = None,
) -> List[ToothDiagnosisRecord]:
    """Build the de-duplicated tooth record list for one request."""
    examination_date = examination_date or date.today()
    events = events or NullEventEmitter()
    by_tooth: Dict[str, ToothDiagnosisRecord] = {}

    for window, classification in classified_windows:
        if not classification.has_clinical_signal:
            continue
        record = record_from_window(window, classification, consultation_id, patient_id, examination_date)
        existing = by_tooth.get(record.tooth_number)
        if existing is None or (not existing.has_diagnosis and record.has_diagnosis):
            # dict assignment on an existing key keeps its position
            by_tooth[record.tooth_number] = record

    for tooth in teeth_in_location(processed_content.chief_complaint.location_detail):
        if tooth in by_tooth:
            continue
        record = record_from_complaint(tooth, processed_content, consultation_id, patient_id, examination_date)
        by_tooth[tooth] = record

    records = [record for record in by_tooth.values() if record.has_clinical_signal]
    for record in records:
        events.emit(
            "tooth_record.created",
            tooth=record.tooth_number,
            status=record.status.value,
            source=record.source.value,
            has_diagnosis=record.has_diagnosis,
        )
    return records
