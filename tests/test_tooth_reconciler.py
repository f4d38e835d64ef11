"""
Tooth record reconciliation tests.
"""

from datetime import date

from dentalvoice.application.utils.clinical_classifier import FURTHER_INVESTIGATION, classify
from dentalvoice.application.utils.tooth_context import locate
from dentalvoice.application.utils.tooth_reconciler import reconcile, teeth_in_location
from dentalvoice.domain.entities.processed_content import ChiefComplaint, ProcessedContent
from dentalvoice.domain.entities.tooth_diagnosis import NOTE_AUTO_EXTRACTED, NOTE_SYMPTOMS_ONLY
from dentalvoice.domain.enums.dental import RecordSource, ToothStatus, TreatmentPriority

EXAM_DATE = date(2024, 5, 1)


def _classified(transcript, radius=40):
    return [(window, classify(window.text)) for window in locate(transcript, radius)]


def _reconcile(transcript, content=None, radius=40):
    return reconcile(
        _classified(transcript, radius),
        content or ProcessedContent(),
        consultation_id="consult-1",
        patient_id="patient-1",
        examination_date=EXAM_DATE,
    )


def test_teeth_in_location():
    assert teeth_in_location("tooth 36, tooth 37 and 36 again") == ["36", "37"]
    assert teeth_in_location("") == []


def test_one_record_per_tooth_first_diagnosis_wins():
    transcript = (
        "tooth 36 has deep caries. " + "filler words " * 10 + "tooth 36 also missing? no, tooth 36 is fine."
    )
    records = _reconcile(transcript)
    assert [r.tooth_number for r in records] == ["36"]
    assert records[0].primary_diagnosis == "Deep Caries"
    assert records[0].notes == NOTE_AUTO_EXTRACTED


def test_symptom_only_record_is_upgraded_by_later_diagnosis():
    transcript = "tooth 46 hurts a lot. " + "filler words " * 10 + "on exam tooth 46 shows an abscess."
    records = _reconcile(transcript)
    assert len(records) == 1
    assert records[0].primary_diagnosis == "Apical Abscess"
    assert records[0].source == RecordSource.CONTEXT_WINDOW


def test_windows_without_signal_are_discarded():
    assert _reconcile("tooth 21 looks fine today") == []


def test_symptom_only_window_record():
    records = _reconcile("tooth 14 is sore")
    assert records[0].primary_diagnosis is None
    assert records[0].notes == NOTE_SYMPTOMS_ONLY
    assert records[0].recommended_treatment == FURTHER_INVESTIGATION


def test_complaint_tooth_is_appended():
    content = ProcessedContent(
        chief_complaint=ChiefComplaint(
            primary_complaint="Cavity pain",
            patient_description="There is a cavity that hurts",
            location_detail="tooth 26",
            associated_symptoms=["food lodgement"],
        )
    )
    records = _reconcile("tooth 11 fractured yesterday", content)

    assert [r.tooth_number for r in records] == ["11", "26"]
    complaint_record = records[1]
    assert complaint_record.source == RecordSource.CHIEF_COMPLAINT
    assert complaint_record.status == ToothStatus.CARIES
    assert complaint_record.treatment_priority == TreatmentPriority.MEDIUM
    assert complaint_record.symptoms == ["food lodgement"]
    assert complaint_record.recommended_treatment == FURTHER_INVESTIGATION


def test_complaint_does_not_override_window_record():
    content = ProcessedContent(
        chief_complaint=ChiefComplaint(primary_complaint="pain", location_detail="tooth 36")
    )
    records = _reconcile("tooth 36 deep caries", content)
    assert len(records) == 1
    assert records[0].source == RecordSource.CONTEXT_WINDOW


def test_complaint_without_symptoms_or_description_is_dropped():
    content = ProcessedContent(chief_complaint=ChiefComplaint(location_detail="tooth 17"))
    assert _reconcile("", content) == []


def test_record_serialisation_uses_camel_case():
    record = _reconcile("tooth 44 deep caries with sharp pain on cold")[0]
    payload = record.to_dict()
    assert payload["toothNumber"] == "44"
    assert payload["examinationDate"] == "2024-05-01"
    assert payload["painCharacteristics"] == {"quality": "sharp", "triggers": ["cold"], "duration": None}
    assert payload["treatmentPriority"] == "high"


def test_complaint_without_clinical_terms_is_dropped():
    content = ProcessedContent(
        chief_complaint=ChiefComplaint(
            primary_complaint="Chief complaint about tooth",
            patient_description="chief complaint is about tooth 12, routine check.",
            location_detail="tooth 12",
        )
    )
    assert _reconcile("chief complaint is about tooth 12, routine check.", content) == []


def test_complaint_symptoms_come_from_symptom_terms():
    content = ProcessedContent(
        chief_complaint=ChiefComplaint(
            primary_complaint="Swelling near upper tooth",
            patient_description="my gum is swollen and sore near the back",
            location_detail="tooth 27",
        )
    )
    records = _reconcile("", content)
    assert [r.tooth_number for r in records] == ["27"]
    assert records[0].symptoms == ["Pain", "Swelling"]
    assert records[0].status == ToothStatus.ATTENTION
