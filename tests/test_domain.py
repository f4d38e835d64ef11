"""
Domain entity tests.
"""

import pytest

from dentalvoice.domain.entities.processed_content import ProcessedContent, empty_content
from dentalvoice.domain.entities.tooth_diagnosis import ToothDiagnosisRecord
from dentalvoice.domain.enums.dental import ExtractionTier, ToothStatus, TreatmentPriority
from dentalvoice.domain.errors import InvalidConfidenceError, InvalidToothNumberError
from dentalvoice.domain.value_objects.transcript_input import DEFAULT_LANGUAGE, TranscriptInput


def test_from_analysis_tolerates_loose_payloads():
    content = ProcessedContent.from_analysis(
        {
            "chiefComplaint": {"primary_complaint": "  toothache ", "pain_scale": "12", "associated_symptoms": "swelling"},
            "hopi": None,
            "medicalHistory": {"allergies": [{"name": "penicillin"}, "penicillin", ""]},
            "personalHistory": {"tobacco": {"status": "current", "type": ["gutka"]}},
            "confidence": 140,
        }
    )
    assert content.chief_complaint.primary_complaint == "toothache"
    assert content.chief_complaint.pain_scale == 10
    assert content.chief_complaint.associated_symptoms == ["swelling"]
    assert content.hopi.aggravating_factors == []
    assert content.medical_history.allergies == ["penicillin"]
    assert content.personal_history.tobacco.types == ["gutka"]
    assert content.personal_history.smoking.status == "never"
    assert content.confidence == 100
    assert content.extraction_tier == ExtractionTier.FULL_ANALYSIS


def test_to_dict_uses_section_keys():
    payload = empty_content(ExtractionTier.KEYWORD_FALLBACK, confidence=25).to_dict()
    assert list(payload)[:8] == [
        "chiefComplaint",
        "hopi",
        "medicalHistory",
        "personalHistory",
        "clinicalExamination",
        "investigations",
        "diagnosis",
        "treatmentPlan",
    ]
    assert payload["extraction_tier"] == "keyword_fallback"
    assert "extraction_timestamp" in payload


def test_confidence_must_be_in_range():
    with pytest.raises(InvalidConfidenceError):
        ProcessedContent(confidence=101)


@pytest.mark.parametrize("tooth_number", ["123", "", "4a", 44])
def test_tooth_number_validation(tooth_number):
    with pytest.raises(InvalidToothNumberError):
        ToothDiagnosisRecord(
            consultation_id="c",
            patient_id="p",
            tooth_number=tooth_number,
            status=ToothStatus.CARIES,
            treatment_priority=TreatmentPriority.MEDIUM,
        )


def test_record_symptoms_are_deduplicated():
    record = ToothDiagnosisRecord(
        consultation_id="c",
        patient_id="p",
        tooth_number="11",
        status=ToothStatus.ATTENTION,
        treatment_priority=TreatmentPriority.MEDIUM,
        symptoms=["Pain", "Swelling", "Pain", ""],
    )
    assert record.symptoms == ["Pain", "Swelling"]


def test_transcript_input_defaults_language():
    transcript = TranscriptInput(text="  ", consultation_id="c", language="")
    assert transcript.language == DEFAULT_LANGUAGE
    assert transcript.is_blank
