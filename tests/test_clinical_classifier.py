"""
Clinical classifier tests.
"""

import pytest

from dentalvoice.application.utils.clinical_classifier import (
    CLASSIFICATION_RULES,
    FURTHER_INVESTIGATION,
    classify,
    collect_symptoms,
    describe_pain,
)
from dentalvoice.domain.enums.dental import ToothStatus, TreatmentPriority


def test_deep_caries_with_cold_sharp_pain():
    result = classify("patient has tooth 44 deep caries with sharp pain on cold")
    assert result.status == ToothStatus.CARIES
    assert result.primary_diagnosis == "Deep Caries"
    assert result.recommended_treatment == "Root Canal Treatment"
    assert result.treatment_priority == TreatmentPriority.HIGH
    assert "Sharp pain" in result.symptoms
    assert "Cold sensitivity" in result.symptoms
    assert result.pain_characteristics.quality == "sharp"
    assert result.pain_characteristics.triggers == ["cold"]


def test_caries_takes_precedence_over_pulpitis():
    result = classify("tooth 36 caries and irreversible pulpitis")
    assert result.rule == "caries"
    assert result.primary_diagnosis == "Moderate Caries"


def test_caries_defaults_to_moderate():
    result = classify("tooth 16 has decay")
    assert result.primary_diagnosis == "Moderate Caries"
    assert result.treatment_priority == TreatmentPriority.MEDIUM


@pytest.mark.parametrize(
    "window,diagnosis",
    [
        ("tooth 46 irreversible pulpitis", "Irreversible Pulpitis"),
        ("tooth 46 reversible pulpitis", "Reversible Pulpitis"),
        ("tooth 46 pulpitis", "Irreversible Pulpitis"),
    ],
)
def test_pulpitis_variants(window, diagnosis):
    assert classify(window).primary_diagnosis == diagnosis


def test_abscess_is_urgent():
    result = classify("tooth 26 abscess with swelling")
    assert result.primary_diagnosis == "Apical Abscess"
    assert result.treatment_priority == TreatmentPriority.URGENT
    assert "Swelling" in result.symptoms


def test_root_fracture_needs_extraction():
    result = classify("tooth 11 vertical root fracture")
    assert result.status == ToothStatus.EXTRACTION_NEEDED
    assert result.primary_diagnosis == "Root Fracture"


def test_previously_treated_root_canal():
    result = classify("tooth 36 root canal was already done")
    assert result.status == ToothStatus.ROOT_CANAL
    assert result.primary_diagnosis == "Previously Root Canal Treated"
    assert result.treatment_priority == TreatmentPriority.ROUTINE


def test_filling_variants():
    assert classify("tooth 25 has an old filling").primary_diagnosis == "Existing Restoration"
    assert classify("tooth 25 filling is leaking").primary_diagnosis == "Defective Restoration"
    needed = classify("tooth 25 needs a filling")
    assert needed.status == ToothStatus.CARIES
    assert needed.recommended_treatment == "Composite Filling"


def test_missing_tooth():
    result = classify("tooth 18 is missing")
    assert result.status == ToothStatus.MISSING
    assert result.recommended_treatment == "Implant or Bridge"


def test_spanish_and_hindi_windows():
    assert classify("diente 36 con caries profunda").primary_diagnosis == "Deep Caries"
    assert classify("दांत 36 में गहरी कैविटी है").primary_diagnosis == "Deep Caries"


def test_pain_without_diagnosis_needs_investigation():
    result = classify("tooth 44 hurts when biting")
    assert result.primary_diagnosis is None
    assert result.status == ToothStatus.ATTENTION
    assert result.treatment_priority == TreatmentPriority.HIGH
    assert result.recommended_treatment == FURTHER_INVESTIGATION
    assert result.symptoms == ["Pain on chewing", "Pain"]


def test_swelling_only_is_medium_attention():
    result = classify("tooth 31 slight swelling noted")
    assert result.primary_diagnosis is None
    assert result.status == ToothStatus.ATTENTION
    assert result.treatment_priority == TreatmentPriority.MEDIUM
    assert result.recommended_treatment is None
    assert result.symptoms == ["Swelling"]


def test_no_signal_is_healthy():
    result = classify("tooth 21 looks fine")
    assert result.status == ToothStatus.HEALTHY
    assert not result.has_clinical_signal
    assert result.pain_characteristics is None


def test_symptoms_are_ordered_and_unique():
    assert collect_symptoms("throbbing pain, pain at night, bleeding") == [
        "Throbbing pain",
        "Spontaneous pain",
        "Pain",
        "Bleeding",
    ]


def test_describe_pain_duration():
    pain = describe_pain("lingering sensitivity to hot and sweet")
    assert pain.duration == "lingering"
    assert pain.triggers == ["hot", "sweet"]
    assert pain.quality is None


def test_rule_names_are_unique():
    names = [rule.name for rule in CLASSIFICATION_RULES]
    assert len(names) == len(set(names))
