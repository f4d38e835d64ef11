"""
Keyword-driven extractors for consultation-level sections.

These are the low-precision fallback used when the clinical analysis service
is degraded or unavailable. Each extractor looks for the first anchor keyword
of its section, cuts a short window after (or around) it and fills fields
from what else appears in that window. They never raise: a transcript
without anchors yields the section's empty default.
"""

import re
from typing import Dict, List, Optional

from ...domain.entities.processed_content import (
    ChiefComplaint,
    ClinicalExamination,
    Diagnosis,
    HabitRecord,
    HistoryOfPresentIllness,
    HopiPainCharacteristics,
    Investigations,
    MedicalHistory,
    OnsetDetails,
    OralHygieneHabits,
    PersonalHistory,
    ProcessedContent,
    TreatmentPlan,
)
from ...domain.enums.dental import ExtractionTier
from .tooth_context import TOOTH_MENTION_PATTERN

CHIEF_COMPLAINT_ANCHORS = (
    "chief complaint", "main problem", "primary concern", "patient complains",
    "presents with", "came in for", "tooth pain", "toothache", "dental pain",
)
PAIN_QUALITY_KEYWORDS = ("sharp", "dull", "throbbing", "aching", "burning", "shooting")
DURATION_KEYWORDS = ("hours", "days", "weeks", "months", "yesterday", "last week")
TRIGGER_KEYWORDS = ("cold", "hot", "sweet", "pressure", "chewing", "biting")
RELIEF_KEYWORDS = ("painkiller", "ibuprofen", "paracetamol", "clove oil", "warm salt water")
ASSOCIATED_SYMPTOM_KEYWORDS = ("swelling", "bleeding", "bad breath", "fever", "headache")
MEDICAL_CONDITIONS = (
    "diabetes", "hypertension", "high blood pressure", "heart disease", "asthma",
    "thyroid", "kidney", "liver", "cancer", "arthritis",
)
MEDICATION_KEYWORDS = (
    "medication", "medicine", "pill", "tablet", "insulin", "blood thinner",
    "aspirin", "ibuprofen", "antibiotic",
)
EXTRAORAL_KEYWORDS = ("facial", "symmetry", "swelling", "lymph node", "tmj")
INTRAORAL_KEYWORDS = ("gums", "gingiva", "teeth", "tongue", "palate", "oral hygiene")
RADIOGRAPHIC_KEYWORDS = ("x-ray", "radiograph", "cbct", "panoramic", "opg")
CLINICAL_TEST_KEYWORDS = ("vitality test", "percussion", "palpation", "mobility")
DIAGNOSIS_KEYWORDS = (
    "caries", "pulpitis", "periodontitis", "abscess",
    "fracture", "impaction", "gingivitis",
)
TREATMENT_KEYWORDS = (
    "filling", "extraction", "root canal", "crown", "cleaning",
    "scaling", "polishing", "surgery", "implant",
)

_STOP_WORDS = {"the", "a", "an", "is", "was", "has", "have", "of"}
_PAIN_SCALE = re.compile(r"pain.*?\b(\d{1,2})\s*(?:out of|/)\s*10\b")
_ALLERGY = re.compile(r"allerg(?:ic|y) to ((?:[\w-]+\s?){1,3})")

COMPLAINT_WINDOW = 100
DURATION_RADIUS = 20
MEDICATION_WINDOW = 50
EXAMINATION_WINDOW = 100
RADIOGRAPH_WINDOW = 150
TEST_WINDOW = 100


def _after(transcript: str, keyword: str, width: int) -> Optional[str]:
    index = transcript.find(keyword)
    if index == -1:
        return None
    return transcript[index:index + width].strip()


def _around(transcript: str, keyword: str, radius: int) -> Optional[str]:
    index = transcript.find(keyword)
    if index == -1:
        return None
    return transcript[max(0, index - radius):index + len(keyword) + radius].strip()


def _present(transcript: str, keywords) -> List[str]:
    return [keyword for keyword in keywords if keyword in transcript]


def _slug(keyword: str) -> str:
    return keyword.replace(" ", "_").replace("-", "_")


def summarize_complaint(context: str, max_words: int = 5) -> str:
    words = [w for w in context.split() if len(w) > 2 and w.lower() not in _STOP_WORDS]
    return " ".join(words[:max_words])


def extract_chief_complaint(transcript: str) -> ChiefComplaint:
    context = next(
        (c for c in (_after(transcript, a, COMPLAINT_WINDOW) for a in CHIEF_COMPLAINT_ANCHORS) if c),
        "",
    )
    scale = _PAIN_SCALE.search(transcript)
    teeth: List[str] = []
    for match in TOOTH_MENTION_PATTERN.finditer(context):
        if match.group(1) not in teeth:
            teeth.append(match.group(1))
    return ChiefComplaint(
        primary_complaint=summarize_complaint(context) if context else "",
        patient_description=context,
        pain_scale=min(10, int(scale.group(1))) if scale else 0,
        location_detail=", ".join(f"tooth {tooth}" for tooth in teeth),
        triggers=_present(context, TRIGGER_KEYWORDS),
    )


def extract_hopi(transcript: str) -> HistoryOfPresentIllness:
    quality = next((q for q in PAIN_QUALITY_KEYWORDS if q in transcript), "")
    duration = next(
        (c for c in (_around(transcript, d, DURATION_RADIUS) for d in DURATION_KEYWORDS) if c),
        "",
    )
    return HistoryOfPresentIllness(
        pain_characteristics=HopiPainCharacteristics(quality=quality, duration=duration),
        onset_details=OnsetDetails(when_started=duration),
        aggravating_factors=_present(transcript, TRIGGER_KEYWORDS),
        relieving_factors=_present(transcript, RELIEF_KEYWORDS),
        associated_symptoms=_present(transcript, ASSOCIATED_SYMPTOM_KEYWORDS),
    )


def extract_medical_history(transcript: str) -> MedicalHistory:
    medications: List[str] = []
    for keyword in MEDICATION_KEYWORDS:
        context = _after(transcript, keyword, MEDICATION_WINDOW)
        if context and context not in medications:
            medications.append(context)
    allergies = [m.group(1).strip() for m in _ALLERGY.finditer(transcript)]
    return MedicalHistory(
        medical_conditions=_present(transcript, MEDICAL_CONDITIONS),
        current_medications=medications,
        allergies=list(dict.fromkeys(a for a in allergies if a)),
    )


def _habit(transcript: str, keywords, negations, active: str) -> HabitRecord:
    negated = next((n for n in negations if n in transcript), None)
    if negated:
        status = "former" if negated.startswith("quit") or "used to" in negated else "never"
        return HabitRecord(status=status, details=_around(transcript, negated, DURATION_RADIUS) or "")
    hit = next((k for k in keywords if k in transcript), None)
    if hit is None:
        return HabitRecord()
    return HabitRecord(status=active, details=_around(transcript, hit, DURATION_RADIUS) or "", types=[hit])


def extract_personal_history(transcript: str) -> PersonalHistory:
    return PersonalHistory(
        smoking=_habit(
            transcript,
            ("smoke", "smoking", "cigarette"),
            ("non-smoker", "non smoker", "doesn't smoke", "does not smoke", "never smoked", "quit smoking"),
            "current",
        ),
        alcohol=_habit(
            transcript,
            ("alcohol", "drinks", "drink"),
            ("doesn't drink", "does not drink", "no alcohol", "quit drinking"),
            "regular",
        ),
        tobacco=_habit(
            transcript,
            ("tobacco", "gutka", "paan", "chewing tobacco"),
            ("no tobacco", "quit tobacco"),
            "current",
        ),
        oral_hygiene=OralHygieneHabits(
            brushing_frequency=_around(transcript, "brush", DURATION_RADIUS) or "",
            flossing=_around(transcript, "floss", DURATION_RADIUS) or "",
        ),
    )


def extract_clinical_examination(transcript: str) -> ClinicalExamination:
    extraoral = [c for c in (_after(transcript, k, EXAMINATION_WINDOW) for k in EXTRAORAL_KEYWORDS) if c]
    intraoral = [c for c in (_after(transcript, k, EXAMINATION_WINDOW) for k in INTRAORAL_KEYWORDS) if c]
    hygiene = _after(transcript, "oral hygiene", EXAMINATION_WINDOW) or ""
    return ClinicalExamination(
        extraoral_findings=list(dict.fromkeys(extraoral)),
        intraoral_findings=list(dict.fromkeys(intraoral)),
        oral_hygiene=next((level for level in ("good", "fair", "poor") if level in hygiene), ""),
        gingival_condition=_after(transcript, "gingiva", EXAMINATION_WINDOW)
        or _after(transcript, "gums", EXAMINATION_WINDOW)
        or "",
    )


def extract_investigations(transcript: str) -> Investigations:
    types = _present(transcript, RADIOGRAPHIC_KEYWORDS)
    findings = " ".join(_after(transcript, t, RADIOGRAPH_WINDOW) or "" for t in types)
    tests: Dict[str, str] = {}
    for test in CLINICAL_TEST_KEYWORDS:
        context = _after(transcript, test, TEST_WINDOW)
        if context:
            tests[_slug(test)] = context
    return Investigations(radiographic_types=types, radiographic_findings=findings.strip(), clinical_tests=tests)


def extract_diagnosis(transcript: str) -> Diagnosis:
    return Diagnosis(provisional_diagnosis=_present(transcript, DIAGNOSIS_KEYWORDS))


def extract_treatment_plan(transcript: str) -> TreatmentPlan:
    return TreatmentPlan(
        procedures=_present(transcript, TREATMENT_KEYWORDS),
        recommendations=_after(transcript, "recommend", COMPLAINT_WINDOW) or "",
    )


def extract_all_sections(
    transcript: str,
    confidence: int = 0,
    tier: ExtractionTier = ExtractionTier.KEYWORD_FALLBACK,
) -> ProcessedContent:
    """Run every extractor over the lower-cased transcript."""
    text = (transcript or "").lower()
    return ProcessedContent(
        chief_complaint=extract_chief_complaint(text),
        hopi=extract_hopi(text),
        medical_history=extract_medical_history(text),
        personal_history=extract_personal_history(text),
        clinical_examination=extract_clinical_examination(text),
        investigations=extract_investigations(text),
        diagnosis=extract_diagnosis(text),
        treatment_plan=extract_treatment_plan(text),
        confidence=confidence,
        extraction_tier=tier,
    )
