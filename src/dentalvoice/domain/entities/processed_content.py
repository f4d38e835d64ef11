"""Consultation-level structured content extracted from a voice transcript.

Every section is a typed record whose absent data is an empty string, zero or
empty list, so downstream merging never has to deal with ``None``.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..enums.dental import ExtractionTier
from ..errors import InvalidConfidenceError


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    return str(value).strip()


def _text_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value.strip()] if value.strip() else []
    if isinstance(value, dict):
        # Older payloads sent {"name": ...} / {"condition": ...} objects
        value = [value]
    items: List[str] = []
    for item in value if isinstance(value, (list, tuple)) else [value]:
        if isinstance(item, dict):
            item = next((v for v in item.values() if isinstance(v, str) and v.strip()), "")
        text = _text(item)
        if text and text not in items:
            items.append(text)
    return items


def _int(value: Any, default: int = 0) -> int:
    try:
        return int(round(float(value)))
    except (TypeError, ValueError, OverflowError):
        return default


def _mapping(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def clamp_confidence(value: Any) -> int:
    """Coerce an arbitrary confidence estimate into the 0-100 range."""
    return max(0, min(100, _int(value)))


@dataclass(frozen=True)
class ChiefComplaint:
    primary_complaint: str = ""
    patient_description: str = ""
    pain_scale: int = 0
    location_detail: str = ""
    onset_duration: str = ""
    associated_symptoms: List[str] = field(default_factory=list)
    triggers: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "ChiefComplaint":
        data = _mapping(data)
        return cls(
            primary_complaint=_text(data.get("primary_complaint")),
            patient_description=_text(data.get("patient_description")),
            pain_scale=max(0, min(10, _int(data.get("pain_scale")))),
            location_detail=_text(data.get("location_detail")),
            onset_duration=_text(data.get("onset_duration")),
            associated_symptoms=_text_list(data.get("associated_symptoms")),
            triggers=_text_list(data.get("triggers")),
        )

    def is_empty(self) -> bool:
        return not (self.primary_complaint or self.patient_description or self.location_detail)


@dataclass(frozen=True)
class HopiPainCharacteristics:
    quality: str = ""
    intensity: int = 0
    frequency: str = ""
    duration: str = ""


@dataclass(frozen=True)
class OnsetDetails:
    when_started: str = ""
    how_started: str = ""
    precipitating_factors: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class HistoryOfPresentIllness:
    pain_characteristics: HopiPainCharacteristics = field(default_factory=HopiPainCharacteristics)
    onset_details: OnsetDetails = field(default_factory=OnsetDetails)
    aggravating_factors: List[str] = field(default_factory=list)
    relieving_factors: List[str] = field(default_factory=list)
    associated_symptoms: List[str] = field(default_factory=list)
    previous_episodes: str = ""
    pattern_changes: str = ""
    previous_treatments: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "HistoryOfPresentIllness":
        data = _mapping(data)
        pain = _mapping(data.get("pain_characteristics"))
        onset = _mapping(data.get("onset_details"))
        return cls(
            pain_characteristics=HopiPainCharacteristics(
                quality=_text(pain.get("quality")),
                intensity=max(0, min(10, _int(pain.get("intensity")))),
                frequency=_text(pain.get("frequency")),
                duration=_text(pain.get("duration")),
            ),
            onset_details=OnsetDetails(
                when_started=_text(onset.get("when_started")),
                how_started=_text(onset.get("how_started")),
                precipitating_factors=_text_list(onset.get("precipitating_factors")),
            ),
            aggravating_factors=_text_list(data.get("aggravating_factors")),
            relieving_factors=_text_list(data.get("relieving_factors")),
            associated_symptoms=_text_list(data.get("associated_symptoms")),
            previous_episodes=_text(data.get("previous_episodes")),
            pattern_changes=_text(data.get("pattern_changes")),
            previous_treatments=_text_list(data.get("previous_treatments")),
        )


@dataclass(frozen=True)
class MedicalHistory:
    medical_conditions: List[str] = field(default_factory=list)
    current_medications: List[str] = field(default_factory=list)
    allergies: List[str] = field(default_factory=list)
    previous_dental_treatments: List[str] = field(default_factory=list)
    family_medical_history: str = ""
    additional_notes: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "MedicalHistory":
        data = _mapping(data)
        return cls(
            medical_conditions=_text_list(data.get("medical_conditions")),
            current_medications=_text_list(data.get("current_medications")),
            allergies=_text_list(data.get("allergies")),
            previous_dental_treatments=_text_list(data.get("previous_dental_treatments")),
            family_medical_history=_text(data.get("family_medical_history")),
            additional_notes=_text(data.get("additional_notes")),
        )


@dataclass(frozen=True)
class HabitRecord:
    status: str = "never"
    details: str = ""
    types: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "HabitRecord":
        data = _mapping(data)
        return cls(
            status=_text(data.get("status")) or "never",
            details=_text(data.get("details")),
            types=_text_list(data.get("type") or data.get("types")),
        )


@dataclass(frozen=True)
class OralHygieneHabits:
    brushing_frequency: str = ""
    flossing: str = ""
    last_cleaning: str = ""


@dataclass(frozen=True)
class PersonalHistory:
    smoking: HabitRecord = field(default_factory=HabitRecord)
    alcohol: HabitRecord = field(default_factory=HabitRecord)
    tobacco: HabitRecord = field(default_factory=HabitRecord)
    dietary_habits: List[str] = field(default_factory=list)
    oral_hygiene: OralHygieneHabits = field(default_factory=OralHygieneHabits)
    other_habits: List[str] = field(default_factory=list)
    occupation: str = ""
    lifestyle_notes: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "PersonalHistory":
        data = _mapping(data)
        hygiene = _mapping(data.get("oral_hygiene"))
        return cls(
            smoking=HabitRecord.from_dict(data.get("smoking")),
            alcohol=HabitRecord.from_dict(data.get("alcohol")),
            tobacco=HabitRecord.from_dict(data.get("tobacco")),
            dietary_habits=_text_list(data.get("dietary_habits")),
            oral_hygiene=OralHygieneHabits(
                brushing_frequency=_text(hygiene.get("brushing_frequency")),
                flossing=_text(hygiene.get("flossing")),
                last_cleaning=_text(hygiene.get("last_cleaning")),
            ),
            other_habits=_text_list(data.get("other_habits")),
            occupation=_text(data.get("occupation")),
            lifestyle_notes=_text(data.get("lifestyle_notes")),
        )


@dataclass(frozen=True)
class ClinicalExamination:
    extraoral_findings: List[str] = field(default_factory=list)
    intraoral_findings: List[str] = field(default_factory=list)
    oral_hygiene: str = ""
    gingival_condition: str = ""
    periodontal_status: str = ""
    occlusion_notes: List[str] = field(default_factory=list)
    additional_observations: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "ClinicalExamination":
        data = _mapping(data)
        return cls(
            extraoral_findings=_text_list(data.get("extraoral_findings")),
            intraoral_findings=_text_list(data.get("intraoral_findings")),
            oral_hygiene=_text(data.get("oral_hygiene")),
            gingival_condition=_text(data.get("gingival_condition")),
            periodontal_status=_text(data.get("periodontal_status")),
            occlusion_notes=_text_list(data.get("occlusion_notes")),
            additional_observations=_text(data.get("additional_observations")),
        )


@dataclass(frozen=True)
class Investigations:
    radiographic_types: List[str] = field(default_factory=list)
    radiographic_findings: str = ""
    clinical_tests: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Diagnosis:
    provisional_diagnosis: List[str] = field(default_factory=list)
    differential_diagnosis: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class TreatmentPlan:
    procedures: List[str] = field(default_factory=list)
    recommendations: str = ""


@dataclass(frozen=True)
class ProcessedContent:
    """Result of whichever extraction tier succeeded for a request."""

    chief_complaint: ChiefComplaint = field(default_factory=ChiefComplaint)
    hopi: HistoryOfPresentIllness = field(default_factory=HistoryOfPresentIllness)
    medical_history: MedicalHistory = field(default_factory=MedicalHistory)
    personal_history: PersonalHistory = field(default_factory=PersonalHistory)
    clinical_examination: ClinicalExamination = field(default_factory=ClinicalExamination)
    investigations: Investigations = field(default_factory=Investigations)
    diagnosis: Diagnosis = field(default_factory=Diagnosis)
    treatment_plan: TreatmentPlan = field(default_factory=TreatmentPlan)
    confidence: int = 0
    auto_extracted: bool = True
    extraction_timestamp: str = field(default_factory=lambda: datetime.utcnow().isoformat())
    extraction_tier: ExtractionTier = ExtractionTier.KEYWORD_FALLBACK

    def __post_init__(self) -> None:
        if isinstance(self.confidence, bool) or not isinstance(self.confidence, int):
            raise InvalidConfidenceError(self.confidence)
        if not 0 <= self.confidence <= 100:
            raise InvalidConfidenceError(self.confidence)

    @classmethod
    def from_analysis(
        cls,
        analysis: Dict[str, Any],
        tier: ExtractionTier = ExtractionTier.FULL_ANALYSIS,
    ) -> "ProcessedContent":
        """Map a clinical-analysis payload field-by-field into typed sections."""
        return cls(
            chief_complaint=ChiefComplaint.from_dict(analysis.get("chiefComplaint")),
            hopi=HistoryOfPresentIllness.from_dict(analysis.get("hopi")),
            medical_history=MedicalHistory.from_dict(analysis.get("medicalHistory")),
            personal_history=PersonalHistory.from_dict(analysis.get("personalHistory")),
            clinical_examination=ClinicalExamination.from_dict(analysis.get("clinicalExamination")),
            confidence=clamp_confidence(analysis.get("confidence")),
            auto_extracted=bool(analysis.get("auto_extracted", True)),
            extraction_timestamp=_text(analysis.get("extraction_timestamp"))
            or datetime.utcnow().isoformat(),
            extraction_tier=tier,
        )

    def to_dict(self, include_timestamp: bool = True) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "chiefComplaint": asdict(self.chief_complaint),
            "hopi": asdict(self.hopi),
            "medicalHistory": asdict(self.medical_history),
            "personalHistory": asdict(self.personal_history),
            "clinicalExamination": asdict(self.clinical_examination),
            "investigations": asdict(self.investigations),
            "diagnosis": asdict(self.diagnosis),
            "treatmentPlan": asdict(self.treatment_plan),
            "confidence": self.confidence,
            "auto_extracted": self.auto_extracted,
            "extraction_tier": self.extraction_tier.value,
        }
        if include_timestamp:
            payload["extraction_timestamp"] = self.extraction_timestamp
        return payload


def empty_content(tier: ExtractionTier, confidence: int = 0, when: Optional[datetime] = None) -> ProcessedContent:
    """Default content with every section empty."""
    stamp = (when or datetime.utcnow()).isoformat()
    return ProcessedContent(confidence=confidence, extraction_timestamp=stamp, extraction_tier=tier)
