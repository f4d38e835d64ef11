"""
Rule-based clinical classifier for a single tooth context window.

``CLASSIFICATION_RULES`` is the one place precedence is defined: rules are
tried top to bottom and the first rule whose trigger concept occurs in the
window decides status, diagnosis, treatment and priority. Inside a rule the
variants are tried in order and the rule's default applies when none match.

The order (caries before abscess before pulpitis, and so on) is inherited
clinical heuristics, not a validated ruleset. Overlapping vocabulary makes
it outcome-determining, so changes here need dental review.

Symptoms and pain characteristics are collected independently of the rule
hit; a diagnosis never suppresses them.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ...domain.entities.tooth_diagnosis import PainCharacteristics
from ...domain.enums.dental import ToothStatus, TreatmentPriority
from .dental_keywords import matches, matches_any

FURTHER_INVESTIGATION = "Further investigation required"


@dataclass(frozen=True)
class Outcome:
    status: ToothStatus
    diagnosis: Optional[str]
    treatment: Optional[str]
    priority: TreatmentPriority
    findings: Optional[str] = None


@dataclass(frozen=True)
class ClassificationRule:
    """Trigger concept, ordered (concept, outcome) variants and a default."""

    name: str
    trigger: str
    default: Outcome
    variants: Tuple[Tuple[str, Outcome], ...] = ()

    def applies(self, window: str) -> bool:
        return matches(window, self.trigger)

    def resolve(self, window: str) -> Outcome:
        for concept, outcome in self.variants:
            if matches(window, concept):
                return outcome
        return self.default


@dataclass
class ToothClassification:
    status: ToothStatus
    treatment_priority: TreatmentPriority
    primary_diagnosis: Optional[str] = None
    symptoms: List[str] = field(default_factory=list)
    pain_characteristics: Optional[PainCharacteristics] = None
    clinical_findings: Optional[str] = None
    recommended_treatment: Optional[str] = None
    rule: Optional[str] = None

    @property
    def has_clinical_signal(self) -> bool:
        return bool(self.primary_diagnosis) or bool(self.symptoms)


_S = ToothStatus
_P = TreatmentPriority

_MODERATE_CARIES = Outcome(
    _S.CARIES, "Moderate Caries", "Composite Filling", _P.MEDIUM,
    "Carious lesion extending into dentin",
)
_IRREVERSIBLE_PULPITIS = Outcome(
    _S.ATTENTION, "Irreversible Pulpitis", "Root Canal Treatment", _P.HIGH,
    "Lingering pain suggests irreversible pulpal inflammation",
)

CLASSIFICATION_RULES: Tuple[ClassificationRule, ...] = (
    ClassificationRule(
        name="caries",
        trigger="caries",
        default=_MODERATE_CARIES,
        variants=(
            ("deep", Outcome(
                _S.CARIES, "Deep Caries", "Root Canal Treatment", _P.HIGH,
                "Deep carious lesion approaching the pulp",
            )),
            ("moderate", _MODERATE_CARIES),
            ("incipient", Outcome(
                _S.CARIES, "Incipient Caries", "Fluoride Application", _P.LOW,
                "Early enamel lesion without cavitation",
            )),
            ("rampant", Outcome(
                _S.CARIES, "Rampant Caries", "Multiple restorations required", _P.URGENT,
                "Multiple active carious lesions",
            )),
            ("root_caries", Outcome(
                _S.CARIES, "Root Caries", "Glass Ionomer Restoration", _P.MEDIUM,
                "Carious lesion on exposed root surface",
            )),
            ("recurrent", Outcome(
                _S.CARIES, "Recurrent Caries", "Replacement Restoration", _P.MEDIUM,
                "Secondary caries at restoration margin",
            )),
        ),
    ),
    ClassificationRule(
        name="abscess",
        trigger="abscess",
        default=Outcome(
            _S.ATTENTION, "Apical Abscess", "Root Canal Treatment", _P.URGENT,
            "Periapical infection with possible swelling",
        ),
    ),
    ClassificationRule(
        name="pulpitis",
        trigger="pulpitis",
        default=_IRREVERSIBLE_PULPITIS,
        variants=(
            # "reversible" is a substring of "irreversible"
            ("irreversible", _IRREVERSIBLE_PULPITIS),
            ("reversible", Outcome(
                _S.ATTENTION, "Reversible Pulpitis", "Pulp Capping", _P.MEDIUM,
                "Short, provoked pain resolving on stimulus removal",
            )),
        ),
    ),
    ClassificationRule(
        name="necrosis",
        trigger="necrosis",
        default=Outcome(
            _S.ATTENTION, "Pulp Necrosis", "Root Canal Treatment", _P.URGENT,
            "Non-vital pulp",
        ),
    ),
    ClassificationRule(
        name="fracture",
        trigger="fracture",
        default=Outcome(
            _S.ATTENTION, "Crown Fracture (Enamel-Dentin)",
            "Full Crown (Zirconia) or Composite Filling", _P.HIGH,
            "Fracture line involving enamel and dentin",
        ),
        variants=(
            ("root_fracture", Outcome(
                _S.EXTRACTION_NEEDED, "Root Fracture", "Extraction", _P.HIGH,
                "Fracture extending into the root",
            )),
        ),
    ),
    ClassificationRule(
        name="extraction",
        trigger="extraction",
        default=Outcome(
            _S.EXTRACTION_NEEDED, "Tooth Indicated for Extraction", "Extraction", _P.HIGH,
        ),
    ),
    ClassificationRule(
        name="root_canal",
        trigger="root_canal",
        default=Outcome(
            _S.ROOT_CANAL, "Endodontic Treatment Required", "Root Canal Treatment", _P.HIGH,
        ),
        variants=(
            ("completed", Outcome(
                _S.ROOT_CANAL, "Previously Root Canal Treated",
                "Monitor, crown if not yet restored", _P.ROUTINE,
                "Endodontically treated tooth",
            )),
        ),
    ),
    ClassificationRule(
        name="filling",
        trigger="filling",
        default=Outcome(
            _S.FILLED, "Existing Restoration", "Monitor restoration", _P.ROUTINE,
        ),
        variants=(
            ("defective", Outcome(
                _S.FILLED, "Defective Restoration", "Replacement Filling", _P.MEDIUM,
                "Restoration with marginal breakdown or loss",
            )),
            ("needed", Outcome(
                _S.CARIES, "Restoration Required", "Composite Filling", _P.MEDIUM,
            )),
        ),
    ),
    ClassificationRule(
        name="crown",
        trigger="crown",
        default=Outcome(
            _S.CROWN, "Existing Crown", "Monitor crown", _P.ROUTINE,
        ),
        variants=(
            ("defective", Outcome(
                _S.CROWN, "Defective Crown", "Crown Replacement", _P.MEDIUM,
                "Crown with open margin or loss of retention",
            )),
            ("needed", Outcome(
                _S.ATTENTION, "Crown Required", "Full Crown (Zirconia)", _P.MEDIUM,
            )),
        ),
    ),
    ClassificationRule(
        name="missing",
        trigger="missing",
        default=Outcome(
            _S.MISSING, "Missing Tooth", "Implant or Bridge", _P.LOW,
        ),
    ),
    ClassificationRule(
        name="gingivitis",
        trigger="gingivitis",
        default=Outcome(
            _S.ATTENTION, "Gingivitis", "Scaling & Root Planing", _P.MEDIUM,
            "Gingival inflammation",
        ),
    ),
    ClassificationRule(
        name="periodontitis",
        trigger="periodontitis",
        default=Outcome(
            _S.ATTENTION, "Chronic Periodontitis", "Scaling & Root Planing", _P.HIGH,
            "Periodontal attachment loss",
        ),
        variants=(
            ("aggressive", Outcome(
                _S.ATTENTION, "Aggressive Periodontitis", "Scaling & Root Planing", _P.HIGH,
                "Rapid periodontal attachment loss",
            )),
        ),
    ),
    ClassificationRule(
        name="hypersensitivity",
        trigger="hypersensitivity",
        default=Outcome(
            _S.ATTENTION, "Dentin Hypersensitivity", "Desensitizing Agent Application", _P.LOW,
        ),
    ),
)

# No diagnosis on purpose: symptom-only windows are left for the clinician.
SYMPTOM_ONLY = Outcome(_S.ATTENTION, None, FURTHER_INVESTIGATION, _P.HIGH)
SYMPTOM_ONLY_CONCEPTS = ("pain", "sensitive")
UNCLASSIFIED_SYMPTOMS = Outcome(_S.ATTENTION, None, None, _P.MEDIUM)
NO_SIGNAL = Outcome(_S.HEALTHY, None, None, _P.ROUTINE)

SYMPTOM_LABELS: Tuple[Tuple[str, str], ...] = (
    ("sharp", "Sharp pain"),
    ("dull", "Dull pain"),
    ("throbbing", "Throbbing pain"),
    ("shooting", "Shooting pain"),
    ("lingering", "Lingering pain"),
    ("spontaneous", "Spontaneous pain"),
    ("cold", "Cold sensitivity"),
    ("hot", "Heat sensitivity"),
    ("sweet", "Sweet sensitivity"),
    ("chewing", "Pain on chewing"),
    ("pain", "Pain"),
    ("sensitive", "Sensitivity"),
    ("swelling", "Swelling"),
    ("bleeding", "Bleeding"),
    ("mobility", "Mobility"),
)

PAIN_QUALITIES = ("sharp", "dull", "throbbing")
PAIN_TRIGGERS = ("cold", "hot", "sweet", "chewing")
PAIN_DURATIONS = ("lingering", "spontaneous")


def first_matching_rule(window: str) -> Optional[ClassificationRule]:
    for rule in CLASSIFICATION_RULES:
        if rule.applies(window):
            return rule
    return None


def collect_symptoms(window: str) -> List[str]:
    symptoms: List[str] = []
    for concept, label in SYMPTOM_LABELS:
        if label not in symptoms and matches(window, concept):
            symptoms.append(label)
    return symptoms


def describe_pain(window: str) -> Optional[PainCharacteristics]:
    quality = next((q for q in PAIN_QUALITIES if matches(window, q)), None)
    triggers = [t for t in PAIN_TRIGGERS if matches(window, t)]
    duration = next((d for d in PAIN_DURATIONS if matches(window, d)), None)
    pain = PainCharacteristics(quality=quality, triggers=triggers, duration=duration)
    return None if pain.is_empty() else pain


def classify(window: str) -> ToothClassification:
    """Classify one lower-cased context window."""
    window = (window or "").lower()
    symptoms = collect_symptoms(window)

    rule = first_matching_rule(window)
    if rule is not None:
        outcome = rule.resolve(window)
    elif matches_any(window, SYMPTOM_ONLY_CONCEPTS):
        outcome = SYMPTOM_ONLY
    elif symptoms:
        outcome = UNCLASSIFIED_SYMPTOMS
    else:
        outcome = NO_SIGNAL

    return ToothClassification(
        status=outcome.status,
        treatment_priority=outcome.priority,
        primary_diagnosis=outcome.diagnosis,
        symptoms=symptoms,
        pain_characteristics=describe_pain(window),
        clinical_findings=outcome.findings,
        recommended_treatment=outcome.treatment,
        rule=rule.name if rule is not None else None,
    )
