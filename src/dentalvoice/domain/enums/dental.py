"""
Tooth status, treatment priority and extraction tier enums.
"""

from enum import Enum


class ToothStatus(str, Enum):
    """Charting status of a single tooth."""
    HEALTHY = "healthy"
    CARIES = "caries"
    ATTENTION = "attention"
    EXTRACTION_NEEDED = "extraction_needed"
    ROOT_CANAL = "root_canal"
    FILLED = "filled"
    CROWN = "crown"
    MISSING = "missing"


class TreatmentPriority(str, Enum):
    """How soon the recommended treatment should happen."""
    URGENT = "urgent"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    ROUTINE = "routine"


class ExtractionTier(str, Enum):
    """Degrading strategies used to build consultation-level content."""
    FULL_ANALYSIS = "full_analysis"              # Classifier with language hint
    SIMPLIFIED_FALLBACK = "simplified_fallback"  # Classifier without hint + keyword sections
    KEYWORD_FALLBACK = "keyword_fallback"        # Keyword sections only


class RecordSource(str, Enum):
    """Where a tooth record was derived from."""
    CONTEXT_WINDOW = "context_window"
    CHIEF_COMPLAINT = "chief_complaint"
