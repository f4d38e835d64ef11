"""
Clinical analysis service interface for dental conversation transcripts.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class ClinicalAnalysisService(ABC):
    """Abstract service that turns a consultation transcript into clinical sections."""

    @abstractmethod
    async def analyze(self, transcript: str, language: Optional[str] = None) -> Dict[str, Any]:
        """
        Analyze a dental consultation transcript.

        Args:
            transcript: Raw consultation transcript
            language: Optional language tag (e.g. "en-US", "hi-IN"); omitted in
                reduced mode

        Returns:
            Dict with chiefComplaint, hopi and optionally medicalHistory,
            personalHistory, clinicalExamination, plus confidence,
            auto_extracted and extraction_timestamp

        Raises:
            ClinicalAnalysisError: if the service is unavailable or answers
                with an unusable payload
        """
        pass
