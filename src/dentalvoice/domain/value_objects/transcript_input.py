"""
Transcript input value object for a single processing request.
"""

from dataclasses import dataclass
from typing import Optional

from ..errors import InvalidTranscriptInputError

DEFAULT_LANGUAGE = "en-US"


@dataclass(frozen=True)
class TranscriptInput:
    """Immutable transcript handed to the extraction pipeline."""

    text: str
    consultation_id: str
    language: str = DEFAULT_LANGUAGE
    patient_id: Optional[str] = None
    session_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate identifiers; empty text is allowed and yields default sections."""
        if not isinstance(self.text, str):
            raise InvalidTranscriptInputError("text", self.text)
        if not self.consultation_id or not str(self.consultation_id).strip():
            raise InvalidTranscriptInputError("consultation_id", self.consultation_id)
        if not self.language:
            object.__setattr__(self, "language", DEFAULT_LANGUAGE)

    @property
    def is_blank(self) -> bool:
        """True when nothing but whitespace was captured."""
        return not self.text.strip()

    @property
    def lowered(self) -> str:
        return self.text.lower()

    def word_count(self) -> int:
        return len(self.text.split())
