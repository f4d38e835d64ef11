"""
MongoDB Beanie model for consultations.

Only the fields the extraction pipeline reads are declared; documents written
by the clinic application may carry more, which are ignored on load.
"""

from datetime import datetime
from typing import Optional

from beanie import Document
from pydantic import Field


class ConsultationMongo(Document):
    """Consultation document, looked up to resolve the patient."""

    consultation_id: str = Field(..., description="Consultation ID")
    patient_id: Optional[str] = Field(None, description="Patient the consultation belongs to")
    dentist_id: Optional[str] = Field(None, description="Treating dentist")
    status: str = Field(default="in_progress", description="Consultation status")
    global_voice_transcript: Optional[str] = Field(None, description="Last global voice transcript")
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "consultations"
        indexes = [
            "consultation_id",
            "patient_id",
        ]
