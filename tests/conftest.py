"""
Shared fakes for the extraction pipeline tests.
"""

import asyncio
from typing import Any, Dict, List, Optional

import pytest

from dentalvoice.application.ports.repositories.consultation_repo import ConsultationRepository
from dentalvoice.application.ports.services.clinical_analysis_service import ClinicalAnalysisService
from dentalvoice.application.ports.services.notification_service import WorkflowNotificationService


def analysis_payload(confidence: int = 85, location: str = "tooth 36", **overrides) -> Dict[str, Any]:
    payload = {
        "chiefComplaint": {
            "primary_complaint": "Pain in lower left back tooth",
            "patient_description": "It hurts when I drink cold water",
            "pain_scale": 7,
            "location_detail": location,
            "onset_duration": "3 days",
            "associated_symptoms": ["cold sensitivity"],
            "triggers": ["cold"],
        },
        "hopi": {
            "pain_characteristics": {"quality": "sharp", "intensity": 7, "frequency": "intermittent", "duration": "seconds"},
            "onset_details": {"when_started": "3 days ago", "how_started": "gradual", "precipitating_factors": []},
            "aggravating_factors": ["cold drinks"],
            "relieving_factors": ["ibuprofen"],
            "associated_symptoms": [],
            "previous_episodes": "",
            "pattern_changes": "",
            "previous_treatments": ["ibuprofen 400mg"],
        },
        "medicalHistory": {"medical_conditions": ["diabetes"], "current_medications": ["metformin"]},
        "confidence": confidence,
        "auto_extracted": True,
    }
    payload.update(overrides)
    return payload


class FakeAnalysisService(ClinicalAnalysisService):
    """Replays scripted results; an Exception instance is raised instead of returned."""

    def __init__(self, *results: Any, delay: float = 0.0):
        self.results = list(results)
        self.delay = delay
        self.calls: List[Optional[str]] = []

    async def analyze(self, transcript: str, language: Optional[str] = None) -> Dict[str, Any]:
        self.calls.append(language)
        if self.delay:
            await asyncio.sleep(self.delay)
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, Exception):
            raise result
        return result


class FakeConsultationRepository(ConsultationRepository):
    def __init__(self, patient_id: Optional[str] = "patient-1", error: Optional[Exception] = None):
        self.patient_id = patient_id
        self.error = error
        self.lookups: List[str] = []

    async def get_patient_id(self, consultation_id: str) -> Optional[str]:
        self.lookups.append(consultation_id)
        if self.error is not None:
            raise self.error
        return self.patient_id


class FakeNotificationService(WorkflowNotificationService):
    def __init__(self, delivered: bool = True):
        self.delivered = delivered
        self.sent: List[Dict[str, Any]] = []

    async def notify_transcript(self, transcript: str, consultation_id: str, session_id: Optional[str] = None) -> bool:
        self.sent.append({"transcript": transcript, "consultation_id": consultation_id, "session_id": session_id})
        return self.delivered


@pytest.fixture
def consultation_repository():
    return FakeConsultationRepository()


@pytest.fixture
def notification_service():
    return FakeNotificationService()
