"""Process global consultation transcript use case."""

import logging
from datetime import date
from typing import List, Optional

from ...domain.entities.tooth_diagnosis import ToothDiagnosisRecord
from ...domain.value_objects.transcript_input import TranscriptInput
from ..dto.transcript_dto import ProcessTranscriptRequest, ProcessTranscriptResponse
from ..ports.repositories.consultation_repo import ConsultationRepository
from ..ports.services.event_emitter import EventEmitter, NullEventEmitter
from ..ports.services.notification_service import (
    NullNotificationService,
    WorkflowNotificationService,
)
from ..utils.clinical_classifier import classify
from ..utils.tiered_extraction import TranscriptContentExtractor
from ..utils.tooth_context import DEFAULT_WINDOW_RADIUS, locate
from ..utils.tooth_reconciler import reconcile

logger = logging.getLogger("dentalvoice")

WORDS_PER_MINUTE = 150
SUCCESS_MESSAGE = "Global transcript processed successfully"


def estimate_duration_seconds(transcript: str) -> int:
    """Speaking-time estimate at an average 150 words per minute."""
    words = len(transcript.split()) if transcript else 0
    return int(round(words / WORDS_PER_MINUTE * 60))


class ProcessGlobalTranscriptUseCase:
    """Use case turning a consultation transcript into sections and tooth records."""

    def __init__(
        self,
        content_extractor: TranscriptContentExtractor,
        consultation_repository: ConsultationRepository,
        notification_service: Optional[WorkflowNotificationService] = None,
        events: Optional[EventEmitter] = None,
        window_radius: int = DEFAULT_WINDOW_RADIUS,
    ):
        self._content_extractor = content_extractor
        self._consultation_repository = consultation_repository
        self._notification_service = notification_service or NullNotificationService()
        self._events = events or NullEventEmitter()
        self._window_radius = window_radius

    async def execute(self, request: ProcessTranscriptRequest) -> ProcessTranscriptResponse:
        """Execute the transcript processing use case."""
        transcript = TranscriptInput(
            text=request.transcript or "",
            consultation_id=request.consultation_id,
            language=request.language,
            patient_id=request.patient_id,
            session_id=request.session_id,
        )
        logger.info(
            f"🤖 Processing transcript for consultation {transcript.consultation_id} "
            f"({transcript.word_count()} words, language={transcript.language})"
        )

        processed_content = await self._content_extractor.process(transcript.text, transcript.language)

        tooth_diagnoses: List[ToothDiagnosisRecord] = []
        patient_id = transcript.patient_id or await self._resolve_patient_id(transcript.consultation_id)
        if patient_id:
            classified = [(window, classify(window.text)) for window in locate(transcript.text, self._window_radius)]
            tooth_diagnoses = reconcile(
                classified,
                processed_content,
                consultation_id=transcript.consultation_id,
                patient_id=patient_id,
                examination_date=date.today(),
                events=self._events,
            )

        await self._notification_service.notify_transcript(
            transcript.text, transcript.consultation_id, transcript.session_id
        )

        logger.info(
            f"✅ Transcript processed: tier={processed_content.extraction_tier.value}, "
            f"confidence={processed_content.confidence}, teeth={len(tooth_diagnoses)}"
        )
        return ProcessTranscriptResponse(
            success=True,
            processed_content=processed_content,
            tooth_diagnoses=tooth_diagnoses,
            message=SUCCESS_MESSAGE,
            recording_duration_seconds=estimate_duration_seconds(transcript.text),
        )

    async def _resolve_patient_id(self, consultation_id: str) -> Optional[str]:
        """Look up the consultation's patient; failures only disable tooth extraction."""
        try:
            patient_id = await self._consultation_repository.get_patient_id(consultation_id)
        except Exception as e:
            logger.error(f"❌ Patient lookup failed for consultation {consultation_id}: {e}")
            self._events.emit("patient_lookup.failed", consultation_id=consultation_id, reason=str(e))
            return None
        if not patient_id:
            logger.error(f"❌ No patient linked to consultation {consultation_id}, skipping tooth records")
            self._events.emit("patient_lookup.failed", consultation_id=consultation_id, reason="not_found")
            return None
        return str(patient_id)
