"""FastAPI dependency providers."""

import logging
from functools import lru_cache
from typing import Annotated, Optional

from fastapi import Depends

from ..adapters.db.mongo.repositories.consultation_repository import (
    MongoConsultationRepository,
)
from ..adapters.external.clinical_analysis_openai import AzureOpenAIClinicalAnalysisService
from ..adapters.external.workflow_webhook import WebhookNotificationService
from ..application.ports.repositories.consultation_repo import (
    ConsultationRepository,
    UnconfiguredConsultationRepository,
)
from ..application.ports.services.clinical_analysis_service import ClinicalAnalysisService
from ..application.ports.services.event_emitter import EventEmitter
from ..application.ports.services.notification_service import (
    NullNotificationService,
    WorkflowNotificationService,
)
from ..application.use_cases.process_global_transcript import ProcessGlobalTranscriptUseCase
from ..application.utils.tiered_extraction import TranscriptContentExtractor
from ..core.config import get_settings
from ..core.structured_logger import StructuredLogEventEmitter

logger = logging.getLogger("dentalvoice")


@lru_cache()
def get_clinical_analysis_service() -> Optional[ClinicalAnalysisService]:
    """Get the clinical analysis service, or None when Azure OpenAI is not configured."""
    settings = get_settings()
    if not settings.azure_openai.is_configured:
        logger.warning("⚠️ Azure OpenAI not configured, transcripts use keyword extraction only")
        return None
    return AzureOpenAIClinicalAnalysisService()


@lru_cache()
def get_consultation_repository() -> ConsultationRepository:
    """Get consultation repository instance."""
    if not get_settings().database.enabled:
        logger.warning("⚠️ MONGO_URI not set, consultation lookups are disabled")
        return UnconfiguredConsultationRepository()
    return MongoConsultationRepository()


@lru_cache()
def get_notification_service() -> WorkflowNotificationService:
    """Get workflow notification service instance."""
    webhook = get_settings().webhook
    if not webhook.enabled:
        return NullNotificationService()
    return WebhookNotificationService(webhook.url, timeout_seconds=webhook.timeout_seconds)


@lru_cache()
def get_event_emitter() -> EventEmitter:
    return StructuredLogEventEmitter()


# Type aliases for dependency injection
ClinicalAnalysisServiceDep = Annotated[Optional[ClinicalAnalysisService], Depends(get_clinical_analysis_service)]
ConsultationRepositoryDep = Annotated[ConsultationRepository, Depends(get_consultation_repository)]
NotificationServiceDep = Annotated[WorkflowNotificationService, Depends(get_notification_service)]
EventEmitterDep = Annotated[EventEmitter, Depends(get_event_emitter)]


def get_process_transcript_use_case(
    analysis_service: ClinicalAnalysisServiceDep,
    consultation_repository: ConsultationRepositoryDep,
    notification_service: NotificationServiceDep,
    events: EventEmitterDep,
) -> ProcessGlobalTranscriptUseCase:
    """Assemble the transcript use case from the configured collaborators."""
    extraction = get_settings().extraction
    extractor = TranscriptContentExtractor(
        analysis_service,
        events=events,
        timeout_seconds=extraction.analysis_timeout_seconds,
        simplified_penalty=extraction.simplified_penalty,
        simplified_floor=extraction.simplified_floor,
        keyword_confidence=extraction.keyword_confidence,
    )
    return ProcessGlobalTranscriptUseCase(
        extractor,
        consultation_repository,
        notification_service=notification_service,
        events=events,
        window_radius=extraction.window_radius,
    )


ProcessTranscriptUseCaseDep = Annotated[ProcessGlobalTranscriptUseCase, Depends(get_process_transcript_use_case)]
