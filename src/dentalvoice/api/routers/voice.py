"""Voice recording endpoints: structured extraction from consultation transcripts."""

import logging
from typing import Optional

from fastapi import APIRouter, File, Form, UploadFile

from ...application.dto.transcript_dto import ProcessTranscriptRequest
from ...domain.errors import DomainError
from ...domain.value_objects.transcript_input import DEFAULT_LANGUAGE
from ..deps import ProcessTranscriptUseCaseDep
from ..errors import MissingFieldsError, ProcessingFailedError
from ..schemas.voice import ProcessGlobalTranscriptResponse

router = APIRouter(prefix="/voice", tags=["voice"])
logger = logging.getLogger("dentalvoice")


@router.post(
    "/process-global-transcript",
    response_model=ProcessGlobalTranscriptResponse,
    summary="Extract clinical sections and tooth diagnoses from a consultation transcript",
)
async def process_global_transcript(
    use_case: ProcessTranscriptUseCaseDep,
    transcript: Optional[str] = Form(None),
    consultationId: Optional[str] = Form(None),
    sessionId: Optional[str] = Form(None),
    language: Optional[str] = Form(DEFAULT_LANGUAGE),
    patientId: Optional[str] = Form(None),
    audio: Optional[UploadFile] = File(None),
):
    """
    Process a whole-consultation transcript.

    The optional ``audio`` upload is accepted for client compatibility and not
    read. ``patientId`` skips the consultation lookup when the caller already
    knows the patient.
    """
    if not transcript or not consultationId:
        missing = [name for name, value in (("transcript", transcript), ("consultationId", consultationId)) if not value]
        logger.warning(f"⚠️ Rejected transcript request, missing fields: {missing}")
        raise MissingFieldsError(missing)

    if audio is not None:
        logger.info(f"Ignoring uploaded audio '{audio.filename}' for consultation {consultationId}")

    try:
        result = await use_case.execute(ProcessTranscriptRequest(
            transcript=transcript,
            consultation_id=consultationId,
            session_id=sessionId or None,
            language=language or DEFAULT_LANGUAGE,
            patient_id=patientId or None,
        ))
    except DomainError:
        raise
    except Exception as e:
        logger.error(f"❌ Error processing global transcript for consultation {consultationId}: {e}", exc_info=True)
        raise ProcessingFailedError(details={"error_type": type(e).__name__}) from e

    return result.to_payload()
