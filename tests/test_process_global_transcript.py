"""
End-to-end tests for the global transcript use case.
"""

import pytest

from conftest import (
    FakeAnalysisService,
    FakeConsultationRepository,
    FakeNotificationService,
    analysis_payload,
)
from dentalvoice.application.dto.transcript_dto import ProcessTranscriptRequest
from dentalvoice.application.ports.services.event_emitter import RecordingEventEmitter
from dentalvoice.application.use_cases.process_global_transcript import (
    SUCCESS_MESSAGE,
    ProcessGlobalTranscriptUseCase,
    estimate_duration_seconds,
)
from dentalvoice.application.utils.tiered_extraction import TranscriptContentExtractor
from dentalvoice.core.exceptions import ConsultationLookupError
from dentalvoice.domain.errors import InvalidTranscriptInputError

TRANSCRIPT = "Patient has tooth 44 deep caries with sharp pain on cold"


def _use_case(analysis=None, repository=None, notifications=None, events=None):
    return ProcessGlobalTranscriptUseCase(
        TranscriptContentExtractor(analysis, events=events),
        repository or FakeConsultationRepository(),
        notification_service=notifications,
        events=events,
    )


def _without_timestamps(payload):
    payload["processedContent"].pop("extraction_timestamp")
    return payload


@pytest.mark.asyncio
async def test_keyword_pipeline_builds_tooth_record():
    response = await _use_case().execute(ProcessTranscriptRequest(TRANSCRIPT, "consult-1"))

    assert response.success
    assert response.message == SUCCESS_MESSAGE
    assert response.processed_content.confidence == 25
    assert len(response.tooth_diagnoses) == 1
    record = response.tooth_diagnoses[0]
    assert record.tooth_number == "44"
    assert record.patient_id == "patient-1"
    assert record.primary_diagnosis == "Deep Caries"
    assert record.recommended_treatment == "Root Canal Treatment"
    assert record.treatment_priority.value == "high"
    assert {"Sharp pain", "Cold sensitivity"} <= set(record.symptoms)


@pytest.mark.asyncio
async def test_analysis_complaint_tooth_is_added():
    use_case = _use_case(analysis=FakeAnalysisService(analysis_payload(location="tooth 36")))
    response = await use_case.execute(ProcessTranscriptRequest(TRANSCRIPT, "consult-1", language="en-US"))

    assert response.processed_content.confidence == 85
    assert [r.tooth_number for r in response.tooth_diagnoses] == ["44", "36"]


@pytest.mark.asyncio
async def test_processing_is_deterministic():
    use_case = _use_case()
    request = ProcessTranscriptRequest(TRANSCRIPT, "consult-1")
    first = _without_timestamps((await use_case.execute(request)).to_payload())
    second = _without_timestamps((await use_case.execute(request)).to_payload())
    assert first == second


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "repository",
    [
        FakeConsultationRepository(patient_id=None),
        FakeConsultationRepository(error=ConsultationLookupError("consult-1", "connection refused")),
    ],
)
async def test_lookup_failure_returns_no_teeth(repository):
    events = RecordingEventEmitter()
    response = await _use_case(repository=repository, events=events).execute(
        ProcessTranscriptRequest(TRANSCRIPT, "consult-1")
    )
    assert response.success
    assert response.tooth_diagnoses == []
    assert response.processed_content.confidence == 25
    assert "patient_lookup.failed" in events.names()


@pytest.mark.asyncio
async def test_caller_supplied_patient_skips_lookup():
    repository = FakeConsultationRepository()
    response = await _use_case(repository=repository).execute(
        ProcessTranscriptRequest(TRANSCRIPT, "consult-1", patient_id="patient-9")
    )
    assert repository.lookups == []
    assert response.tooth_diagnoses[0].patient_id == "patient-9"


@pytest.mark.asyncio
async def test_notification_failure_is_ignored():
    notifications = FakeNotificationService(delivered=False)
    response = await _use_case(notifications=notifications).execute(
        ProcessTranscriptRequest(TRANSCRIPT, "consult-1", session_id="session-7")
    )
    assert response.success
    assert notifications.sent == [
        {"transcript": TRANSCRIPT, "consultation_id": "consult-1", "session_id": "session-7"}
    ]


@pytest.mark.asyncio
async def test_empty_transcript_is_not_an_error():
    response = await _use_case().execute(ProcessTranscriptRequest("", "consult-1"))
    assert response.success
    assert response.tooth_diagnoses == []
    assert response.processed_content.confidence == 25


@pytest.mark.asyncio
async def test_blank_consultation_id_is_rejected():
    with pytest.raises(InvalidTranscriptInputError):
        await _use_case().execute(ProcessTranscriptRequest(TRANSCRIPT, "  "))


def test_estimate_duration_seconds():
    assert estimate_duration_seconds("word " * 150) == 60
    assert estimate_duration_seconds("") == 0


@pytest.mark.asyncio
async def test_complaint_tooth_without_clinical_terms_yields_no_record():
    response = await _use_case().execute(
        ProcessTranscriptRequest("Chief complaint is about tooth 12, routine check.", "consult-1")
    )
    assert response.processed_content.chief_complaint.location_detail == "tooth 12"
    assert response.tooth_diagnoses == []
