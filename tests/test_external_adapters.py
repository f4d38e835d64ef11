"""
Clinical analysis and webhook adapter tests (no network).
"""

import json

import aiohttp
import pytest

from dentalvoice.adapters.external import workflow_webhook
from dentalvoice.adapters.external.clinical_analysis_openai import (
    AzureOpenAIClinicalAnalysisService,
    build_user_prompt,
)
from dentalvoice.adapters.external.workflow_webhook import WebhookNotificationService, build_payload
from dentalvoice.adapters.db.mongo.models.consultation_m import ConsultationMongo
from dentalvoice.adapters.db.mongo.repositories.consultation_repository import MongoConsultationRepository
from dentalvoice.application.ports.repositories.consultation_repo import ConsultationRepository
from dentalvoice.core.exceptions import (
    ClinicalAnalysisError,
    ConsultationLookupError,
    WebhookDeliveryError,
)

from conftest import analysis_payload


class StubAIClient:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.prompts = []

    async def chat_json(self, user_prompt, *, system_prompt=None, temperature=0.2, max_tokens=None):
        self.prompts.append(user_prompt)
        if self.error is not None:
            raise self.error
        return self.result


def test_user_prompt_carries_language_hint():
    assert "hi-IN" in build_user_prompt("namaste", "hi-IN")
    assert "language tag" not in build_user_prompt("hello")


@pytest.mark.asyncio
async def test_analysis_sets_defaults():
    payload = analysis_payload()
    payload.pop("auto_extracted")
    service = AzureOpenAIClinicalAnalysisService(client=StubAIClient(result=payload))

    analysis = await service.analyze("tooth 36 hurts", "en-US")

    assert analysis["auto_extracted"] is True
    assert analysis["extraction_timestamp"]


@pytest.mark.asyncio
async def test_analysis_rejects_missing_sections():
    service = AzureOpenAIClinicalAnalysisService(client=StubAIClient(result={"confidence": 90}))
    with pytest.raises(ClinicalAnalysisError) as exc_info:
        await service.analyze("tooth 36 hurts")
    assert exc_info.value.details == {"missing": ["chiefComplaint", "hopi"]}


@pytest.mark.asyncio
async def test_analysis_wraps_invalid_json():
    error = json.JSONDecodeError("Expecting value", "not json", 0)
    service = AzureOpenAIClinicalAnalysisService(client=StubAIClient(error=error))
    with pytest.raises(ClinicalAnalysisError) as exc_info:
        await service.analyze("tooth 36 hurts")
    assert exc_info.value.error_code == "CLINICAL_ANALYSIS_ERROR"


def test_webhook_payload_shape():
    payload = build_payload("tooth 36 hurts", "consult-1", None)
    assert payload["type"] == "global_consultation_recording"
    assert payload["consultationId"] == "consult-1"
    assert payload["sessionId"] is None
    assert payload["timestamp"].endswith("Z")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        WebhookDeliveryError(502, "unexpected status 502"),
        aiohttp.ClientConnectionError("connection refused"),
    ],
)
async def test_webhook_failures_are_swallowed(monkeypatch, error):
    service = WebhookNotificationService("https://automation.example.com/hook")

    async def failing_post(payload):
        raise error

    monkeypatch.setattr(service, "_post", failing_post)
    assert await service.notify_transcript("tooth 36 hurts", "consult-1") is False


@pytest.mark.asyncio
async def test_webhook_success(monkeypatch):
    service = WebhookNotificationService("https://automation.example.com/hook")
    sent = []

    async def recording_post(payload):
        sent.append(payload)

    monkeypatch.setattr(service, "_post", recording_post)
    assert await service.notify_transcript("tooth 36 hurts", "consult-1", "session-1") is True
    assert sent[0]["sessionId"] == "session-1"
    assert workflow_webhook.NOTIFICATION_TYPE == sent[0]["type"]


@pytest.mark.asyncio
async def test_mongo_repository_wraps_lookup_failures(monkeypatch):
    async def unreachable(*args, **kwargs):
        raise RuntimeError("server selection timeout")

    monkeypatch.setattr(ConsultationMongo, "find_one", staticmethod(unreachable))
    repository = MongoConsultationRepository()

    assert isinstance(repository, ConsultationRepository)
    with pytest.raises(ConsultationLookupError):
        await repository.get_patient_id("consult-1")
