"""
Webhook implementation of the workflow notification service.

Posts the processed transcript to a downstream automation endpoint. Delivery
is best effort: failures are logged and reported as False, never raised, and
never retried.
"""

import asyncio
import logging
from datetime import datetime
from typing import Any, Dict, Optional

import aiohttp

from ...application.ports.services.notification_service import WorkflowNotificationService
from ...core.exceptions import WebhookDeliveryError

logger = logging.getLogger("dentalvoice")

NOTIFICATION_TYPE = "global_consultation_recording"


def build_payload(transcript: str, consultation_id: str, session_id: Optional[str]) -> Dict[str, Any]:
    return {
        "transcript": transcript,
        "consultationId": consultation_id,
        "sessionId": session_id,
        "timestamp": datetime.utcnow().isoformat() + "Z",
        "type": NOTIFICATION_TYPE,
    }


class WebhookNotificationService(WorkflowNotificationService):
    """aiohttp implementation of WorkflowNotificationService."""

    def __init__(self, url: str, timeout_seconds: float = 10.0):
        self._url = url
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    async def _post(self, payload: Dict[str, Any]) -> None:
        async with aiohttp.ClientSession(timeout=self._timeout) as session:
            async with session.post(self._url, json=payload) as response:
                if not 200 <= response.status < 300:
                    body = await response.text()
                    raise WebhookDeliveryError(
                        response.status,
                        f"unexpected status {response.status}",
                        {"body": body[:500]},
                    )

    async def notify_transcript(
        self,
        transcript: str,
        consultation_id: str,
        session_id: Optional[str] = None,
    ) -> bool:
        try:
            await self._post(build_payload(transcript, consultation_id, session_id))
        except WebhookDeliveryError as e:
            logger.error(f"❌ [Webhook] Failed to notify workflow: {e.message}")
            return False
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"❌ [Webhook] Error sending transcript to workflow: {e}")
            return False
        logger.info(f"✅ [Webhook] Sent transcript for consultation {consultation_id}")
        return True
