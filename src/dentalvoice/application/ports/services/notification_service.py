"""
Workflow notification service interface.
"""

from abc import ABC, abstractmethod
from typing import Optional


class WorkflowNotificationService(ABC):
    """Fire-and-forget notification to a downstream workflow system."""

    @abstractmethod
    async def notify_transcript(
        self,
        transcript: str,
        consultation_id: str,
        session_id: Optional[str] = None,
    ) -> bool:
        """
        Announce a processed consultation transcript.

        Implementations log delivery failures and return False; they never raise.
        """
        pass


class NullNotificationService(WorkflowNotificationService):
    """Used when no workflow endpoint is configured."""

    async def notify_transcript(
        self,
        transcript: str,
        consultation_id: str,
        session_id: Optional[str] = None,
    ) -> bool:
        return False
