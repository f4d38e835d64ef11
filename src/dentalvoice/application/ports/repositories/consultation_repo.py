"""
Consultation repository interface used to resolve patient identifiers.
"""

from typing import Optional


class ConsultationRepository:
    """Read-only access to consultations."""

    async def get_patient_id(self, consultation_id: str) -> Optional[str]:
        """Return the patient id linked to a consultation, or None if unknown."""
        raise NotImplementedError


class UnconfiguredConsultationRepository(ConsultationRepository):
    """Stand-in used when no consultation store is configured; every lookup misses."""

    async def get_patient_id(self, consultation_id: str) -> Optional[str]:
        return None
