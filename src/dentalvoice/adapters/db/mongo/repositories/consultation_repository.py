"""
MongoDB implementation of ConsultationRepository.
"""

import logging
from typing import Optional

from .....application.ports.repositories.consultation_repo import ConsultationRepository
from .....core.exceptions import ConsultationLookupError
from ..models.consultation_m import ConsultationMongo

logger = logging.getLogger("dentalvoice")


class MongoConsultationRepository(ConsultationRepository):
    """MongoDB implementation of ConsultationRepository."""

    async def get_patient_id(self, consultation_id: str) -> Optional[str]:
        """Return the patient id for a consultation, None when the consultation is unknown."""
        try:
            consultation = await ConsultationMongo.find_one(
                ConsultationMongo.consultation_id == consultation_id
            )
        except Exception as e:
            raise ConsultationLookupError(consultation_id, str(e)) from e

        if consultation is None:
            logger.warning(f"Consultation {consultation_id} not found")
            return None
        return consultation.patient_id
