"""
Azure OpenAI implementation of the dental clinical analysis service.
"""

import json
import logging
from datetime import datetime
from typing import Any, Dict, Optional

from ...application.ports.services.clinical_analysis_service import ClinicalAnalysisService
from ...core.ai_client import AzureAIClient
from ...core.ai_factory import get_ai_client
from ...core.config import get_settings
from ...core.exceptions import ClinicalAnalysisError

logger = logging.getLogger("dentalvoice")

SYSTEM_PROMPT = """You are an expert dental AI assistant analyzing dentist-patient conversations.
Your task is to extract structured clinical information from voice transcripts.

EXTRACTION RULES:
1. Extract information if explicitly mentioned OR reasonably inferable from context
2. Interpret conversational language into clinical terms ("hurts", "aching", "sore" -> pain;
   "back tooth" -> posterior teeth / molars; "killing me" -> severe pain 8-9/10)
3. For missing information, use empty strings ("") or empty arrays ([])
4. Convert verbal pain descriptions to a 0-10 scale
5. Tooth numbers: "tooth 44", "tooth number 44" or "#44" MUST appear verbatim in
   chiefComplaint.location_detail; include quadrant and tooth type when given
6. Separate aggravating ("worse with", "triggered by") from relieving ("better with",
   "helped by") factors
7. If the speaker corrects themselves, use the corrected information
8. Record previous treatments (pain medication, antibiotics, dental visits, home remedies)
9. Medical history: conditions, medications with dosages, allergies, previous dental treatments
10. Personal history: smoking/alcohol/tobacco status (never/current/former; alcohol
    never/occasional/regular/heavy), other habits, oral hygiene routine
11. Clinical examination only if the dentist performs or mentions one
12. The transcript may mix English, Hindi and Spanish; answer in English

RESPOND ONLY WITH VALID JSON in this exact format:
{
  "chiefComplaint": {
    "primary_complaint": "", "patient_description": "", "pain_scale": 0,
    "location_detail": "", "onset_duration": "",
    "associated_symptoms": [], "triggers": []
  },
  "hopi": {
    "pain_characteristics": {"quality": "", "intensity": 0, "frequency": "", "duration": ""},
    "onset_details": {"when_started": "", "how_started": "", "precipitating_factors": []},
    "aggravating_factors": [], "relieving_factors": [], "associated_symptoms": [],
    "previous_episodes": "", "pattern_changes": "", "previous_treatments": []
  },
  "medicalHistory": {
    "medical_conditions": [], "current_medications": [], "allergies": [],
    "previous_dental_treatments": [], "family_medical_history": "", "additional_notes": ""
  },
  "personalHistory": {
    "smoking": {"status": "never", "details": ""},
    "alcohol": {"status": "never", "details": ""},
    "tobacco": {"status": "never", "type": [], "details": ""},
    "dietary_habits": [],
    "oral_hygiene": {"brushing_frequency": "", "flossing": "", "last_cleaning": ""},
    "other_habits": [], "occupation": "", "lifestyle_notes": ""
  },
  "clinicalExamination": {
    "extraoral_findings": [], "intraoral_findings": [], "oral_hygiene": "",
    "gingival_condition": "", "periodontal_status": "", "occlusion_notes": [],
    "additional_observations": ""
  },
  "confidence": 0,
  "auto_extracted": true
}

Omit medicalHistory, personalHistory and clinicalExamination when the conversation
does not discuss them.

CONFIDENCE SCORING:
- 90-100: clear, complete information with specific details
- 70-89: most key information present
- 50-69: basic information, many details missing
- 30-49: vague symptoms, limited information
- 0-29: very little relevant clinical information"""

REQUIRED_SECTIONS = ("chiefComplaint", "hopi")


def build_user_prompt(transcript: str, language: Optional[str] = None) -> str:
    prompt = (
        "Analyze this dentist-patient conversation and extract all relevant clinical data:\n\n"
        f"{transcript}\n\n"
        "Provide structured JSON output as specified."
    )
    if language:
        prompt += f"\nThe conversation language tag is {language}."
    return prompt


class AzureOpenAIClinicalAnalysisService(ClinicalAnalysisService):
    """Azure OpenAI implementation of ClinicalAnalysisService."""

    def __init__(self, client: Optional[AzureAIClient] = None):
        self._settings = get_settings()
        self._client = client or get_ai_client()
        logger.info(
            f"[ClinicalAnalysis] Initialized with Azure OpenAI deployment "
            f"{self._settings.azure_openai.deployment_name}"
        )

    async def analyze(self, transcript: str, language: Optional[str] = None) -> Dict[str, Any]:
        mode = "full" if language else "reduced"
        logger.info(f"🤖 [ClinicalAnalysis] Analyzing transcript ({len(transcript)} chars, {mode} mode)")
        try:
            analysis = await self._client.chat_json(
                build_user_prompt(transcript, language),
                system_prompt=SYSTEM_PROMPT,
                temperature=self._settings.azure_openai.temperature,
                max_tokens=self._settings.azure_openai.max_tokens,
            )
        except (json.JSONDecodeError, ValueError) as e:
            raise ClinicalAnalysisError("model returned invalid JSON", {"error": str(e)}) from e
        except Exception as e:
            raise ClinicalAnalysisError(str(e), {"error_type": type(e).__name__}) from e

        missing = [section for section in REQUIRED_SECTIONS if not isinstance(analysis.get(section), dict)]
        if missing:
            raise ClinicalAnalysisError(
                "invalid response structure: missing required fields", {"missing": missing}
            )

        analysis.setdefault("auto_extracted", True)
        analysis.setdefault("extraction_timestamp", datetime.utcnow().isoformat())
        logger.info(
            f"✅ [ClinicalAnalysis] Analysis complete with {analysis.get('confidence', 0)}% confidence"
        )
        return analysis
