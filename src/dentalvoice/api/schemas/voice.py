"""
Schemas for the voice transcript endpoints.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class ProcessGlobalTranscriptResponse(BaseModel):
    """Processed consultation transcript as returned to the recording client."""

    success: bool = Field(True, description="Operation success status")
    processedContent: Dict[str, Any] = Field(..., description="Structured clinical sections")
    toothDiagnoses: List[Dict[str, Any]] = Field(
        default_factory=list, description="Per-tooth diagnosis records"
    )
    message: str = Field("", description="Response message")
