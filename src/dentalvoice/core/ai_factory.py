"""
AI client factory.

Central place where the clinical analysis adapter obtains its Azure OpenAI
client. Callers that may run without Azure OpenAI check
``settings.azure_openai.is_configured`` first.
"""

from __future__ import annotations

from .ai_client import AzureAIClient
from .config import get_settings
from .exceptions import ConfigurationError


def get_ai_client() -> AzureAIClient:
    """
    Get the default AI client for the application.

    Raises:
        ConfigurationError: if Azure OpenAI endpoint or key are missing
    """
    settings = get_settings()
    if not settings.azure_openai.is_configured:
        raise ConfigurationError(
            "Azure OpenAI is not configured",
            {"endpoint_set": bool(settings.azure_openai.endpoint)},
        )
    return AzureAIClient()


__all__ = ["get_ai_client", "AzureAIClient"]
