"""
Simple Azure OpenAI client wrapper for the clinical analysis calls.

Design goals:
- Use Azure OpenAI only (via AsyncAzureOpenAI)
- No proxy usage
- JSON responses for structured extraction

Retries and fallbacks are handled by the extraction tiers, not here.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Sequence

from openai import AsyncAzureOpenAI

from .config import get_settings
from .exceptions import ConfigurationError


class AzureAIClient:
    """
    Thin wrapper around AsyncAzureOpenAI for chat completions.

    This client:
    - Connects directly to Azure OpenAI (no proxy)
    - Uses the deployment name from configuration
    """

    def __init__(
        self,
        endpoint: Optional[str] = None,
        api_key: Optional[str] = None,
        api_version: Optional[str] = None,
        deployment_name: Optional[str] = None,
    ) -> None:
        """
        Initialize AzureAIClient.

        If arguments are omitted, values are loaded from application settings.
        """
        settings = get_settings()

        endpoint = endpoint or settings.azure_openai.endpoint
        api_key = api_key or settings.azure_openai.api_key
        api_version = api_version or settings.azure_openai.api_version
        deployment_name = deployment_name or settings.azure_openai.deployment_name

        if not endpoint or not api_key:
            raise ConfigurationError(
                "Azure OpenAI endpoint and API key must be configured. "
                "Set AZURE_OPENAI_ENDPOINT and AZURE_OPENAI_API_KEY."
            )

        if not deployment_name:
            raise ConfigurationError(
                "Azure OpenAI deployment name is required. "
                "Set AZURE_OPENAI_DEPLOYMENT_NAME."
            )

        # Normalize endpoint: Azure SDK does not expect trailing slash
        self._deployment_name = deployment_name
        self._client = AsyncAzureOpenAI(
            api_key=api_key,
            api_version=api_version,
            azure_endpoint=endpoint.rstrip("/"),
        )

    @property
    def deployment_name(self) -> str:
        return self._deployment_name

    async def chat(
        self,
        messages: Sequence[Dict[str, str]],
        *,
        model: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        **kwargs: Any,
    ):
        """
        Generic chat completion helper.

        Args:
            messages: OpenAI chat messages list.
            model: Optional deployment name override. Defaults to configured deployment.
            temperature: Sampling temperature.
            max_tokens: Optional max tokens for the response.
            **kwargs: Passed directly to Azure OpenAI SDK.
        """
        deployment = model or self._deployment_name
        return await self._client.chat.completions.create(
            model=deployment,
            messages=list(messages),
            temperature=temperature,
            max_tokens=max_tokens,
            **kwargs,
        )

    async def chat_json(
        self,
        user_prompt: str,
        *,
        system_prompt: Optional[str] = None,
        temperature: float = 0.2,
        max_tokens: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Chat completion constrained to a JSON object, parsed into a dict.

        Raises:
            ValueError: if the model answers with something that is not a JSON object
        """
        messages: List[Dict[str, str]] = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": user_prompt})

        response = await self.chat(
            messages,
            temperature=temperature,
            max_tokens=max_tokens,
            response_format={"type": "json_object"},
        )
        content = (response.choices[0].message.content or "").strip()
        parsed = json.loads(content)
        if not isinstance(parsed, dict):
            raise ValueError("Expected a JSON object from the model")
        return parsed


__all__ = ["AzureAIClient"]
