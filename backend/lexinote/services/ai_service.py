"""
LexiNote Backend — AI Dispatch Facade
=======================================

What:  Routes each task to the adapter registered for the provider's vendor tag.
How:   A fixed vendor → adapter mapping built once at startup. One dictionary
       lookup per call, then verbatim delegation.
Who:   /api/ai routes (through the get_ai_service dependency) and any other
       consumer holding an AIService reference.

Dispatch rules, checked in order before any network call:
    1. provider is None            → "No AI provider configured"
    2. vendor has no adapter       → "Provider not supported"
    3. api_key empty / whitespace  → "API key is not configured for provider '<vendor>'"

Otherwise the adapter's TaskResponse is returned unchanged.
"""

import logging
from typing import Dict, Iterable, List, Optional

import httpx

from lexinote.config import settings
from lexinote.exceptions import ConfigurationError
from lexinote.schemas.ai import (
    AnalyzeHardWordsTask,
    FindAlternativesTask,
    ProviderConfig,
    SimplifyTask,
    TaskRequest,
    TaskResponse,
)
from lexinote.services.anthropic_service import AnthropicService
from lexinote.services.gemini_service import GeminiService
from lexinote.services.llm_base import LLMService
from lexinote.services.openai_service import OpenAIService

logger = logging.getLogger(__name__)

PROVIDER_NOT_SUPPORTED = "Provider not supported"


class AIService:
    """
    Stateless routing table from vendor tag to LLMService.

    Example:
        ai = AIService([OpenAIService(client, "gpt-3.5-turbo")])
        response = await ai.dispatch(SimplifyTask(text="..."), provider)
        if response.success:
            print(response.data)
    """

    def __init__(self, adapters: Iterable[LLMService]):
        self._adapters: Dict[str, LLMService] = {adapter.vendor: adapter for adapter in adapters}

    @property
    def vendors(self) -> List[str]:
        """Vendor tags with a registered adapter."""
        return sorted(self._adapters)

    def adapter_for(self, vendor: str) -> Optional[LLMService]:
        return self._adapters.get(vendor)

    async def dispatch(self, task: TaskRequest, provider: Optional[ProviderConfig]) -> TaskResponse:
        """
        Send `task` through the adapter matching `provider.vendor`.

        Never raises: configuration problems and unknown vendors come back
        as TaskResponse(success=False).
        """
        if provider is None:
            return self._config_failure(ConfigurationError("No AI provider configured"))

        adapter = self._adapters.get(provider.vendor)
        if adapter is None:
            logger.warning("Dispatch rejected: no adapter for vendor '%s'", provider.vendor)
            return TaskResponse.fail(PROVIDER_NOT_SUPPORTED)

        if not provider.api_key.strip():
            return self._config_failure(
                ConfigurationError(
                    f"API key is not configured for provider '{provider.vendor}'",
                    context={"vendor": provider.vendor},
                )
            )

        return await adapter.run(task, provider)

    async def simplify_text(self, text: str, provider: Optional[ProviderConfig]) -> TaskResponse:
        return await self.dispatch(SimplifyTask(text=text), provider)

    async def find_similar_words(
        self, word: str, context: str, provider: Optional[ProviderConfig]
    ) -> TaskResponse:
        return await self.dispatch(FindAlternativesTask(word=word, context=context), provider)

    async def analyze_hard_words(
        self, text: str, provider: Optional[ProviderConfig]
    ) -> TaskResponse:
        return await self.dispatch(AnalyzeHardWordsTask(text=text), provider)

    @staticmethod
    def _config_failure(error: ConfigurationError) -> TaskResponse:
        logger.warning("Dispatch rejected: %s", error.message)
        return TaskResponse.fail(error.message)


def build_ai_service(http_client: httpx.AsyncClient) -> AIService:
    """
    Construct the facade with the three vendor adapters.

    Called once from the application lifespan; the adapters share `http_client`.
    """
    return AIService(
        [
            OpenAIService(http_client, settings.default_model_for(OpenAIService.vendor)),
            GeminiService(http_client, settings.default_model_for(GeminiService.vendor)),
            AnthropicService(http_client, settings.default_model_for(AnthropicService.vendor)),
        ]
    )
