"""
LexiNote Backend — OpenAI Chat Completions Adapter
====================================================

Request:
    POST https://api.openai.com/v1/chat/completions
    Authorization: Bearer <api_key>
    {"model": ..., "messages": [{"role": "user", "content": prompt}],
     "temperature": 0.7, "max_tokens": 1000}

Reply text:
    choices[0].message.content
"""

from typing import Any, Dict

from lexinote.schemas.ai import ProviderConfig, VendorType
from lexinote.services.llm_base import MAX_TOKENS, TEMPERATURE, LLMService


class OpenAIService(LLMService):
    """Adapter for OpenAI-compatible chat completion endpoints."""

    vendor = VendorType.OPENAI.value
    endpoint = "https://api.openai.com/v1/chat/completions"

    def build_url(self, model: str) -> str:
        return self.endpoint

    def build_headers(self, provider: ProviderConfig) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {provider.api_key}",
            "Content-Type": "application/json",
        }

    def build_body(self, prompt: str, model: str) -> Dict[str, Any]:
        return {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": TEMPERATURE,
            "max_tokens": MAX_TOKENS,
        }

    def extract_text(self, payload: Any) -> str:
        choice = self._first(self._field(payload, "choices", "choices"), "choices[0]")
        message = self._field(choice, "message", "choices[0].message")
        return self._text(
            self._field(message, "content", "choices[0].message.content"),
            "choices[0].message.content",
        )
