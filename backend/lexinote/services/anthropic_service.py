"""
LexiNote Backend — Anthropic Messages Adapter
===============================================

Request:
    POST https://api.anthropic.com/v1/messages
    x-api-key: <api_key>
    anthropic-version: 2023-06-01
    {"model": ..., "max_tokens": 1000,
     "messages": [{"role": "user", "content": prompt}]}

Reply text:
    content[0].text
"""

from typing import Any, Dict

from lexinote.schemas.ai import ProviderConfig, VendorType
from lexinote.services.llm_base import MAX_TOKENS, LLMService

ANTHROPIC_VERSION = "2023-06-01"


class AnthropicService(LLMService):
    """Adapter for the Anthropic Messages API."""

    vendor = VendorType.ANTHROPIC.value
    endpoint = "https://api.anthropic.com/v1/messages"

    def build_url(self, model: str) -> str:
        return self.endpoint

    def build_headers(self, provider: ProviderConfig) -> Dict[str, str]:
        return {
            "x-api-key": provider.api_key,
            "anthropic-version": ANTHROPIC_VERSION,
            "Content-Type": "application/json",
        }

    def build_body(self, prompt: str, model: str) -> Dict[str, Any]:
        return {
            "model": model,
            "max_tokens": MAX_TOKENS,
            "messages": [{"role": "user", "content": prompt}],
        }

    def extract_text(self, payload: Any) -> str:
        block = self._first(self._field(payload, "content", "content"), "content[0]")
        return self._text(self._field(block, "text", "content[0].text"), "content[0].text")
