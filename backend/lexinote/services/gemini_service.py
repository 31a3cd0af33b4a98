"""
LexiNote Backend — Google Gemini generateContent Adapter
==========================================================

Request:
    POST https://generativelanguage.googleapis.com/v1beta/models/<model>:generateContent?key=<api_key>
    {"contents": [{"parts": [{"text": prompt}]}],
     "generationConfig": {"temperature": 0.7, "topK": 40, "topP": 0.95,
                          "maxOutputTokens": 1000}}

Reply text:
    candidates[0].content.parts[0].text

Gemini authenticates through the `key` query parameter instead of a header,
so the request URL must never be logged or echoed into an error message.
A candidate stopped by safety filters carries no `content.parts`; that is
reported as a missing field.
"""

from typing import Any, Dict

from lexinote.schemas.ai import ProviderConfig, VendorType
from lexinote.services.llm_base import MAX_TOKENS, TEMPERATURE, LLMService

# Sampling settings from the Gemini quickstart
TOP_K = 40
TOP_P = 0.95


class GeminiService(LLMService):
    """Adapter for the Gemini v1beta generateContent endpoint."""

    vendor = VendorType.GEMINI.value
    endpoint = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

    def build_url(self, model: str) -> str:
        return self.endpoint.format(model=model)

    def build_headers(self, provider: ProviderConfig) -> Dict[str, str]:
        return {"Content-Type": "application/json"}

    def build_params(self, provider: ProviderConfig) -> Dict[str, str]:
        return {"key": provider.api_key}

    def build_body(self, prompt: str, model: str) -> Dict[str, Any]:
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": TEMPERATURE,
                "topK": TOP_K,
                "topP": TOP_P,
                "maxOutputTokens": MAX_TOKENS,
            },
        }

    def extract_text(self, payload: Any) -> str:
        candidate = self._first(self._field(payload, "candidates", "candidates"), "candidates[0]")
        content = self._field(candidate, "content", "candidates[0].content")
        part = self._first(
            self._field(content, "parts", "candidates[0].content.parts"),
            "candidates[0].content.parts[0]",
        )
        return self._text(
            self._field(part, "text", "candidates[0].content.parts[0].text"),
            "candidates[0].content.parts[0].text",
        )
