"""
LexiNote Backend — Vendor Adapter Unit Tests (Mocked HTTP)
============================================================

What:  Tests for the OpenAI, Gemini and Anthropic adapters.
How:   The adapters share an httpx.AsyncClient routed through VendorStub,
       so the exact outbound request can be inspected and any reply forced.

What we test:
    ✅ Every task kind succeeds against every vendor's reply envelope
    ✅ URL, auth headers and request body match each vendor's API
    ✅ Empty model falls back to the vendor default
    ✅ HTTP errors, transport errors, non-JSON and malformed envelopes
       come back as TaskResponse(success=False), never as exceptions
    ❌ Real API calls
"""

import httpx
import pytest

from lexinote.schemas.ai import (
    AnalyzeHardWordsTask,
    FindAlternativesTask,
    SimplifyTask,
)
from lexinote.services.anthropic_service import ANTHROPIC_VERSION, AnthropicService
from lexinote.services.gemini_service import GeminiService
from lexinote.services.openai_service import OpenAIService
from lexinote.services.prompts import build_prompt

VENDORS = ["openai", "gemini", "anthropic"]

TASKS = [
    SimplifyTask(text="The ramifications were unforeseen."),
    FindAlternativesTask(word="serene", context="The lake was serene at dawn."),
    AnalyzeHardWordsTask(text="Her loquacious colleague was ubiquitous."),
]


class TestEveryTaskOnEveryVendor:
    """A valid reply envelope yields success with the completion text."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("vendor", VENDORS)
    @pytest.mark.parametrize("task", TASKS, ids=lambda t: t.kind)
    async def test_success_returns_completion_text(
        self, ai_service, vendor_stub, make_provider, vendor, task
    ):
        vendor_stub.reply_text = "calm, quiet, peaceful"

        result = await ai_service.dispatch(task, make_provider(vendor))

        assert result.success is True
        assert result.data == "calm, quiet, peaceful"
        assert result.error is None
        assert vendor_stub.call_count == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("vendor", VENDORS)
    async def test_prompt_is_sent_verbatim(self, ai_service, vendor_stub, make_provider, vendor):
        task = FindAlternativesTask(word="serene", context="The lake was serene at dawn.")

        await ai_service.dispatch(task, make_provider(vendor))

        body = vendor_stub.last_json()
        if vendor == "gemini":
            sent = body["contents"][0]["parts"][0]["text"]
        else:
            sent = body["messages"][0]["content"]
        assert sent == build_prompt(task)
        assert '"serene"' in sent


class TestOpenAIRequest:

    @pytest.mark.asyncio
    async def test_request_shape(self, http_client, vendor_stub, make_provider):
        service = OpenAIService(http_client, default_model="gpt-3.5-turbo")

        await service.simplify_text("Hello", make_provider("openai", api_key="sk-abc"))

        request = vendor_stub.last_request
        assert request.method == "POST"
        assert (request.url.host, request.url.path) == ("api.openai.com", "/v1/chat/completions")
        assert request.headers["Authorization"] == "Bearer sk-abc"
        assert request.headers["Content-Type"] == "application/json"

        body = vendor_stub.last_json()
        assert body["model"] == "gpt-3.5-turbo"
        assert body["temperature"] == 0.7
        assert body["max_tokens"] == 1000
        assert body["messages"][0]["role"] == "user"

    @pytest.mark.asyncio
    async def test_provider_model_overrides_default(self, http_client, vendor_stub, make_provider):
        service = OpenAIService(http_client, default_model="gpt-3.5-turbo")

        await service.simplify_text("Hello", make_provider("openai", model="gpt-4o-mini"))

        assert vendor_stub.last_json()["model"] == "gpt-4o-mini"


class TestGeminiRequest:

    @pytest.mark.asyncio
    async def test_request_shape(self, http_client, vendor_stub, make_provider):
        service = GeminiService(http_client, default_model="gemini-pro")

        await service.simplify_text("Hello", make_provider("gemini", api_key="g-key"))

        request = vendor_stub.last_request
        assert request.url.host == "generativelanguage.googleapis.com"
        assert request.url.path == "/v1beta/models/gemini-pro:generateContent"
        assert request.url.params["key"] == "g-key"
        assert "Authorization" not in request.headers
        assert request.headers["Content-Type"] == "application/json"

        body = vendor_stub.last_json()
        assert body["generationConfig"] == {
            "temperature": 0.7,
            "topK": 40,
            "topP": 0.95,
            "maxOutputTokens": 1000,
        }

    @pytest.mark.asyncio
    async def test_model_goes_into_url(self, http_client, vendor_stub, make_provider):
        service = GeminiService(http_client, default_model="gemini-pro")

        await service.simplify_text("Hello", make_provider("gemini", model="gemini-1.5-flash"))

        assert vendor_stub.last_request.url.path == "/v1beta/models/gemini-1.5-flash:generateContent"

    @pytest.mark.asyncio
    async def test_error_message_does_not_leak_key(self, http_client, vendor_stub, make_provider):
        service = GeminiService(http_client, default_model="gemini-pro")
        vendor_stub.status_code = 403

        result = await service.simplify_text("Hello", make_provider("gemini", api_key="secret-g-key"))

        assert result.success is False
        assert "secret-g-key" not in result.error

    @pytest.mark.asyncio
    async def test_blocked_candidate_is_a_failure(self, http_client, vendor_stub, make_provider):
        """Safety-blocked candidates carry no content.parts."""
        service = GeminiService(http_client, default_model="gemini-pro")
        vendor_stub.raw_json = {"candidates": [{"finishReason": "SAFETY"}]}

        result = await service.simplify_text("Hello", make_provider("gemini"))

        assert result.success is False
        assert result.error == "Unexpected response from gemini: missing candidates[0].content"


class TestAnthropicRequest:

    @pytest.mark.asyncio
    async def test_request_shape(self, http_client, vendor_stub, make_provider):
        service = AnthropicService(http_client, default_model="claude-3-sonnet-20240229")

        await service.simplify_text("Hello", make_provider("anthropic", api_key="ak-123"))

        request = vendor_stub.last_request
        assert (request.url.host, request.url.path) == ("api.anthropic.com", "/v1/messages")
        assert request.headers["x-api-key"] == "ak-123"
        assert request.headers["anthropic-version"] == ANTHROPIC_VERSION == "2023-06-01"
        assert request.headers["Content-Type"] == "application/json"

        body = vendor_stub.last_json()
        assert body["model"] == "claude-3-sonnet-20240229"
        assert body["max_tokens"] == 1000
        assert "temperature" not in body


class TestFailuresBecomeTaskResponses:
    """No adapter failure escapes as an exception."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("vendor", VENDORS)
    async def test_network_failure(self, ai_service, vendor_stub, make_provider, vendor):
        vendor_stub.error = httpx.ConnectError("Connection refused")

        result = await ai_service.simplify_text("Hello", make_provider(vendor))

        assert result.success is False
        assert result.data is None
        assert result.error == "Connection refused"
        assert vendor_stub.call_count == 1

    @pytest.mark.asyncio
    async def test_timeout_without_message_uses_exception_name(
        self, ai_service, vendor_stub, make_provider
    ):
        vendor_stub.error = httpx.ReadTimeout("")

        result = await ai_service.simplify_text("Hello", make_provider("openai"))

        assert result.success is False
        assert result.error == "ReadTimeout"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [401, 429, 500, 503])
    async def test_http_error_status(self, ai_service, vendor_stub, make_provider, status):
        vendor_stub.status_code = status

        result = await ai_service.simplify_text("Hello", make_provider("anthropic"))

        assert result.success is False
        assert result.error == f"Request failed with status code {status}"
        assert vendor_stub.call_count == 1

    @pytest.mark.asyncio
    async def test_non_json_body(self, ai_service, vendor_stub, make_provider):
        vendor_stub.raw_body = b"<html>Bad Gateway</html>"

        result = await ai_service.simplify_text("Hello", make_provider("openai"))

        assert result.success is False
        assert result.error == "Invalid JSON in response from openai"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "vendor,payload,missing",
        [
            ("openai", {"choices": []}, "choices[0]"),
            ("openai", {"choices": [{"message": {"content": None}}]}, "choices[0].message.content"),
            ("gemini", {"candidates": [{"content": {"parts": []}}]}, "candidates[0].content.parts[0]"),
            ("anthropic", {"content": [{"type": "text"}]}, "content[0].text"),
            ("anthropic", {"type": "error"}, "content"),
        ],
    )
    async def test_malformed_envelope(
        self, ai_service, vendor_stub, make_provider, vendor, payload, missing
    ):
        vendor_stub.raw_json = payload

        result = await ai_service.simplify_text("Hello", make_provider(vendor))

        assert result.success is False
        assert result.error == f"Unexpected response from {vendor}: missing {missing}"
