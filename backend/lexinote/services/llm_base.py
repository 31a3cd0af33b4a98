"""
LexiNote Backend — Abstract LLM Vendor Adapter
================================================

What:  Base class for the three vendor adapters (OpenAI, Gemini, Anthropic).
How:   Template method. The base class renders the prompt, issues exactly one
       POST through the shared httpx.AsyncClient and converts every outcome
       into a TaskResponse. Subclasses only describe the vendor: endpoint URL,
       auth header, request envelope, and where the completion text lives in
       the reply JSON.
Who:   Instantiated once at startup (see ai_service.build_ai_service) and
       called by AIService.dispatch().

Contract:
    await adapter.run(task, provider) -> TaskResponse
        - never raises
        - one outbound request, no retries
        - HTTP status >= 400, transport failure or a malformed envelope all
          yield TaskResponse(success=False, error=<message>)

Adapters hold no per-call state; concurrent calls on one adapter are
independent.
"""

import logging
import time
import uuid
from abc import ABC, abstractmethod
from typing import Any, Dict

import httpx

from lexinote.exceptions import ProviderResponseError
from lexinote.schemas.ai import (
    AnalyzeHardWordsTask,
    FindAlternativesTask,
    ProviderConfig,
    SimplifyTask,
    TaskRequest,
    TaskResponse,
)
from lexinote.services.prompts import build_prompt

logger = logging.getLogger(__name__)

# Generation limits shared by all vendors
TEMPERATURE = 0.7
MAX_TOKENS = 1000


class LLMService(ABC):
    """
    One LLM vendor reachable over HTTP.

    Class attributes set by subclasses:
        vendor:    tag matched against ProviderConfig.vendor
        endpoint:  fixed vendor URL (Gemini formats the model into it)
    """

    vendor: str = ""
    endpoint: str = ""

    def __init__(self, http_client: httpx.AsyncClient, default_model: str = ""):
        """
        Args:
            http_client:   shared client; connection reuse comes from it
            default_model: used when the Provider Config has an empty model
        """
        self.http_client = http_client
        self.default_model = default_model

    # ── Vendor description (subclasses) ───────────────────────────────────

    @abstractmethod
    def build_url(self, model: str) -> str:
        """Full request URL for `model`."""
        ...

    @abstractmethod
    def build_headers(self, provider: ProviderConfig) -> Dict[str, str]:
        """Auth and content-type headers."""
        ...

    def build_params(self, provider: ProviderConfig) -> Dict[str, str]:
        """Query parameters; only Gemini authenticates this way."""
        return {}

    @abstractmethod
    def build_body(self, prompt: str, model: str) -> Dict[str, Any]:
        """Vendor-specific JSON envelope around a single user prompt."""
        ...

    @abstractmethod
    def extract_text(self, payload: Any) -> str:
        """
        Pull the first completion text out of the reply JSON.

        Raises:
            ProviderResponseError: an expected field is missing or has the wrong type.
        """
        ...

    # ── Task entry points ─────────────────────────────────────────────────

    async def simplify_text(self, text: str, provider: ProviderConfig) -> TaskResponse:
        return await self.run(SimplifyTask(text=text), provider)

    async def find_similar_words(
        self, word: str, context: str, provider: ProviderConfig
    ) -> TaskResponse:
        return await self.run(FindAlternativesTask(word=word, context=context), provider)

    async def analyze_hard_words(self, text: str, provider: ProviderConfig) -> TaskResponse:
        return await self.run(AnalyzeHardWordsTask(text=text), provider)

    async def run(self, task: TaskRequest, provider: ProviderConfig) -> TaskResponse:
        """Render the task prompt and send it."""
        return await self.complete(build_prompt(task), provider, task_kind=task.kind)

    async def complete(
        self,
        prompt: str,
        provider: ProviderConfig,
        task_kind: str = "prompt",
    ) -> TaskResponse:
        """
        Send one prompt to the vendor and wrap the outcome in a TaskResponse.

        Flow:
            1. Resolve model (provider.model or default_model)
            2. POST envelope with auth header
            3. Non-2xx → failure "Request failed with status code N"
            4. Decode JSON and extract the first completion text
        """
        call_id = str(uuid.uuid4())[:8]
        model = provider.model or self.default_model
        start_time = time.perf_counter()

        logger.info("[%s] %s %s request (model=%s)", call_id, self.vendor, task_kind, model)

        try:
            response = await self.http_client.post(
                self.build_url(model),
                params=self.build_params(provider),
                headers=self.build_headers(provider),
                json=self.build_body(prompt, model),
            )
            duration_ms = (time.perf_counter() - start_time) * 1000

            if response.is_error:
                # Built from the status only: the Gemini URL carries the key
                message = f"Request failed with status code {response.status_code}"
                logger.warning(
                    "[%s] %s returned HTTP %d after %.0fms",
                    call_id,
                    self.vendor,
                    response.status_code,
                    duration_ms,
                )
                return TaskResponse.fail(message)

            text = self.extract_text(response.json())

        except httpx.HTTPError as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            message = str(e) or type(e).__name__
            logger.warning(
                "[%s] %s transport error after %.0fms: %s",
                call_id,
                self.vendor,
                duration_ms,
                type(e).__name__,
            )
            return TaskResponse.fail(message)
        except ProviderResponseError as e:
            logger.warning("[%s] %s", call_id, e.message)
            return TaskResponse.fail(e.message)
        except ValueError as e:
            # Body was not JSON
            logger.warning("[%s] %s returned a non-JSON body: %s", call_id, self.vendor, e)
            return TaskResponse.fail(f"Invalid JSON in response from {self.vendor}")
        except Exception as e:
            logger.error(
                "[%s] Unexpected %s error: %s",
                call_id,
                self.vendor,
                str(e),
                exc_info=True,
            )
            return TaskResponse.fail(str(e) or "Unknown error occurred")

        logger.info(
            "[%s] %s %s completed in %.0fms, %d chars",
            call_id,
            self.vendor,
            task_kind,
            duration_ms,
            len(text),
        )
        return TaskResponse.ok(text)

    # ── Extraction helpers ────────────────────────────────────────────────

    def _field(self, container: Any, key: str, path: str) -> Any:
        """container[key], or ProviderResponseError naming `path`."""
        if not isinstance(container, dict) or key not in container:
            raise ProviderResponseError(self.vendor, path)
        return container[key]

    def _first(self, items: Any, path: str) -> Any:
        """items[0] for a non-empty list, or ProviderResponseError naming `path`."""
        if not isinstance(items, list) or not items:
            raise ProviderResponseError(self.vendor, path)
        return items[0]

    def _text(self, value: Any, path: str) -> str:
        if not isinstance(value, str):
            raise ProviderResponseError(self.vendor, path)
        return value

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(vendor='{self.vendor}', default_model='{self.default_model}')>"

