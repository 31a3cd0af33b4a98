"""
LexiNote Backend — AI Task Routes
===================================

What:  POST /api/ai/simplify, /api/ai/alternatives and /api/ai/analyze.
How:   Resolve the provider (explicit body field, else the active provider
       from settings), dispatch through AIService, then parse the reply
       for the two structured tasks.
Who:   The note editor: "Simplify" button, word tap, and the hard-word scan.

These endpoints always answer HTTP 200. Whether the vendor produced a
usable reply is carried by `success` / `error` in the body, the same
contract AIService.dispatch() returns.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from lexinote.database import get_db_session
from lexinote.exceptions import ResponseParseError
from lexinote.schemas.ai import (
    AlternativesRequest,
    AlternativesResponse,
    AnalyzeRequest,
    AnalyzeResponse,
    ProviderConfig,
    SimplifyRequest,
    TaskResponse,
)
from lexinote.services.ai_service import AIService
from lexinote.services.provider_service import provider_service
from lexinote.services.response_parser import (
    parse_hard_words,
    to_hard_words,
    to_word_suggestion,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ai", tags=["AI"])


def get_ai_service(request: Request) -> AIService:
    """The facade built in the application lifespan."""
    return request.app.state.ai_service


async def _resolve_provider(
    explicit: Optional[ProviderConfig],
    db: AsyncSession,
) -> Optional[ProviderConfig]:
    if explicit is not None:
        return explicit
    return await provider_service.get_active_provider(db)


@router.post(
    "/simplify",
    response_model=TaskResponse,
    summary="Rewrite text in simpler language",
)
async def simplify(
    body: SimplifyRequest,
    db: AsyncSession = Depends(get_db_session),
    ai: AIService = Depends(get_ai_service),
) -> TaskResponse:
    provider = await _resolve_provider(body.provider, db)
    return await ai.simplify_text(body.text, provider)


@router.post(
    "/alternatives",
    response_model=AlternativesResponse,
    summary="Suggest simpler words for a word in context",
)
async def alternatives(
    body: AlternativesRequest,
    db: AsyncSession = Depends(get_db_session),
    ai: AIService = Depends(get_ai_service),
) -> AlternativesResponse:
    """
    `suggestions` is the comma-separated reply split into words, e.g.
    "calm, quiet, peaceful" → ["calm", "quiet", "peaceful"].
    """
    provider = await _resolve_provider(body.provider, db)
    result = await ai.find_similar_words(body.word, body.context, provider)

    reply = result.data if result.success and result.data else ""
    suggestion = to_word_suggestion(body.word, body.context, reply)
    return AlternativesResponse(**result.model_dump(), **suggestion.model_dump())


@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    summary="Find hard words in a text",
)
async def analyze(
    body: AnalyzeRequest,
    db: AsyncSession = Depends(get_db_session),
    ai: AIService = Depends(get_ai_service),
) -> AnalyzeResponse:
    """
    A reply that is not the requested {"hardWords": [...]} object turns the
    response into success=false with "Failed to parse AI response" and no data.
    """
    provider = await _resolve_provider(body.provider, db)
    result = await ai.analyze_hard_words(body.text, provider)
    if not result.success:
        return AnalyzeResponse(**result.model_dump())

    try:
        analysis = parse_hard_words(result.data or "")
    except ResponseParseError as e:
        logger.warning(
            "Analyze reply rejected: %s (%s, %d chars)",
            e.message,
            e.context.get("reason"),
            len(result.data or ""),
        )
        return AnalyzeResponse.fail(e.message)

    return AnalyzeResponse(
        success=True,
        data=result.data,
        hard_words=to_hard_words(analysis, body.text),
    )
