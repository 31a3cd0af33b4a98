"""
LexiNote Backend — Vendor Reply Parsing
=========================================

What:  Turns the raw text of a successful TaskResponse into structured data.
Who:   /api/ai routes, after AIService.dispatch() returned success=True.

Two shapes are expected, depending on the task that produced the text:

    FindAlternatives  → "calm, quiet, peaceful"
    AnalyzeHardWords  → {"hardWords": [{"word": ..., "alternatives": [...], "context": ...}]}

The JSON shape is only requested by prompt wording, so parse_hard_words()
validates it and raises ResponseParseError when the vendor deviates.
"""

import json
import logging
import re
from typing import List

from pydantic import ValidationError as PydanticValidationError

from lexinote.exceptions import ResponseParseError
from lexinote.schemas.ai import HardWord, HardWordsAnalysis, WordSuggestion

logger = logging.getLogger(__name__)

# First ```json ... ``` block, possibly preceded or followed by prose
_CODE_FENCE = re.compile(r"```[a-zA-Z]*[ \t]*\n?(.*?)\n?```", re.DOTALL)


def parse_word_suggestions(text: str) -> List[str]:
    """
    Split a comma-separated reply into words.

    Whitespace is trimmed and empty entries dropped:
        "calm, quiet, peaceful" → ["calm", "quiet", "peaceful"]
        " calm,, quiet ,"       → ["calm", "quiet"]
    """
    return [word.strip() for word in text.split(",") if word.strip()]


def to_word_suggestion(word: str, context: str, text: str) -> WordSuggestion:
    """Wrap a FindAlternatives reply for `word` as a WordSuggestion."""
    return WordSuggestion(original=word, suggestions=parse_word_suggestions(text), context=context)


def _json_candidate(text: str) -> str:
    """
    The part of a reply that should hold the JSON object.

    Order: the first fenced block, else the span from the first `{` to the
    last `}`, else the whole reply.
    """
    stripped = text.strip()
    match = _CODE_FENCE.search(stripped)
    if match:
        return match.group(1).strip()
    start, end = stripped.find("{"), stripped.rfind("}")
    if start != -1 and end > start:
        return stripped[start : end + 1]
    return stripped


def parse_hard_words(text: str) -> HardWordsAnalysis:
    """
    Parse an AnalyzeHardWords reply.

    Accepts the JSON object bare, inside a Markdown code fence, or surrounded
    by prose. Requires a top-level `hardWords` array whose entries each carry
    a string `word`; `null` alternatives or context read as empty.

    Raises:
        ResponseParseError: not JSON, not an object, no `hardWords` array,
            or an entry of the wrong shape.
    """
    try:
        payload = json.loads(_json_candidate(text))
    except json.JSONDecodeError as e:
        logger.warning("Hard-words reply is not valid JSON: %s", e)
        raise ResponseParseError(context={"reason": "invalid_json"})

    if not isinstance(payload, dict) or not isinstance(payload.get("hardWords"), list):
        logger.warning("Hard-words reply has no hardWords array")
        raise ResponseParseError(context={"reason": "missing_hardWords"})

    try:
        return HardWordsAnalysis.model_validate(payload)
    except PydanticValidationError as e:
        logger.warning("Hard-words reply entries are malformed: %d errors", e.error_count())
        raise ResponseParseError(context={"reason": "invalid_entry"})


def to_hard_words(analysis: HardWordsAnalysis, text: str) -> List[HardWord]:
    """
    Project analysed words onto the editor's HardWord shape.

    `position` is the first occurrence of the word in `text` (-1 when the
    vendor returned a word that is not literally present).
    """
    return [
        HardWord(
            word=item.word,
            position=text.find(item.word),
            context=item.context,
            suggestions=list(item.alternatives),
        )
        for item in analysis.hard_words
    ]
