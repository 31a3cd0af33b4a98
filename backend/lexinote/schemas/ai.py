"""
LexiNote Backend — AI Layer Value Types
=========================================

What:  Pydantic models for everything that flows through the AI layer:
       the Provider Config, the three task shapes, the TaskResponse contract,
       and the parsed shapes consumers build from a reply.
Who:   Vendor adapters, the dispatch facade, the response parser and the
       /api/ai routes.

Contract summary:
    dispatch(task, provider) -> TaskResponse
        TaskResponse(success=True,  data="<vendor text>")
        TaskResponse(success=False, error="<message>")

    Callers re-parse `data` themselves: a comma list for FindAlternatives,
    a {"hardWords": [...]} JSON object for AnalyzeHardWords.
"""

from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Provider Config
# ══════════════════════════════════════════════════════════════════════════


class VendorType(str, Enum):
    """Vendor tags with a registered adapter."""
    OPENAI = "openai"
    GEMINI = "gemini"
    ANTHROPIC = "anthropic"


class ProviderConfig(BaseModel):
    """
    Which vendor handles requests, with the credential and model to use.

    `vendor` is a free-form tag rather than a VendorType so that a config
    naming an unknown vendor still reaches the dispatch facade, which answers
    "Provider not supported" instead of failing validation.
    """
    model_config = ConfigDict(frozen=True)

    vendor: str = Field(description="Vendor tag: openai, gemini or anthropic")
    api_key: str = Field(default="", repr=False, description="Vendor API key")
    model: str = Field(default="", description="Model name; empty uses the vendor default")
    is_active: bool = Field(default=False, description="Whether this is the active provider")

    @field_validator("vendor")
    @classmethod
    def normalize_vendor(cls, v: str) -> str:
        return v.strip().lower()


# ══════════════════════════════════════════════════════════════════════════
# Task Requests
# ══════════════════════════════════════════════════════════════════════════


class SimplifyTask(BaseModel):
    """Rewrite `text` in simpler language."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["simplify"] = "simplify"
    text: str


class FindAlternativesTask(BaseModel):
    """Suggest 3-5 simpler words for `word` as used in `context`."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["find_alternatives"] = "find_alternatives"
    word: str
    context: str = ""


class AnalyzeHardWordsTask(BaseModel):
    """Find hard words in `text`, each with simpler alternatives."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["analyze_hard_words"] = "analyze_hard_words"
    text: str


TaskRequest = Annotated[
    Union[SimplifyTask, FindAlternativesTask, AnalyzeHardWordsTask],
    Field(discriminator="kind"),
]


# ══════════════════════════════════════════════════════════════════════════
# Task Response
# ══════════════════════════════════════════════════════════════════════════


class TaskResponse(BaseModel):
    """
    The single return contract of the AI layer.

    Exactly one of `data` / `error` is meaningful, depending on `success`.
    """
    success: bool = Field(description="Whether the vendor returned a completion")
    data: Optional[str] = Field(default=None, description="Completion text on success")
    error: Optional[str] = Field(default=None, description="Error message on failure")

    @classmethod
    def ok(cls, data: str) -> "TaskResponse":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> "TaskResponse":
        return cls(success=False, error=error or "Unknown error occurred")


# ══════════════════════════════════════════════════════════════════════════
# Parsed Consumer Shapes
# ══════════════════════════════════════════════════════════════════════════


class WordSuggestion(BaseModel):
    """Simpler alternatives for one word, parsed from a FindAlternatives reply."""
    original: str
    suggestions: List[str] = Field(default_factory=list)
    context: str = ""


class AnalyzedWord(BaseModel):
    """
    One entry of the `hardWords` array the analyzer prompt asks for.

    Models sometimes send `null` for the optional fields; that reads as absent.
    """
    word: str
    alternatives: List[str] = Field(default_factory=list)
    context: str = ""

    @field_validator("alternatives", mode="before")
    @classmethod
    def null_alternatives(cls, v):
        return [] if v is None else v

    @field_validator("context", mode="before")
    @classmethod
    def null_context(cls, v):
        return "" if v is None else v


class HardWordsAnalysis(BaseModel):
    """The `{"hardWords": [...]}` object an AnalyzeHardWords reply must contain."""
    model_config = ConfigDict(populate_by_name=True)

    hard_words: List[AnalyzedWord] = Field(default_factory=list, alias="hardWords")


class HardWord(BaseModel):
    """
    Editor projection of an AnalyzedWord.

    position:   first index of `word` in the analysed text, -1 if absent
    difficulty: fixed at 1; the analyzer prompt does not grade difficulty
    """
    word: str
    position: int
    context: str = ""
    suggestions: List[str] = Field(default_factory=list)
    difficulty: int = 1


# ══════════════════════════════════════════════════════════════════════════
# Route Bodies: /api/ai/*
# ══════════════════════════════════════════════════════════════════════════


class SimplifyRequest(BaseModel):
    text: str = Field(description="Text to simplify")
    provider: Optional[ProviderConfig] = Field(
        default=None,
        description="Explicit provider; omit to use the active provider from settings",
    )


class AlternativesRequest(BaseModel):
    word: str = Field(description="The word to replace")
    context: str = Field(default="", description="Sentence the word appears in")
    provider: Optional[ProviderConfig] = None


class AnalyzeRequest(BaseModel):
    text: str = Field(description="Text to analyse for hard words")
    provider: Optional[ProviderConfig] = None


class AlternativesResponse(TaskResponse, WordSuggestion):
    """
    TaskResponse plus the WordSuggestion parsed out of `data`.

    `suggestions` is empty whenever success is false.
    """


class AnalyzeResponse(TaskResponse):
    """TaskResponse plus the hard words parsed out of `data`."""
    hard_words: List[HardWord] = Field(default_factory=list)
