"""
LexiNote Backend — Pydantic Request/Response Schemas
======================================================

What:  Pydantic models defining the API contract for notes, hard-word history,
       provider settings, errors and health.
How:   FastAPI validates request bodies and serializes responses with these
       models, and generates the OpenAPI document from them.

Schemas are separate from the SQLAlchemy models so the API never exposes
internal columns (for example the raw API key of a provider).
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Notes
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """
    Body of POST /api/notes and PUT /api/notes/{id}.

    `id` is optional on create; the server generates a UUID when omitted.
    On PUT the path id wins.
    """
    id: Optional[str] = Field(default=None, max_length=36, description="Client-supplied note id")
    title: str = Field(description="Note title")
    content: str = Field(default="", description="Note body")
    hard_words: List[str] = Field(default_factory=list, description="Words flagged as hard")
    tags: List[str] = Field(default_factory=list, description="Free-form tags")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Note title must not be empty")
        return v.strip()


class NoteResponse(BaseModel):
    """Full representation of a stored note."""
    id: str
    title: str
    content: str
    created_at: datetime
    updated_at: datetime
    hard_words: List[str]
    tags: List[str]

    model_config = {"from_attributes": True}


class NoteListResponse(BaseModel):
    """All notes, most recently updated first."""
    notes: List[NoteResponse] = Field(description="Notes ordered by updated_at descending")
    total_count: int = Field(description="Number of notes returned")


# ══════════════════════════════════════════════════════════════════════════
# Hard-Word Replacement History
# ══════════════════════════════════════════════════════════════════════════


class HardWordReplacementCreate(BaseModel):
    word: str = Field(description="The original hard word")
    replacement: str = Field(description="The simpler word the user picked")
    context: str = Field(default="", description="Sentence the word appeared in")


class HardWordReplacementResponse(BaseModel):
    word: str
    replacement: str
    context: str
    created_at: datetime

    model_config = {"from_attributes": True}


# ══════════════════════════════════════════════════════════════════════════
# Provider Settings
# ══════════════════════════════════════════════════════════════════════════


class ProviderUpsert(BaseModel):
    """Body of PUT /api/providers/{vendor}."""
    api_key: str = Field(description="Vendor API key")
    model: str = Field(default="", description="Model name; empty uses the vendor default")
    is_active: bool = Field(default=False, description="Make this the active provider")


class ProviderResponse(BaseModel):
    """
    A stored provider as shown to clients.

    The API key is never echoed back: only its last four characters.
    """
    vendor: str
    model: str
    is_active: bool
    has_api_key: bool
    api_key_hint: str = Field(default="", description="Last four characters of the key, e.g. '…a1b2'")


# ══════════════════════════════════════════════════════════════════════════
# Error & Health
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "note with ID '7d1e...' was not found",
            "details": {"resource": "note"},
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and dependency status."""
    status: str = Field(description="Overall service status: healthy, degraded, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    active_provider: Optional[str] = Field(
        default=None,
        description="Vendor tag of the active AI provider, null when none is configured",
    )
    uptime_seconds: float = Field(description="Seconds since service started")
