"""
LexiNote Backend — Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions for the different error scenarios.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) turn the ones that
       reach the HTTP layer into structured JSON error responses.
Who:   Raised by services; caught by global handlers or, for the AI layer,
       by the adapter / dispatch boundary.

Exception Hierarchy:
    LexiNoteError (base)
    ├── ValidationError          → 400 Bad Request
    ├── NotFoundError            → 404 Not Found
    ├── DatabaseError            → 500 Internal Server Error
    ├── ConfigurationError       → TaskResponse(success=False) — no network call made
    ├── ProviderResponseError    → TaskResponse(success=False) — vendor envelope malformed
    └── ResponseParseError       → TaskResponse(success=False) — reply text not parseable

The last three never become HTTP errors. AI calls always answer with a
TaskResponse, so callers check `success` before reading `data`.
"""

from typing import Any, Dict, Optional


class LexiNoteError(Exception):
    """
    Base exception for all LexiNote application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(LexiNoteError):
    """
    Raised when client input fails a business rule.

    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Note title must not be empty",
            "details": {"field": "title"}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(LexiNoteError):
    """
    Raised when a requested resource does not exist.

    When:    GET /api/notes/{id} with an unknown id, activating a vendor that
             has no saved Provider Config.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(LexiNoteError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; the SQL error
    is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ConfigurationError(LexiNoteError):
    """
    Raised before dispatch when no provider is configured or its API key is empty.

    Detected before any network request is issued. The dispatch facade turns
    it into TaskResponse(success=False, error=message).
    """

    def __init__(
        self,
        message: str = "No AI provider configured",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ProviderResponseError(LexiNoteError):
    """
    Raised by a vendor adapter when the reply JSON lacks the expected fields.

    Example: an OpenAI reply with an empty `choices` array, or a Gemini
    candidate blocked by safety filters (no `content.parts`).
    """

    def __init__(
        self,
        vendor: str,
        missing: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"Unexpected response from {vendor}: missing {missing}"
        ctx = context or {}
        ctx["vendor"] = vendor
        ctx["missing"] = missing
        super().__init__(message=message, context=ctx)
        self.vendor = vendor
        self.missing = missing


class ResponseParseError(LexiNoteError):
    """
    Raised when the vendor's text reply does not match the shape the caller
    asked for (comma list or `{"hardWords": [...]}` JSON).
    """

    def __init__(
        self,
        message: str = "Failed to parse AI response",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
