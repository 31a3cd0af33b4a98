"""
LexiNote Backend — Application Package Initializer
====================================================

What: Marks the `lexinote` directory as a Python package.
Who:  Used by uvicorn (`uvicorn lexinote.main:app`), pytest, and every module
      that imports `from lexinote.config import settings`.

Architecture Note:
    The backend follows the same layered split throughout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Notes, providers, AI dispatch
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy over SQLite
    └─────────────────────────────────────┘

    The AI layer (services/llm_base.py, the three vendor adapters and
    services/ai_service.py) never raises to its callers: every outcome is a
    TaskResponse value with a success flag.
"""

__version__ = "1.0.0"
