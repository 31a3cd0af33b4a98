"""
LexiNote Backend — API Routes Package
=======================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - ai.py:         POST /api/ai/simplify | alternatives | analyze
    - notes.py:      /api/notes CRUD, /api/hard-words/history
    - providers.py:  /api/providers (settings for the AI vendors)
    - health.py:     GET /health

Routes stay thin: they pull data out of the request, call a service and
shape the response. Business logic lives in lexinote.services.
"""
