# Middleware package init
"""
LexiNote Backend — Middleware Package
=======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    - Request ID is generated first so every log line can carry it
    - Logging captures response status and duration on the way back out
"""
