# Schemas package init
"""Pydantic request/response schemas and AI-layer value types."""
