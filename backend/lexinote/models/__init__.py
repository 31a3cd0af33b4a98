# Models package init
"""ORM models: notes, hard-word history and AI provider settings."""
