"""
LexiNote Backend — AI Provider SQLAlchemy Model
=================================================

What:  ORM model for the `ai_providers` table (the settings store).
Who:   Read and written only by ProviderService.

One row per vendor tag. At most one row has is_active=True; ProviderService
maintains that when saving or activating.
"""

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from lexinote.database import Base


class AIProviderRecord(Base):
    """Stored credential/model record for one LLM vendor."""

    __tablename__ = "ai_providers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    vendor: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    api_key: Mapped[str] = mapped_column(Text, nullable=False, default="")
    model: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        # Never include the API key
        return f"<AIProviderRecord(vendor='{self.vendor}', model='{self.model}', active={self.is_active})>"
