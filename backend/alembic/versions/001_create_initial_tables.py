"""Create notes, hard_words_history and ai_providers tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Initial schema: user notes, the hard-word replacement history and
       the AI provider settings store.
How:   Portable column types (JSON, DateTime with timezone) so the schema
       runs on SQLite; see lexinote/models/ for the ORM side.

Rollback: downgrade() drops all three tables (destructive, all data lost).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "notes",
        # String UUID; clients may supply their own id
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        # JSON arrays of strings
        sa.Column("hard_words", sa.JSON(), nullable=False),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    # Listing is always "most recently edited first"
    op.create_index(
        "idx_notes_updated_at",
        "notes",
        [sa.text("updated_at DESC")],
    )

    op.create_table(
        "hard_words_history",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("word", sa.Text(), nullable=False),
        sa.Column("replacement", sa.Text(), nullable=False),
        sa.Column("context", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "ai_providers",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        # One row per vendor tag: openai, gemini, anthropic
        sa.Column("vendor", sa.String(32), nullable=False),
        sa.Column("api_key", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("model", sa.String(128), nullable=False, server_default=sa.text("''")),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("vendor"),
    )


def downgrade() -> None:
    op.drop_table("ai_providers")
    op.drop_table("hard_words_history")
    op.drop_index("idx_notes_updated_at", table_name="notes")
    op.drop_table("notes")
