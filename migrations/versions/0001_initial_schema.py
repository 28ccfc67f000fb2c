"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- bible_verses ---
    op.create_table(
        "bible_verses",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("book", sa.String(64), nullable=False),
        sa.Column("chapter", sa.Integer(), nullable=False),
        sa.Column("verse_start", sa.Integer(), nullable=False),
        sa.Column("verse_end", sa.Integer(), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("content_localized", sa.Text(), nullable=True),
        sa.Column("explanation", sa.Text(), nullable=True),
        sa.Column("explanation_localized", sa.Text(), nullable=True),
        sa.Column("reading_day", sa.Integer(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("ix_bible_verses_reading_day", "bible_verses", ["reading_day"])

    # --- user_bible_progress ---
    op.create_table(
        "user_bible_progress",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("reading_day", sa.Integer(), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.UniqueConstraint("user_id", "reading_day", name="uq_progress_user_day"),
        sa.CheckConstraint("reading_day BETWEEN 1 AND 366", name="ck_progress_reading_day"),
    )
    op.create_index("ix_user_bible_progress_user_id", "user_bible_progress", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_user_bible_progress_user_id", table_name="user_bible_progress")
    op.drop_table("user_bible_progress")
    op.drop_index("ix_bible_verses_reading_day", table_name="bible_verses")
    op.drop_table("bible_verses")
