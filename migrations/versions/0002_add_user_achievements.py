"""add user_achievements table

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-18

Milestone awards written by the achievement engine.
Unique constraint (user_id, achievement_type, period_year) enforces
idempotency. Append-only; downgrade drops cleanly.
"""
from alembic import op
import sqlalchemy as sa

revision = "0002"
down_revision = "0001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "user_achievements",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("achievement_type", sa.String(64), nullable=False),
        sa.Column("period_year", sa.Integer(), nullable=False),
        sa.Column("achievement_data", sa.Text(), nullable=True),
        sa.Column(
            "earned_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("ix_user_achievements_user_id", "user_achievements", ["user_id"])
    op.create_index("ix_user_achievements_type", "user_achievements", ["achievement_type"])
    op.create_unique_constraint(
        "uq_achievement_user_type_period",
        "user_achievements",
        ["user_id", "achievement_type", "period_year"],
    )


def downgrade() -> None:
    op.drop_constraint("uq_achievement_user_type_period", "user_achievements", type_="unique")
    op.drop_index("ix_user_achievements_type", table_name="user_achievements")
    op.drop_index("ix_user_achievements_user_id", table_name="user_achievements")
    op.drop_table("user_achievements")
