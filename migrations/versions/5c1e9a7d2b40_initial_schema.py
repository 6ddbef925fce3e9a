"""initial schema

Revision ID: 5c1e9a7d2b40
Revises:
Create Date: 2026-10-19 10:02:11.418207

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5c1e9a7d2b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create identity and game round tables."""
    op.create_table(
        "app_user",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("mobile", sa.String(length=10), nullable=False),
        sa.Column("otp_hash", sa.Text(), nullable=True),
        sa.Column("otp_expiry", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("mobile"),
    )
    op.create_table(
        "game_round",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("user_choice", sa.String(length=16), nullable=False),
        sa.Column("computer_choice", sa.String(length=16), nullable=False),
        sa.Column("result", sa.String(length=8), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "user_choice IN ('stone', 'paper', 'scissor')",
            name="ck_game_round_user_choice",
        ),
        sa.CheckConstraint(
            "computer_choice IN ('stone', 'paper', 'scissor')",
            name="ck_game_round_computer_choice",
        ),
        sa.CheckConstraint("result IN ('win', 'lose', 'draw')", name="ck_game_round_result"),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_game_round_user_created",
        "game_round",
        ["user_id", "created_at"],
        unique=False,
    )


def downgrade() -> None:
    """Drop game round and identity tables."""
    op.drop_index("ix_game_round_user_created", table_name="game_round")
    op.drop_table("game_round")
    op.drop_table("app_user")
