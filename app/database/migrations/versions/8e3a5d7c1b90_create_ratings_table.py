"""create ratings table

Revision ID: 8e3a5d7c1b90
Revises: 4b1f0c9d2e71
Create Date: 2026-10-19 11:05:47.902315

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy import func

# revision identifiers, used by Alembic.
revision: str = '8e3a5d7c1b90'
down_revision: Union[str, Sequence[str], None] = '4b1f0c9d2e71'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "ratings",
        sa.Column("id", sa.Integer, primary_key=True, index=True),
        sa.Column("username", sa.Text, nullable=False),
        sa.Column("rating", sa.Integer, nullable=False),
        sa.Column("anime_id", sa.Integer, nullable=False),
        sa.Column("episode_number", sa.Integer, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=func.now()),
        sa.UniqueConstraint("username", "anime_id", "episode_number", name="uq_ratings_user_episode"),
        sa.CheckConstraint("rating BETWEEN 1 AND 5", name="ck_ratings_range"),
    )
    op.create_index("idx_ratings_episode", "ratings", ["anime_id", "episode_number"])


def downgrade() -> None:
    op.drop_table("ratings")
