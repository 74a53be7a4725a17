"""create comments table

Revision ID: 4b1f0c9d2e71
Revises:
Create Date: 2026-10-19 11:02:14.318204

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy import func

# revision identifiers, used by Alembic.
revision: str = '4b1f0c9d2e71'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "comments",
        sa.Column("id", sa.Integer, primary_key=True, index=True),
        sa.Column("username", sa.Text, nullable=False),
        sa.Column("message", sa.String(500), nullable=False),
        sa.Column("anime_id", sa.Integer, nullable=False),
        sa.Column("episode_number", sa.Integer, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=func.now()),
    )
    op.create_index("idx_comments_episode_created", "comments", ["anime_id", "episode_number", "created_at"])


def downgrade() -> None:
    op.drop_table("comments")
