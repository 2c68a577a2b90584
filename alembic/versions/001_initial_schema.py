"""Initial schema — play_queues.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-16

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "play_queues",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False, server_default="Playlist"),
        sa.Column("tracks", sa.JSON, nullable=False),
        sa.Column("current_index", sa.Integer, nullable=False, server_default="-1"),
        sa.Column("is_playing", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("volume", sa.Float, nullable=False, server_default="0.5"),
        sa.Column("current_path", sa.String(1024), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("play_queues")
