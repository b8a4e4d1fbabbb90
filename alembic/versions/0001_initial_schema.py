"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-16

Creates users, events and comments.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

event_state = sa.Enum("PENDING", "PUBLISHED", "CANCELED", name="event_state")


def upgrade() -> None:
    # --- users ---
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(250), nullable=False),
        sa.Column("email", sa.String(254), nullable=False, unique=True),
    )

    # --- events ---
    op.create_table(
        "events",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(120), nullable=False),
        sa.Column("annotation", sa.String(2000), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("state", event_state, nullable=False, server_default="PENDING"),
        sa.Column("created_on", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("published_on", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "initiator_id",
            sa.Integer,
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
    )
    op.create_index("ix_events_initiator_id", "events", ["initiator_id"])
    op.create_index("ix_events_state_published_on", "events", ["state", "published_on"])

    # --- comments ---
    op.create_table(
        "comments",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("message", sa.String(2000), nullable=False),
        sa.Column("created_on", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_on", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "author_id",
            sa.Integer,
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "event_id",
            sa.Integer,
            sa.ForeignKey("events.id", ondelete="CASCADE"),
            nullable=False,
        ),
    )
    op.create_index("ix_comments_author_id", "comments", ["author_id"])
    op.create_index("ix_comments_event_id_created_on", "comments", ["event_id", "created_on"])


def downgrade() -> None:
    op.drop_table("comments")
    op.drop_table("events")
    op.drop_table("users")
    event_state.drop(op.get_bind(), checkfirst=True)
