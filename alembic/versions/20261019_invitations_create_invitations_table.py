"""invitations: create table and rsvp_status enum

Revision ID: 20261019_invitations
Revises:
Create Date: 2026-10-19 10:00:00.000000
"""
from __future__ import annotations
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "20261019_invitations"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

RSVP_STATUS = sa.Enum("pending", "confirmed", "declined", "rescinded", name="rsvp_status")


def upgrade() -> None:
    op.create_table(
        "invitations",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("event_date", sa.DateTime(), nullable=False),
        sa.Column("venue", sa.String(length=255), nullable=False),
        sa.Column("status", RSVP_STATUS, nullable=False, server_default=sa.text("'pending'")),
        sa.Column("plus_one", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("qr_code", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("status_changed_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_invitations_status", "invitations", ["status"])
    op.create_index("ix_invitations_created_at", "invitations", ["created_at"])
    op.create_index("ix_invitations_updated_at", "invitations", ["updated_at"])


def downgrade() -> None:
    op.drop_index("ix_invitations_updated_at", table_name="invitations")
    op.drop_index("ix_invitations_created_at", table_name="invitations")
    op.drop_index("ix_invitations_status", table_name="invitations")
    op.drop_table("invitations")
    # postgres keeps the enum type after the table is gone
    RSVP_STATUS.drop(op.get_bind(), checkfirst=True)
