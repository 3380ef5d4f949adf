"""add action items table

Revision ID: 3b7e1c9a4d2f
Revises:
Create Date: 2026-10-18 00:00:00.000000
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision = "3b7e1c9a4d2f"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create the action item table with its lookup indexes."""
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    table_names = set(inspector.get_table_names())
    if "action_items" not in table_names:
        op.create_table(
            "action_items",
            sa.Column("id", sa.String(), nullable=False),
            sa.Column("analysis_id", sa.String(), nullable=False),
            sa.Column("created_at", sa.String(), nullable=False),
            sa.Column("created_by", sa.String(), nullable=False),
            sa.Column("summary", sa.String(), nullable=False),
            sa.Column("detail", sa.String(), nullable=True),
            sa.Column("owner", sa.String(), nullable=True),
            sa.Column("role", sa.String(), nullable=True),
            sa.Column("status", sa.String(), nullable=False),
            sa.Column("priority", sa.String(), nullable=False),
            sa.Column("due_at", sa.String(), nullable=True),
            sa.Column("started_at", sa.String(), nullable=True),
            sa.Column("completed_at", sa.String(), nullable=True),
            sa.Column("dependencies", sa.String(), nullable=True),
            sa.Column("risk", sa.String(), nullable=True),
            sa.Column("change_control", sa.String(), nullable=False),
            sa.Column("verification", sa.String(), nullable=False),
            sa.Column("links", sa.String(), nullable=True),
            sa.Column("notes", sa.String(), nullable=True),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index("ix_action_items_analysis_id", "action_items", ["analysis_id"])
        op.create_index(
            "ix_action_items_analysis_status_priority",
            "action_items",
            ["analysis_id", "status", "priority"],
        )
        return

    indexes = {index["name"] for index in inspector.get_indexes("action_items")}
    if "ix_action_items_analysis_id" not in indexes:
        op.create_index("ix_action_items_analysis_id", "action_items", ["analysis_id"])
    if "ix_action_items_analysis_status_priority" not in indexes:
        op.create_index(
            "ix_action_items_analysis_status_priority",
            "action_items",
            ["analysis_id", "status", "priority"],
        )


def downgrade() -> None:
    """Drop the action item table."""
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    if "action_items" not in set(inspector.get_table_names()):
        return
    indexes = {index["name"] for index in inspector.get_indexes("action_items")}
    if "ix_action_items_analysis_status_priority" in indexes:
        op.drop_index("ix_action_items_analysis_status_priority", table_name="action_items")
    if "ix_action_items_analysis_id" in indexes:
        op.drop_index("ix_action_items_analysis_id", table_name="action_items")
    op.drop_table("action_items")
