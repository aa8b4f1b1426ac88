"""Initial schema - users and msgs with soft-delete columns.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-16

Column names are camelCase to stay compatible with databases created by the
previous backend.
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
        "users",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(255), nullable=False),
        sa.Column(
            "loggedInUntil", sa.DateTime(timezone=True), nullable=False,
            server_default=sa.text("'1970-01-01 00:00:00+00'"),
        ),
        sa.Column(
            "createdAt", sa.DateTime(timezone=True), nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updatedAt", sa.DateTime(timezone=True), nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column("deletedAt", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(
        "users_username_live_key", "users", ["username"], unique=True,
        postgresql_where=sa.text('"deletedAt" IS NULL'),
        sqlite_where=sa.text('"deletedAt" IS NULL'),
    )
    op.create_table(
        "msgs",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("msg", sa.Text, nullable=False),
        sa.Column(
            "UserId", sa.Integer,
            sa.ForeignKey("users.id", name="msgs_UserId_fkey"),
            nullable=False,
        ),
        sa.Column(
            "createdAt", sa.DateTime(timezone=True), nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updatedAt", sa.DateTime(timezone=True), nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column("deletedAt", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_msgs_UserId", "msgs", ["UserId"])


def downgrade() -> None:
    op.drop_index("ix_msgs_UserId", table_name="msgs")
    op.drop_table("msgs")
    op.drop_index("users_username_live_key", table_name="users")
    op.drop_table("users")
