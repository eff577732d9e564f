"""Initial schema: soundboards, history, message, profile, feedback, reports

Revision ID: 001
Revises: None
Create Date: 2026-10-18 00:00:00.000000+00:00

Rollback: downgrade() drops every table (all data lost). Messages are
dropped before history because of the email foreign key.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "soundboards",
        sa.Column("id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column(
            "audio_url",
            sa.String(1024),
            nullable=False,
            comment="Public URL of the synthesized MP3",
        ),
        sa.Column(
            "file_name",
            sa.String(255),
            nullable=False,
            comment="Storage object key; equals the last path segment of audio_url",
        ),
        sa.Column("created_by_email", sa.String(255), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_soundboards_owner_created",
        "soundboards",
        ["created_by_email", sa.text("created_at DESC")],
    )

    op.create_table(
        "history",
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.PrimaryKeyConstraint("email"),
    )

    op.create_table(
        "message",
        sa.Column("message_id", sa.String(64), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("is_speech_to_text", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(["email"], ["history.email"]),
        sa.PrimaryKeyConstraint("message_id"),
    )
    op.create_index("idx_message_email_created", "message", ["email", "created_at"])

    op.create_table(
        "profile",
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("profile_picture_url", sa.String(1024), nullable=True),
        sa.PrimaryKeyConstraint("email"),
    )

    op.create_table(
        "feedback",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("comment", sa.Text(), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.CheckConstraint("rating >= 1 AND rating <= 4", name="ck_feedback_rating_range"),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "reports",
        sa.Column("id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("comment", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_reports_created_at", "reports", [sa.text("created_at DESC")])


def downgrade() -> None:
    op.drop_index("idx_reports_created_at", table_name="reports")
    op.drop_table("reports")
    op.drop_table("feedback")
    op.drop_table("profile")
    op.drop_index("idx_message_email_created", table_name="message")
    op.drop_table("message")
    op.drop_table("history")
    op.drop_index("idx_soundboards_owner_created", table_name="soundboards")
    op.drop_table("soundboards")
