"""create signups and form_interactions tables

Revision ID: 0001_create_signups
Revises:
Create Date: 2026-10-19
"""

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision = "0001_create_signups"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "signups",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("app", sa.String(100), nullable=False),
        sa.Column("social_media", sa.String(500), nullable=True),
        sa.Column("comments", sa.Text(), nullable=True),
        sa.Column(
            "email_sent",
            sa.Boolean(),
            nullable=False,
            server_default=sa.text("false"),
        ),
        sa.Column("email_sent_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_signups_email", "signups", ["email"])
    op.create_index("ix_signups_created_at", "signups", ["created_at"])

    op.create_table(
        "form_interactions",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("session_id", sa.String(100), nullable=False),
        sa.Column("event_type", sa.String(50), nullable=False),
        sa.Column("field_name", sa.String(50), nullable=True),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("name", sa.String(200), nullable=True),
        sa.Column("app_selection", sa.String(100), nullable=True),
        sa.Column("user_agent", sa.Text(), nullable=True),
        sa.Column("referrer", sa.Text(), nullable=True),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "ix_form_interactions_session_id", "form_interactions", ["session_id"]
    )
    op.create_index(
        "ix_form_interactions_timestamp", "form_interactions", ["timestamp"]
    )


def downgrade() -> None:
    op.drop_index("ix_form_interactions_timestamp", table_name="form_interactions")
    op.drop_index("ix_form_interactions_session_id", table_name="form_interactions")
    op.drop_table("form_interactions")
    op.drop_index("ix_signups_created_at", table_name="signups")
    op.drop_index("ix_signups_email", table_name="signups")
    op.drop_table("signups")
