"""Accounts and sessions: member, admin, guest, authsession, passwordreset, auditlog

Revision ID: 001_accounts
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision = "001_accounts"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Create member table
    op.create_table(
        "member",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("display_name", sa.String(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="1"),
        sa.Column("last_login_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("deleted_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_member_email"),
    )

    # Create admin table
    op.create_table(
        "admin",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("display_name", sa.String(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="1"),
        sa.Column("is_super_admin", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("last_login_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("deleted_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_admin_email"),
    )

    # Create guest table
    op.create_table(
        "guest",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("guest_identifier", sa.String(), nullable=False),
        sa.Column("ip_address", sa.String(), nullable=True),
        sa.Column("user_agent", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("deleted_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("guest_identifier", name="uq_guest_identifier"),
    )

    # Create authsession table (one row per issued token pair)
    op.create_table(
        "authsession",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("member_id", sa.String(), nullable=True),
        sa.Column("admin_id", sa.String(), nullable=True),
        sa.Column("guest_id", sa.String(), nullable=True),
        sa.Column("jwt_token", sa.String(), nullable=False),
        sa.Column("refresh_token", sa.String(), nullable=False),
        sa.Column("device_fingerprint", sa.String(), nullable=True),
        sa.Column("expires_at", sa.DateTime(), nullable=False),
        sa.Column("invalidated_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("deleted_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["member_id"], ["member.id"]),
        sa.ForeignKeyConstraint(["admin_id"], ["admin.id"]),
        sa.ForeignKeyConstraint(["guest_id"], ["guest.id"]),
    )
    op.create_index("ix_authsession_jwt_token", "authsession", ["jwt_token"])
    op.create_index("ix_authsession_refresh_token", "authsession", ["refresh_token"])
    op.create_index("ix_authsession_member_id", "authsession", ["member_id"])

    # Create passwordreset table
    op.create_table(
        "passwordreset",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("member_id", sa.String(), nullable=False),
        sa.Column("reset_token", sa.String(), nullable=False),
        sa.Column("expires_at", sa.DateTime(), nullable=False),
        sa.Column("used_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("deleted_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["member_id"], ["member.id"]),
        sa.UniqueConstraint("reset_token", name="uq_passwordreset_token"),
    )

    # Create auditlog table
    op.create_table(
        "auditlog",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("event_type", sa.String(), nullable=False),
        sa.Column("actor_id", sa.String(), nullable=True),
        sa.Column("actor_kind", sa.String(), nullable=True),
        sa.Column("entity_type", sa.String(), nullable=True),
        sa.Column("entity_id", sa.String(), nullable=True),
        sa.Column("result", sa.String(), nullable=False, server_default="success"),
        sa.Column("details", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_auditlog_event_type", "auditlog", ["event_type"])
    op.create_index("ix_auditlog_entity", "auditlog", ["entity_type", "entity_id"])


def downgrade() -> None:
    op.drop_index("ix_auditlog_entity", table_name="auditlog")
    op.drop_index("ix_auditlog_event_type", table_name="auditlog")
    op.drop_table("auditlog")
    op.drop_table("passwordreset")
    op.drop_index("ix_authsession_member_id", table_name="authsession")
    op.drop_index("ix_authsession_refresh_token", table_name="authsession")
    op.drop_index("ix_authsession_jwt_token", table_name="authsession")
    op.drop_table("authsession")
    op.drop_table("guest")
    op.drop_table("admin")
    op.drop_table("member")
