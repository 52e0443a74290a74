"""initial_invite_schema

Create the schema for invite and membership activation:
- Companies and employees (the columns the invite flow uses)
- Invites (hashed secret, pending/accepted/revoked, derived expiry)
- Company memberships (keyed by company and identity)
- User notifications (inbox entries for invites)

Revision ID: 3f7c2a91d4e8
Revises:
Create Date: 2026-10-19 09:12:44.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f7c2a91d4e8"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE invite_status AS ENUM ('pending', 'accepted', 'revoked');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    invite_status = postgresql.ENUM(
        "pending", "accepted", "revoked", name="invite_status", create_type=False
    )

    # ========================================================================
    # COMPANIES table
    # ========================================================================
    op.create_table(
        "companies",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("logo_url", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # ========================================================================
    # EMPLOYEES table
    # ========================================================================
    op.create_table(
        "employees",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("company_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=True),  # Linked identity
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("first_name", sa.String(255), nullable=True),
        sa.Column("last_name", sa.String(255), nullable=True),
        sa.Column("role", sa.String(50), nullable=True),
        sa.Column("invitation_status", invite_status, nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["company_id"], ["companies.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_employees_company_id", "employees", ["company_id"])
    op.create_index("idx_employees_user_id", "employees", ["user_id"])

    # ========================================================================
    # INVITES table
    # ========================================================================
    op.create_table(
        "invites",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("company_id", sa.UUID(), nullable=False),
        sa.Column("employee_id", sa.UUID(), nullable=False),
        sa.Column("role", sa.String(50), nullable=False, server_default="member"),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("token_hash", sa.String(64), nullable=False),  # SHA-256 hex
        sa.Column("status", invite_status, nullable=False, server_default="pending"),
        sa.Column("created_by", sa.UUID(), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("accepted_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("accepted_by", sa.UUID(), nullable=True),
        sa.Column("revoked_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["company_id"], ["companies.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["employee_id"], ["employees.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("token_hash", name="uq_invites_token_hash"),
        sa.CheckConstraint(
            "(accepted_at IS NULL) = (accepted_by IS NULL)",
            name="ck_invites_accepted_pair",
        ),
    )
    op.create_index(
        "idx_invites_employee_status", "invites", ["employee_id", "status"]
    )
    op.create_index("idx_invites_company_id", "invites", ["company_id"])
    op.execute("""
        CREATE UNIQUE INDEX idx_invites_unique_pending_employee
        ON invites (employee_id)
        WHERE status = 'pending'
    """)

    # ========================================================================
    # COMPANY_MEMBERSHIPS table
    # ========================================================================
    op.create_table(
        "company_memberships",
        sa.Column("company_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("role", sa.String(50), nullable=False, server_default="member"),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        *_timestamps(),
        sa.ForeignKeyConstraint(["company_id"], ["companies.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("company_id", "user_id"),
        sa.UniqueConstraint("company_id", "user_id", name="uq_company_membership"),
    )
    op.create_index(
        "idx_company_memberships_user_id", "company_memberships", ["user_id"]
    )

    # ========================================================================
    # USER_NOTIFICATIONS table
    # ========================================================================
    op.create_table(
        "user_notifications",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("type", sa.String(50), nullable=False),
        sa.Column("invite_id", sa.UUID(), nullable=False),
        sa.Column("company_id", sa.UUID(), nullable=False),
        sa.Column("read_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["invite_id"], ["invites.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["company_id"], ["companies.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_user_notifications_recipient",
        "user_notifications",
        ["user_id", "type", "created_at"],
    )
    op.create_index(
        "idx_user_notifications_invite_id", "user_notifications", ["invite_id"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("user_notifications")
    op.drop_table("company_memberships")
    op.drop_table("invites")
    op.drop_table("employees")
    op.drop_table("companies")
    op.execute("DROP TYPE IF EXISTS invite_status")
