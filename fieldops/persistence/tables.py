"""SQLAlchemy table definitions for the invite flow.

Companies and employees are owned by the wider field-service application;
only the columns the invite flow reads or writes are declared here. The
tables match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Column,
    Enum,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

invite_status_enum = Enum(
    "pending", "accepted", "revoked", name="invite_status", create_type=False
)

# ============================================================================
# COMPANIES TABLE (read-only here)
# ============================================================================
companies_table = Table(
    "companies",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("name", String(255), nullable=False),
    Column("logo_url", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# EMPLOYEES TABLE
# ============================================================================
employees_table = Table(
    "employees",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "company_id",
        UUID,
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("user_id", UUID, nullable=True),  # Identity linked on acceptance
    Column("email", String(255), nullable=True),
    Column("first_name", String(255), nullable=True),
    Column("last_name", String(255), nullable=True),
    Column("role", String(50), nullable=True),  # Free-form, normalized on invite
    Column("invitation_status", invite_status_enum, nullable=True),  # Mirror
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_employees_company_id", employees_table.c.company_id)
Index("idx_employees_user_id", employees_table.c.user_id)

# ============================================================================
# INVITES TABLE
# ============================================================================
invites_table = Table(
    "invites",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "company_id",
        UUID,
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "employee_id",
        UUID,
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("role", String(50), nullable=False, server_default="member"),
    Column("email", String(255), nullable=True),
    Column("token_hash", String(64), nullable=False, unique=True),  # SHA-256 hex
    Column("status", invite_status_enum, nullable=False, server_default="pending"),
    Column("created_by", UUID, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column("accepted_at", TIMESTAMP(timezone=True), nullable=True),
    Column("accepted_by", UUID, nullable=True),
    Column("revoked_at", TIMESTAMP(timezone=True), nullable=True),
)

Index("idx_invites_employee_status", invites_table.c.employee_id, invites_table.c.status)
Index("idx_invites_company_id", invites_table.c.company_id)

# At most one pending invite per employee
Index(
    "idx_invites_unique_pending_employee",
    invites_table.c.employee_id,
    unique=True,
    postgresql_where=invites_table.c.status == "pending",
)

# ============================================================================
# COMPANY MEMBERSHIPS TABLE
# ============================================================================
company_memberships_table = Table(
    "company_memberships",
    metadata,
    Column(
        "company_id",
        UUID,
        ForeignKey("companies.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("user_id", UUID, primary_key=True),
    Column("role", String(50), nullable=False, server_default="member"),
    Column("status", String(20), nullable=False, server_default="active"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("company_id", "user_id", name="uq_company_membership"),
)

Index("idx_company_memberships_user_id", company_memberships_table.c.user_id)

# ============================================================================
# USER NOTIFICATIONS TABLE
# ============================================================================
user_notifications_table = Table(
    "user_notifications",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, nullable=False),  # Recipient identity
    Column("type", String(50), nullable=False),
    Column(
        "invite_id", UUID, ForeignKey("invites.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "company_id",
        UUID,
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("read_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_user_notifications_recipient",
    user_notifications_table.c.user_id,
    user_notifications_table.c.type,
    user_notifications_table.c.created_at,
)
Index("idx_user_notifications_invite_id", user_notifications_table.c.invite_id)
