"""SQLAlchemy table definitions for rollcall.

These table definitions are used for manual row mapping.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import Column, Index, MetaData, String, Table
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# LINKED RECORDS TABLE (local records referring to directory users)
# ============================================================================
linked_records_table = Table(
    "linked_records",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("record_type", String(50), nullable=False),  # 'interviewer', 'applicant'
    Column("user_uid", String(255), nullable=True),  # Directory user reference, no FK
    Column("email", String(255), nullable=True),  # Local override of the user's email
    Column("given_name", String(255), nullable=True),
    Column("family_name", String(255), nullable=True),
    Column("chinese_name", String(255), nullable=True),
    Column("invited_at", TIMESTAMP(timezone=True), nullable=True),
    Column("reminded_at", TIMESTAMP(timezone=True), nullable=True),
    Column("accepted_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_linked_records_user_uid", linked_records_table.c.user_uid)
Index(
    "idx_linked_records_type_created",
    linked_records_table.c.record_type,
    linked_records_table.c.created_at,
)
