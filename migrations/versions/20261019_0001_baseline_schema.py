"""baseline contract lifecycle schema

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 00:00:01
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_by", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def _company_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("reu_code", sa.String(64), nullable=True),
        sa.Column("contacts", sa.Text(), nullable=True),
        sa.Column("document_url", sa.String(1024), nullable=True),
        sa.Column("document_key", sa.String(512), nullable=True),
        sa.Column("document_name", sa.String(255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("role", sa.String(32), nullable=False),
        sa.Column("status", sa.String(32), nullable=False),
        sa.Column("last_access", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_index("idx_users_role", "users", ["role"])

    op.create_table("clients", *_company_columns())
    op.create_index("idx_clients_name", "clients", ["name"])
    op.create_table("suppliers", *_company_columns())
    op.create_index("idx_suppliers_name", "suppliers", ["name"])

    op.create_table(
        "authorized_signers",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("company_id", sa.Integer(), nullable=False),
        sa.Column("company_type", sa.String(32), nullable=False),
        sa.Column("first_name", sa.String(120), nullable=False),
        sa.Column("last_name", sa.String(120), nullable=False),
        sa.Column("position", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(64), nullable=True),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("document_url", sa.String(1024), nullable=True),
        sa.Column("document_key", sa.String(512), nullable=True),
        sa.Column("document_name", sa.String(255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_signers_company", "authorized_signers", ["company_type", "company_id"])

    op.create_table(
        "contracts",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("contract_number", sa.String(64), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("client_id", sa.Integer(), nullable=True),
        sa.Column("supplier_id", sa.Integer(), nullable=True),
        sa.Column("client_signer_id", sa.Integer(), nullable=True),
        sa.Column("supplier_signer_id", sa.Integer(), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("type", sa.String(32), nullable=False),
        sa.Column("status", sa.String(32), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("amount >= 0", name="ck_contracts_amount_non_negative"),
        sa.ForeignKeyConstraint(["client_id"], ["clients.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["supplier_id"], ["suppliers.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["client_signer_id"], ["authorized_signers.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["supplier_signer_id"], ["authorized_signers.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("contract_number"),
    )
    op.create_index("idx_contracts_status", "contracts", ["status"])
    op.create_index("idx_contracts_end_date", "contracts", ["end_date"])

    op.create_table(
        "supplements",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("contract_id", sa.Integer(), nullable=False),
        sa.Column("supplement_number", sa.String(64), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("effective_date", sa.Date(), nullable=False),
        sa.Column("modifications", sa.Text(), nullable=True),
        sa.Column("status", sa.String(32), nullable=False),
        sa.Column("client_signer_id", sa.Integer(), nullable=True),
        sa.Column("supplier_signer_id", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["contract_id"], ["contracts.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["client_signer_id"], ["authorized_signers.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["supplier_signer_id"], ["authorized_signers.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("contract_id", "supplement_number", name="uq_supplements_contract_number"),
    )
    op.create_index("idx_supplements_contract", "supplements", ["contract_id"])

    op.create_table(
        "documents",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("contract_id", sa.Integer(), nullable=False),
        sa.Column("file_name", sa.String(255), nullable=False),
        sa.Column("file_type", sa.String(120), nullable=True),
        sa.Column("file_size", sa.Integer(), nullable=False),
        sa.Column("file_url", sa.String(1024), nullable=True),
        sa.Column("file_key", sa.String(512), nullable=True),
        sa.Column("uploaded_by", sa.Integer(), nullable=True),
        sa.Column("uploaded_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["contract_id"], ["contracts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_documents_contract", "documents", ["contract_id"])

    op.create_table(
        "notifications",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("contract_id", sa.Integer(), nullable=False),
        sa.Column("contract_number", sa.String(64), nullable=False),
        sa.Column("contract_title", sa.String(255), nullable=False),
        sa.Column("type", sa.String(32), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("status", sa.String(32), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("read_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_notifications_contract_type", "notifications", ["contract_id", "type"])
    op.create_index("idx_notifications_status", "notifications", ["status"])

    op.create_table(
        "notification_settings",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("enabled", sa.Boolean(), nullable=False),
        sa.Column("thresholds", sa.JSON(), nullable=False),
        sa.Column("recipients", sa.JSON(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "audit_logs",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("contract_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("user_name", sa.String(255), nullable=False),
        sa.Column("action", sa.String(120), nullable=False),
        sa.Column("details", sa.Text(), nullable=True),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_audit_logs_contract_timestamp", "audit_logs", ["contract_id", "timestamp"])


def downgrade() -> None:
    op.drop_index("idx_audit_logs_contract_timestamp", table_name="audit_logs")
    op.drop_table("audit_logs")
    op.drop_table("notification_settings")
    op.drop_index("idx_notifications_status", table_name="notifications")
    op.drop_index("idx_notifications_contract_type", table_name="notifications")
    op.drop_table("notifications")
    op.drop_index("idx_documents_contract", table_name="documents")
    op.drop_table("documents")
    op.drop_index("idx_supplements_contract", table_name="supplements")
    op.drop_table("supplements")
    op.drop_index("idx_contracts_end_date", table_name="contracts")
    op.drop_index("idx_contracts_status", table_name="contracts")
    op.drop_table("contracts")
    op.drop_index("idx_signers_company", table_name="authorized_signers")
    op.drop_table("authorized_signers")
    op.drop_index("idx_suppliers_name", table_name="suppliers")
    op.drop_table("suppliers")
    op.drop_index("idx_clients_name", table_name="clients")
    op.drop_table("clients")
    op.drop_index("idx_users_role", table_name="users")
    op.drop_table("users")
