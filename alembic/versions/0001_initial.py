"""Initial credit intake schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-17 00:00:00
"""

from alembic import op
import sqlalchemy as sa


revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def _application_fk(ondelete: str = "CASCADE", nullable: bool = False, unique: bool = False) -> sa.Column:
    return sa.Column(
        "application_id",
        sa.Integer(),
        sa.ForeignKey("customer_applications.id", ondelete=ondelete),
        nullable=nullable,
        unique=unique,
    )


def upgrade() -> None:
    op.create_table(
        "customer_applications",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("legal_entity_name", sa.String(255), nullable=False),
        sa.Column("dba", sa.String(255), nullable=True),
        sa.Column("tax_ein", sa.String(20), nullable=False),
        sa.Column("duns_number", sa.String(20), nullable=True),
        sa.Column("phone_no", sa.String(50), nullable=False),
        sa.Column("bill_to_address", sa.String(255), nullable=False),
        sa.Column("bill_to_city_state_zip", sa.String(255), nullable=False),
        sa.Column("ship_to_address", sa.String(255), nullable=False),
        sa.Column("ship_to_city_state_zip", sa.String(255), nullable=False),
        sa.Column("buyer_name_email", sa.String(255), nullable=False),
        sa.Column("accounts_payable_name_email", sa.String(255), nullable=False),
        sa.Column("want_invoices_emailed", sa.Boolean(), nullable=False),
        sa.Column("invoice_email", sa.String(255), nullable=True),
        sa.Column("terms_agreed", sa.Boolean(), nullable=False),
        *_timestamps(),
    )
    op.create_index(
        "ix_customer_applications_legal_entity_name", "customer_applications", ["legal_entity_name"]
    )

    op.create_table(
        "trade_references",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _application_fk(),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("fax_no", sa.String(50), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("city_state_zip", sa.String(255), nullable=True),
        sa.Column("attn", sa.String(255), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_trade_references_application_id", "trade_references", ["application_id"])

    op.create_table(
        "digital_signatures",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _application_fk(unique=True),
        sa.Column("signer_name", sa.String(255), nullable=False),
        sa.Column("signer_email", sa.String(255), nullable=False),
        sa.Column("signature_data_url", sa.Text(), nullable=False),
        sa.Column("signature_hash", sa.String(128), nullable=False),
        sa.Column("signed_document_url", sa.String(500), nullable=False),
        sa.Column("ip_address", sa.String(50), nullable=True),
        sa.Column("user_agent", sa.String(512), nullable=True),
        sa.Column("signed_at", sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "international_shipping_requests",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(50), nullable=False),
        sa.Column("company", sa.String(255), nullable=True),
        sa.Column("shipping_address", sa.String(255), nullable=False),
        sa.Column("address_line2", sa.String(255), nullable=True),
        sa.Column("city", sa.String(100), nullable=False),
        sa.Column("state_province", sa.String(100), nullable=False),
        sa.Column("postal_code", sa.String(20), nullable=False),
        sa.Column("country", sa.String(100), nullable=False),
        sa.Column("product_description", sa.Text(), nullable=False),
        sa.Column("quantity", sa.String(100), nullable=False),
        sa.Column("estimated_value", sa.String(100), nullable=False),
        sa.Column("order_request", sa.Text(), nullable=False),
        sa.Column("special_instructions", sa.Text(), nullable=True),
        sa.Column("shipping_method", sa.String(100), nullable=False),
        sa.Column("custom_shipping_method", sa.String(255), nullable=True),
        sa.Column("urgency", sa.String(50), nullable=False),
        sa.Column("tracking_required", sa.Boolean(), nullable=False),
        sa.Column("insurance_required", sa.Boolean(), nullable=False),
        sa.Column("purpose_of_shipment", sa.String(100), nullable=True),
        sa.Column("custom_purpose", sa.String(255), nullable=True),
        sa.Column("hs_code", sa.String(50), nullable=True),
        sa.Column("country_of_origin", sa.String(100), nullable=True),
        sa.Column("status", sa.String(50), nullable=False),
        *_timestamps(),
    )
    op.create_index(
        "ix_international_shipping_requests_email", "international_shipping_requests", ["email"]
    )
    op.create_index(
        "ix_international_shipping_requests_status", "international_shipping_requests", ["status"]
    )

    op.create_table(
        "vendor_forms",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _application_fk(ondelete="SET NULL", nullable=True),
        sa.Column("file_name", sa.String(255), nullable=False),
        sa.Column("file_url", sa.String(1024), nullable=False),
        sa.Column("file_type", sa.String(100), nullable=False),
        sa.Column("file_size", sa.Integer(), nullable=False),
        sa.Column("uploaded_at", sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_vendor_forms_application_id", "vendor_forms", ["application_id"])

    op.create_table(
        "credit_approvals",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _application_fk(unique=True),
        sa.Column("decision", sa.String(20), nullable=False),
        sa.Column("approved_amount", sa.Integer(), nullable=True),
        sa.Column("approved_terms", sa.String(100), nullable=True),
        sa.Column("approver_email", sa.String(255), nullable=True),
        sa.Column("approver_notes", sa.Text(), nullable=True),
        sa.Column("customer_notified", sa.Boolean(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_credit_approvals_decision", "credit_approvals", ["decision"])


def downgrade() -> None:
    op.drop_table("credit_approvals")
    op.drop_table("vendor_forms")
    op.drop_table("international_shipping_requests")
    op.drop_table("digital_signatures")
    op.drop_table("trade_references")
    op.drop_table("customer_applications")
