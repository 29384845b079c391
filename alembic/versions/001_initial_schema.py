"""Initial schema - customers, deals, bills, bookings, providers, payouts.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now(),
    )


def upgrade() -> None:
    op.create_table(
        "customers",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("id_number", sa.String(30), nullable=True),
        sa.Column("phone", sa.String(30), nullable=True),
        sa.Column("email", sa.String(200), nullable=True),
        sa.Column("balance", sa.Float, nullable=False, server_default="0"),
        _created_at(),
    )

    op.create_table(
        "customer_transactions",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "customer_id", UUID(as_uuid=True),
            sa.ForeignKey("customers.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("type", sa.String(30), nullable=False),
        sa.Column("amount", sa.Float, nullable=False),
        sa.Column("balance_before", sa.Float, nullable=False),
        sa.Column("balance_after", sa.Float, nullable=False),
        sa.Column("reference_id", sa.String(64), nullable=True),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        _created_at(),
    )

    op.create_table(
        "cars",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("make", sa.String(100), nullable=False),
        sa.Column("model", sa.String(100), nullable=False),
        sa.Column("year", sa.Integer, nullable=True),
        sa.Column("license_plate", sa.String(20), nullable=True),
        sa.Column("buy_price", sa.Float, nullable=False, server_default="0"),
        sa.Column("sale_price", sa.Float, nullable=False, server_default="0"),
        sa.Column("provider_name", sa.String(200), nullable=True),
        sa.Column("provider_phone", sa.String(30), nullable=True),
        sa.Column("provider_address", sa.String(300), nullable=True),
        _created_at(),
    )

    op.create_table(
        "deals",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("deal_type", sa.String(40), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.Column("customer_id", UUID(as_uuid=True), sa.ForeignKey("customers.id"), nullable=True),
        sa.Column("seller_id", UUID(as_uuid=True), sa.ForeignKey("customers.id"), nullable=True),
        sa.Column("buyer_id", UUID(as_uuid=True), sa.ForeignKey("customers.id"), nullable=True),
        sa.Column("car_id", UUID(as_uuid=True), sa.ForeignKey("cars.id"), nullable=True),
        sa.Column("amount", sa.Float, nullable=False, server_default="0"),
        sa.Column("selling_price", sa.Float, nullable=False, server_default="0"),
        sa.Column("loss_amount", sa.Float, nullable=False, server_default="0"),
        sa.Column("customer_car_eval_value", sa.Float, nullable=False, server_default="0"),
        _created_at(),
    )

    op.create_table(
        "schools",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("contact_name", sa.String(200), nullable=True),
        sa.Column("phone", sa.String(30), nullable=True),
        sa.Column("email", sa.String(200), nullable=True),
        _created_at(),
    )

    op.create_table(
        "destinations",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("pricing", sa.JSON, nullable=True),
        _created_at(),
    )

    op.create_table(
        "service_providers",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("service_type", sa.String(40), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("user_id", sa.String(64), nullable=True, index=True),
        sa.Column("phone", sa.String(30), nullable=True),
        sa.Column("email", sa.String(200), nullable=True),
        sa.Column("hourly_rate", sa.Float, nullable=True),
        sa.Column("daily_rate", sa.Float, nullable=True),
        sa.Column("regional_rate", sa.Float, nullable=True),
        sa.Column("overnight_rate", sa.Float, nullable=True),
        sa.Column("price", sa.Float, nullable=True),
        sa.Column("pricing_data", sa.JSON, nullable=True),
        _created_at(),
    )

    op.create_table(
        "bookings",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("booking_reference", sa.String(30), nullable=False, unique=True),
        sa.Column("school_id", UUID(as_uuid=True), sa.ForeignKey("schools.id"), nullable=True),
        sa.Column("destination_id", UUID(as_uuid=True), sa.ForeignKey("destinations.id"), nullable=True),
        sa.Column("customer_name", sa.String(200), nullable=False),
        sa.Column("customer_phone", sa.String(30), nullable=True),
        sa.Column("trip_date", sa.Date, nullable=True),
        sa.Column("number_of_students", sa.Integer, nullable=False, server_default="0"),
        sa.Column("number_of_crew", sa.Integer, nullable=False, server_default="0"),
        sa.Column("total_amount", sa.Float, nullable=False, server_default="0"),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("payment_status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("created_by", sa.String(64), nullable=True),
        _created_at(),
    )

    op.create_table(
        "booking_services",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "booking_id", UUID(as_uuid=True),
            sa.ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("service_type", sa.String(40), nullable=False),
        sa.Column(
            "service_id", UUID(as_uuid=True),
            sa.ForeignKey("service_providers.id"), nullable=False,
        ),
        sa.Column("quantity", sa.Integer, nullable=False, server_default="1"),
        sa.Column("days", sa.Integer, nullable=False, server_default="1"),
        sa.Column("booked_price", sa.Float, nullable=False, server_default="0"),
        sa.Column("rate_type", sa.String(20), nullable=False, server_default="daily"),
        sa.Column("sub_services", sa.JSON, nullable=False),
        _created_at(),
    )

    op.create_table(
        "bills",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("bill_number", sa.String(30), nullable=False, unique=True),
        sa.Column("bill_type", sa.String(30), nullable=False),
        sa.Column("bill_direction", sa.String(10), nullable=False, server_default="positive"),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("deal_id", UUID(as_uuid=True), sa.ForeignKey("deals.id", ondelete="SET NULL"), nullable=True),
        sa.Column("booking_id", UUID(as_uuid=True), sa.ForeignKey("bookings.id", ondelete="SET NULL"), nullable=True),
        sa.Column("customer_id", UUID(as_uuid=True), sa.ForeignKey("customers.id", ondelete="SET NULL"), nullable=True),
        sa.Column("parent_bill_id", UUID(as_uuid=True), sa.ForeignKey("bills.id", ondelete="SET NULL"), nullable=True),
        sa.Column("customer_name", sa.String(200), nullable=True),
        sa.Column("customer_phone", sa.String(30), nullable=True),
        sa.Column("bill_description", sa.Text, nullable=True),
        sa.Column("car_details", sa.String(200), nullable=True),
        sa.Column("bill_amount", sa.Float, nullable=True),
        sa.Column("subtotal", sa.Float, nullable=True),
        sa.Column("tax_rate", sa.Float, nullable=True),
        sa.Column("tax_amount", sa.Float, nullable=True),
        sa.Column("total_with_tax", sa.Float, nullable=True),
        sa.Column("commission", sa.Float, nullable=True),
        sa.Column("cash_amount", sa.Float, nullable=True),
        sa.Column("visa_amount", sa.Float, nullable=True),
        sa.Column("transfer_amount", sa.Float, nullable=True),
        sa.Column("check_amount", sa.Float, nullable=True),
        sa.Column("bank_amount", sa.Float, nullable=True),
        sa.Column("bank_name", sa.String(100), nullable=True),
        sa.Column("bank_branch", sa.String(100), nullable=True),
        sa.Column("due_date", sa.Date, nullable=True),
        _created_at(),
    )
    op.create_index("ix_bills_booking_id", "bills", ["booking_id"])
    op.create_index("ix_bills_deal_id", "bills", ["deal_id"])

    op.create_table(
        "bill_payments",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "bill_id", UUID(as_uuid=True),
            sa.ForeignKey("bills.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("payment_type", sa.String(20), nullable=False),
        sa.Column("amount", sa.Float, nullable=False),
        sa.Column("payment_date", sa.Date, nullable=True),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("visa_installments", sa.Integer, nullable=True),
        sa.Column("visa_card_type", sa.String(30), nullable=True),
        sa.Column("visa_last_four", sa.String(4), nullable=True),
        sa.Column("approval_number", sa.String(50), nullable=True),
        sa.Column("bank_name", sa.String(100), nullable=True),
        sa.Column("bank_branch", sa.String(100), nullable=True),
        sa.Column("transfer_account_number", sa.String(50), nullable=True),
        sa.Column("transfer_number", sa.String(50), nullable=True),
        sa.Column("transfer_holder_name", sa.String(200), nullable=True),
        sa.Column("check_bank_name", sa.String(100), nullable=True),
        sa.Column("check_branch", sa.String(100), nullable=True),
        sa.Column("check_number", sa.String(50), nullable=True),
        sa.Column("check_holder_name", sa.String(200), nullable=True),
        _created_at(),
    )

    op.create_table(
        "payouts",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("type", sa.String(10), nullable=False),
        sa.Column("service_type", sa.String(40), nullable=False),
        sa.Column("service_id", UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", sa.String(64), nullable=True),
        sa.Column("service_provider_name", sa.String(200), nullable=True),
        sa.Column("amount", sa.Float, nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("payment_method", sa.String(30), nullable=True),
        sa.Column("payment_date", sa.Date, nullable=True),
        sa.Column("booking_service_id", UUID(as_uuid=True), nullable=True, index=True),
        sa.Column("booking_record_id", UUID(as_uuid=True), nullable=True, index=True),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("created_by", sa.String(64), nullable=True),
        sa.Column("account_number", sa.String(50), nullable=True),
        sa.Column("account_holder_name", sa.String(200), nullable=True),
        sa.Column("bank_name", sa.String(100), nullable=True),
        sa.Column("transaction_number", sa.String(50), nullable=True),
        sa.Column("reference_number", sa.String(50), nullable=True),
        sa.Column("check_number", sa.String(50), nullable=True),
        sa.Column("check_bank_name", sa.String(100), nullable=True),
        _created_at(),
    )

    op.create_table(
        "activity_logs",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("type", sa.String(30), nullable=False),
        sa.Column("deal", sa.JSON, nullable=True),
        sa.Column("car", sa.JSON, nullable=True),
        _created_at(),
    )

    op.create_table(
        "company_settings",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(200), nullable=True),
        sa.Column("address", sa.String(300), nullable=True),
        sa.Column("phone", sa.String(30), nullable=True),
        sa.Column("email", sa.String(200), nullable=True),
        sa.Column("tax_number", sa.String(50), nullable=True),
        sa.Column("logo_url", sa.String(500), nullable=True),
        _created_at(),
    )


def downgrade() -> None:
    op.drop_table("company_settings")
    op.drop_table("activity_logs")
    op.drop_table("payouts")
    op.drop_table("bill_payments")
    op.drop_index("ix_bills_deal_id", table_name="bills")
    op.drop_index("ix_bills_booking_id", table_name="bills")
    op.drop_table("bills")
    op.drop_table("booking_services")
    op.drop_table("bookings")
    op.drop_table("service_providers")
    op.drop_table("destinations")
    op.drop_table("schools")
    op.drop_table("deals")
    op.drop_table("cars")
    op.drop_table("customer_transactions")
    op.drop_table("customers")
