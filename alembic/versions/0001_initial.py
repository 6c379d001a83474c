"""laundries and orders

Revision ID: 0001
Revises:
Create Date: 2026-10-19 10:00:00

"""
from alembic import op
import sqlalchemy as sa

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "laundries",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("owner_id", sa.String(), nullable=True),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("address", sa.String(), nullable=True),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("contact_details", sa.String(), nullable=True),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("currency_code", sa.String(3), nullable=False, server_default="NGN"),
        sa.Column("open_time", sa.String(5), nullable=False, server_default="08:00"),
        sa.Column("close_time", sa.String(5), nullable=False, server_default="18:00"),
        sa.Column("services", sa.JSON(), nullable=True),
        sa.Column("account_name", sa.String(), nullable=True),
        sa.Column("account_number", sa.String(), nullable=True),
        sa.Column("bank_name", sa.String(), nullable=True),
        sa.Column("bank_code", sa.String(), nullable=True),
        sa.Column("subaccount_id", sa.String(), nullable=True),
        sa.Column("expo_push_token", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_laundries_owner_id", "laundries", ["owner_id"])

    op.create_table(
        "orders",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("laundry_id", sa.String(), sa.ForeignKey("laundries.id"), nullable=False),
        sa.Column("customer_name", sa.String(), nullable=True),
        sa.Column("customer_phone", sa.String(), nullable=True),
        sa.Column("customer_address", sa.String(), nullable=True),
        sa.Column("items", sa.JSON(), nullable=True),
        sa.Column("total_price", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("currency_code", sa.String(3), nullable=False, server_default="NGN"),
        sa.Column("payment_method", sa.String(), nullable=False, server_default="offline"),
        sa.Column("payment_status", sa.String(), nullable=False, server_default="unpaid"),
        sa.Column("status", sa.String(), nullable=False, server_default="paid"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_orders_laundry_id", "orders", ["laundry_id"])


def downgrade() -> None:
    op.drop_index("ix_orders_laundry_id", table_name="orders")
    op.drop_table("orders")
    op.drop_index("ix_laundries_owner_id", table_name="laundries")
    op.drop_table("laundries")
