from sqlalchemy import Table, Column, String, Numeric, Float, DateTime, JSON, MetaData, ForeignKey
from sqlalchemy.sql import func

metadata = MetaData()


laundries_tbl = Table(
    "laundries",
    metadata,
    Column("id", String, primary_key=True),
    Column("owner_id", String, nullable=True, index=True),
    Column("name", String, nullable=True),
    Column("address", String, nullable=True),
    Column("description", String, nullable=True),
    Column("contact_details", String, nullable=True),
    Column("email", String, nullable=True),
    Column("latitude", Float, nullable=True),
    Column("longitude", Float, nullable=True),
    Column("currency_code", String(3), nullable=False, server_default="NGN"),
    Column("open_time", String(5), nullable=False, server_default="08:00"),
    Column("close_time", String(5), nullable=False, server_default="18:00"),
    Column("services", JSON, nullable=True),
    Column("account_name", String, nullable=True),
    Column("account_number", String, nullable=True),
    Column("bank_name", String, nullable=True),
    Column("bank_code", String, nullable=True),
    Column("subaccount_id", String, nullable=True),
    Column("expo_push_token", String, nullable=True),
    Column("created_at", DateTime(timezone=True), server_default=func.now()),
    Column("updated_at", DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
)


orders_tbl = Table(
    "orders",
    metadata,
    Column("id", String, primary_key=True),
    Column("laundry_id", String, ForeignKey("laundries.id"), nullable=False, index=True),
    Column("customer_name", String, nullable=True),
    Column("customer_phone", String, nullable=True),
    Column("customer_address", String, nullable=True),
    Column("items", JSON, nullable=True),
    Column("total_price", Numeric(12, 2), nullable=False, server_default="0"),
    Column("currency_code", String(3), nullable=False, server_default="NGN"),
    Column("payment_method", String, nullable=False, server_default="offline"),
    Column("payment_status", String, nullable=False, server_default="unpaid"),
    Column("status", String, nullable=False, server_default="paid"),
    Column("created_at", DateTime(timezone=True), server_default=func.now())
)
