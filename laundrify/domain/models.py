import hashlib
import json
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class OrderStatus(str, Enum):
    PAID = "paid"
    RECEIVED = "received"
    PROCESSING = "processing"
    READY = "ready"
    PICKED_UP = "picked_up"


FORWARD_CHAIN = (
    OrderStatus.PAID,
    OrderStatus.RECEIVED,
    OrderStatus.PROCESSING,
    OrderStatus.READY,
    OrderStatus.PICKED_UP,
)


class PaymentStatus(str, Enum):
    UNPAID = "unpaid"
    PAID = "paid"


class Partition(str, Enum):
    ONGOING = "Ongoing"
    COMPLETED = "Completed"


class FulfillmentRoute(str, Enum):
    OWN_DELIVERY = "own_delivery"
    COURIER = "courier"
    PICKUP = "pickup"


class Courier(str, Enum):
    BOLT = "bolt"
    UBER = "uber"


OFFLINE_PAYMENT = "offline"


class Order(BaseModel):
    """Domain Entity: laundry order"""
    id: str
    laundry_id: str
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    customer_address: Optional[str] = None
    items: Any = None
    total_price: Decimal = Decimal("0")
    currency_code: str = "NGN"
    payment_method: str = OFFLINE_PAYMENT
    payment_status: PaymentStatus = PaymentStatus.UNPAID
    status: OrderStatus
    created_at: Optional[datetime] = None

    @property
    def is_offline(self) -> bool:
        """Cash order, settled at the counter"""
        return self.payment_method == OFFLINE_PAYMENT

    def next_status(self) -> Optional[OrderStatus]:
        position = FORWARD_CHAIN.index(self.status)
        if position + 1 < len(FORWARD_CHAIN):
            return FORWARD_CHAIN[position + 1]
        return None

    def can_be_advanced_to(self, target: OrderStatus) -> bool:
        """Business rule: only the immediate successor, never skip or go back"""
        return target is not None and self.next_status() == target


class ServiceItem(BaseModel):
    name: str
    price: Decimal = Field(ge=0)


class ShopProfile(BaseModel):
    """Domain Entity: laundry (shop) owned by one user"""
    id: str
    owner_id: Optional[str] = None
    name: Optional[str] = None
    address: Optional[str] = None
    description: Optional[str] = None
    contact_details: Optional[str] = None
    email: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    currency_code: str = "NGN"
    open_time: str = "08:00"
    close_time: str = "18:00"
    services: dict[str, list[ServiceItem]] = Field(default_factory=dict)
    account_name: Optional[str] = None
    account_number: Optional[str] = None
    bank_name: Optional[str] = None
    bank_code: Optional[str] = None
    subaccount_id: Optional[str] = None
    expo_push_token: Optional[str] = None
    updated_at: Optional[datetime] = None


class RealtimeEvent(BaseModel):
    """Row change delivered by the change feed. Consumed once, never stored."""
    model_config = ConfigDict(populate_by_name=True)

    event_type: str = Field(alias="eventType")
    schema_name: str = Field(default="public", alias="schema")
    table: str
    old: dict[str, Any] = Field(default_factory=dict)
    new: dict[str, Any] = Field(default_factory=dict)
    commit_timestamp: Optional[str] = None

    @property
    def old_status(self) -> Optional[str]:
        return self.old.get("status")

    @property
    def new_status(self) -> Optional[str]:
        return self.new.get("status")

    def fingerprint(self) -> str:
        """Identity of the (old, new) pair; equal for redeliveries of the same change."""
        payload = json.dumps(
            [self.table, self.event_type.upper(), self.old, self.new],
            sort_keys=True,
            default=str,
        )
        return hashlib.sha256(payload.encode()).hexdigest()
