from pydantic import BaseModel
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from laundrify.domain.lifecycle import classify
from laundrify.domain.models import Courier, FulfillmentRoute, OrderStatus, Partition, PaymentStatus


class OrderResponse(BaseModel):
    id: str
    laundry_id: str
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    customer_address: Optional[str] = None
    items: Any = None
    total_price: Decimal
    currency_code: str
    payment_method: str
    payment_status: PaymentStatus
    status: OrderStatus
    created_at: Optional[datetime] = None
    badge: str
    partition: Partition

    @classmethod
    def from_domain(cls, order):
        return cls(
            **order.model_dump(),
            badge="CASH" if order.is_offline else "PAID ONLINE",
            partition=classify(order)
        )


class AdvanceOrderRequest(BaseModel):
    status: OrderStatus


class NotificationOutcomeResponse(BaseModel):
    delivered: bool
    error: Optional[str] = None


class AdvanceOrderResponse(BaseModel):
    order: OrderResponse
    notification: NotificationOutcomeResponse
    prompt_fulfillment: bool

    @classmethod
    def from_result(cls, result):
        return cls(
            order=OrderResponse.from_domain(result.order),
            notification=NotificationOutcomeResponse(**result.notification.model_dump()),
            prompt_fulfillment=result.prompt_fulfillment
        )


class FulfillmentRequest(BaseModel):
    route: FulfillmentRoute
    courier: Optional[Courier] = None


class PushTokenRequest(BaseModel):
    token: Optional[str] = None


class PushTokenResponse(BaseModel):
    enabled: bool


class CreateSubaccountRequest(BaseModel):
    account_bank: str
    account_number: str
    business_name: str
    business_email: str
    business_mobile: Optional[str] = None
    laundry_id: Optional[str] = None
    bank_name: Optional[str] = None
    account_name: Optional[str] = None


class CreateSubaccountResponse(BaseModel):
    subaccount_id: str


class ErrorResponse(BaseModel):
    detail: str
