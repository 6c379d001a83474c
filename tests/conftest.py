from contextlib import asynccontextmanager
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from laundrify.application.interfaces import (
    AlertSink, ChangeFeed, NotificationsService, OrderRepository, PaymentGateway, ShopRepository,
    Subscription
)
from laundrify.domain.exceptions import NotificationServiceError
from laundrify.domain.models import Order, OrderStatus, PaymentStatus, ShopProfile

LAUNDRY_ID = "f3b1c2d4-0000-4000-8000-000000000001"


def make_order(order_id="order-1", status=OrderStatus.PAID, **overrides) -> Order:
    data = {
        "id": order_id,
        "laundry_id": LAUNDRY_ID,
        "customer_name": "Ada",
        "customer_phone": "+2348000000000",
        "customer_address": "12 Marina Road, Lagos",
        "items": [{"name": "Shirt", "quantity": 2}],
        "total_price": Decimal("2500.00"),
        "payment_method": "flutterwave",
        "payment_status": PaymentStatus.PAID,
        "status": status,
        "created_at": datetime(2026, 10, 1, 9, 0, tzinfo=timezone.utc),
    }
    data.update(overrides)
    return Order(**data)


class FakeOrderRepository(OrderRepository):
    def __init__(self, orders=()):
        self.orders = {order.id: order for order in orders}
        self.update_status_calls = 0
        self.mark_paid_calls = 0

    async def get_by_id(self, order_id):
        return self.orders.get(order_id)

    async def list_by_laundry(self, laundry_id, statuses):
        statuses = [OrderStatus(s) for s in statuses]
        found = [o for o in self.orders.values() if o.laundry_id == laundry_id and o.status in statuses]
        return sorted(found, key=lambda o: o.created_at, reverse=True)

    async def update_status(self, order_id, status, expected):
        self.update_status_calls += 1
        order = self.orders.get(order_id)
        if order is None or order.status != expected:
            return False
        self.orders[order_id] = order.model_copy(update={"status": OrderStatus(status)})
        return True

    async def mark_paid(self, order_id):
        self.mark_paid_calls += 1
        order = self.orders.get(order_id)
        if order is None or order.payment_status == PaymentStatus.PAID:
            return False
        self.orders[order_id] = order.model_copy(
            update={"payment_status": PaymentStatus.PAID, "status": OrderStatus.RECEIVED}
        )
        return True


class FakeShopRepository(ShopRepository):
    def __init__(self, shops=()):
        self.shops = {shop.id: shop for shop in shops}

    async def get_by_id(self, laundry_id):
        return self.shops.get(laundry_id)

    async def update(self, laundry_id, values):
        shop = self.shops.get(laundry_id)
        if shop is None:
            return False
        merged = {**shop.model_dump(), **values}
        self.shops[laundry_id] = ShopProfile.model_validate(merged)
        return True

    async def set_push_token(self, laundry_id, token):
        return await self.update(laundry_id, {"expo_push_token": token})


class FakeUnitOfWork:
    def __init__(self, orders=(), shops=()):
        self.orders = FakeOrderRepository(orders)
        self.shops = FakeShopRepository(shops)
        self.commits = 0
        self.fail_on_commit = None

    @asynccontextmanager
    async def __call__(self):
        yield self

    async def commit(self):
        if self.fail_on_commit is not None:
            raise self.fail_on_commit
        self.commits += 1

    async def rollback(self):
        pass


class FakeNotifications(NotificationsService):
    def __init__(self, fail=False):
        self.sent = []
        self.fail = fail

    async def notify_customer(self, order):
        if self.fail:
            raise NotificationServiceError("Notification function returned 500")
        self.sent.append(order)


class FakeGateway(PaymentGateway):
    def __init__(self, response):
        self.response = response
        self.payloads = []

    async def create_subaccount(self, payload):
        self.payloads.append(payload)
        return self.response


class FakeSubscription(Subscription):
    def __init__(self):
        self.closed = 0
        self.dead = False

    @property
    def active(self):
        return not self.closed and not self.dead

    async def close(self):
        self.closed += 1


class FakeChangeFeed(ChangeFeed):
    def __init__(self):
        self.subscriptions = []

    async def subscribe(self, table, event_type, filters, callback):
        subscription = FakeSubscription()
        self.subscriptions.append({
            "table": table,
            "event_type": event_type,
            "filters": filters,
            "callback": callback,
            "subscription": subscription,
        })
        return subscription


class FakeAlertSink(AlertSink):
    def __init__(self):
        self.sounds = 0
        self.notices = []

    async def play_sound(self):
        self.sounds += 1

    async def show_notice(self, title, message):
        self.notices.append((title, message))


@pytest.fixture
def shop():
    return ShopProfile(id=LAUNDRY_ID, owner_id="owner-1", name="Sparkle Laundry")


@pytest.fixture
def uow(shop):
    return FakeUnitOfWork(
        orders=[
            make_order("order-1", OrderStatus.PAID),
            make_order("order-2", OrderStatus.PROCESSING,
                       created_at=datetime(2026, 10, 2, 9, 0, tzinfo=timezone.utc)),
            make_order("order-3", OrderStatus.READY, payment_method="offline",
                       payment_status=PaymentStatus.UNPAID),
            make_order("order-4", OrderStatus.PAID, payment_status=PaymentStatus.UNPAID),
        ],
        shops=[shop],
    )


@pytest.fixture
def notifications():
    return FakeNotifications()
