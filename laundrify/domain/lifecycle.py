"""Order lifecycle rules.

Orders move forward one step at a time along
``paid -> received -> processing -> ready -> picked_up``. Payment status is a
separate axis and is never touched here; only the payment webhook flips it.

Partitions are a presentation grouping and are never stored.
"""
from typing import Optional, Union

from pydantic import BaseModel

from laundrify.domain.exceptions import InvalidTransitionError
from laundrify.domain.models import (
    Courier, FulfillmentRoute, Order, OrderStatus, Partition
)

ONGOING_STATUSES = (OrderStatus.PAID, OrderStatus.RECEIVED, OrderStatus.PROCESSING)
COMPLETED_STATUSES = (OrderStatus.READY, OrderStatus.PICKED_UP)

COURIER_LINKS = {
    Courier.BOLT: "https://m.bolt.eu/",
    Courier.UBER: "https://m.uber.com/ul/",
}


class FulfillmentChoice(BaseModel):
    order_id: str
    route: FulfillmentRoute
    courier: Optional[Courier] = None
    redirect_url: Optional[str] = None
    partition: Partition = Partition.COMPLETED


def can_advance(order: Order, target) -> bool:
    try:
        target = OrderStatus(target)
    except ValueError:
        return False
    return order.can_be_advanced_to(target)


def ensure_can_advance(order: Order, target) -> OrderStatus:
    if not can_advance(order, target):
        raise InvalidTransitionError(order.status, target)
    return OrderStatus(target)


def classify(order_or_status: Union[Order, OrderStatus, str]) -> Partition:
    status = OrderStatus(getattr(order_or_status, "status", order_or_status))
    if status in ONGOING_STATUSES:
        return Partition.ONGOING
    return Partition.COMPLETED


def statuses_for(partition: Partition) -> tuple:
    if Partition(partition) == Partition.ONGOING:
        return ONGOING_STATUSES
    return COMPLETED_STATUSES


def choose_fulfillment(order: Order, route: FulfillmentRoute,
                       courier: Optional[Courier] = None) -> FulfillmentChoice:
    """Record how a ready order reaches the customer. Stored status stays ``ready``."""
    if order.status != OrderStatus.READY:
        raise InvalidTransitionError(order.status, FulfillmentRoute(route).value)

    route = FulfillmentRoute(route)
    redirect_url = None
    if route == FulfillmentRoute.COURIER:
        if courier is None:
            raise ValueError("Courier route needs a courier (bolt or uber)")
        courier = Courier(courier)
        redirect_url = COURIER_LINKS[courier]
    else:
        courier = None

    return FulfillmentChoice(
        order_id=order.id,
        route=route,
        courier=courier,
        redirect_url=redirect_url,
    )
