"""Merges change-feed events into the owner's live list of orders.

``reduce`` is pure: it takes the current board state and one event and returns
the next state plus the side effects the caller must run (alert sound,
notice). Delivery is at-least-once and unordered, so the reducer keys on the
status carried by each event, replaces entries by order id and remembers the
fingerprints of recently applied events.
"""
import logging
from typing import Iterable, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, ValidationError

from laundrify.domain.models import Order, OrderStatus, Partition, RealtimeEvent

logger = logging.getLogger(__name__)

ORDERS_TABLE = "orders"
SEEN_CAPACITY = 256
NEW_PAID_TITLE = "New Paid Order!"


class PlayAlert(BaseModel):
    model_config = ConfigDict(frozen=True)


class ShowNotice(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    message: str


Effect = Union[PlayAlert, ShowNotice]


class BoardState(BaseModel):
    model_config = ConfigDict(frozen=True)

    partition: Partition = Partition.ONGOING
    orders: Tuple[Order, ...] = ()
    has_new_order: bool = False
    seen: Tuple[str, ...] = ()


class Reduction(BaseModel):
    model_config = ConfigDict(frozen=True)

    state: BoardState
    effects: Tuple[Effect, ...] = ()


def is_new_payment(event: RealtimeEvent) -> bool:
    return event.new_status == OrderStatus.PAID.value and event.old_status != OrderStatus.PAID.value


def reduce(state: BoardState, event: RealtimeEvent) -> Reduction:
    if event.table != ORDERS_TABLE or event.event_type.upper() != "UPDATE":
        return Reduction(state=state)
    if not is_new_payment(event):
        return Reduction(state=state)

    fingerprint = event.fingerprint()
    if fingerprint in state.seen:
        logger.debug(f"Duplicate delivery of {fingerprint[:12]} suppressed")
        return Reduction(state=state)

    try:
        order = Order.model_validate(event.new)
    except ValidationError as e:
        logger.warning(f"Unusable order row in change event: {e}")
        return Reduction(state=state)

    seen = _remember(state.seen, fingerprint)

    effects = (
        PlayAlert(),
        ShowNotice(
            title=NEW_PAID_TITLE,
            message=f"Customer {order.customer_name or 'unknown'} has just paid for an order!",
        ),
    )

    if state.partition == Partition.ONGOING:
        next_state = state.model_copy(update={"orders": merge(state.orders, order), "seen": seen})
    else:
        next_state = state.model_copy(update={"has_new_order": True, "seen": seen})

    return Reduction(state=next_state, effects=effects)


def merge(orders: Iterable[Order], order: Order) -> Tuple[Order, ...]:
    """Replace the entry with the same id in place, else put the order first."""
    orders = tuple(orders)
    if find_order(orders, order.id) is None:
        return (order, *orders)
    return tuple(order if existing.id == order.id else existing for existing in orders)


def find_order(orders: Iterable[Order], order_id: str) -> Optional[Order]:
    return next((order for order in orders if order.id == order_id), None)


def switch_partition(state: BoardState, partition: Partition) -> BoardState:
    partition = Partition(partition)
    update = {"partition": partition}
    if partition == Partition.ONGOING:
        update["has_new_order"] = False
    return state.model_copy(update=update)


def with_orders(state: BoardState, orders: Iterable[Order]) -> BoardState:
    return state.model_copy(update={"orders": tuple(orders)})


def _remember(seen: Tuple[str, ...], fingerprint: str) -> Tuple[str, ...]:
    return (*seen, fingerprint)[-SEEN_CAPACITY:]
