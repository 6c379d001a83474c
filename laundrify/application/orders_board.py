import logging
from typing import Optional

from laundrify.application.advance_order import AdvanceOrderDTO, AdvanceOrderUseCase, AdvanceResult
from laundrify.application.context import AppContext
from laundrify.application.get_orders import GetOrderUseCase, ListOrdersUseCase
from laundrify.application.interfaces import AlertSink, ChangeFeed, Subscription
from laundrify.application.reconciler import (
    ORDERS_TABLE, BoardState, Effect, PlayAlert, ShowNotice, reduce, switch_partition, with_orders
)
from laundrify.domain.exceptions import ShopNotFoundError
from laundrify.domain.lifecycle import FulfillmentChoice, choose_fulfillment
from laundrify.domain.models import Courier, FulfillmentRoute, OrderStatus, Partition, RealtimeEvent

logger = logging.getLogger(__name__)


class OrdersBoard:
    """Live view of one shop's orders.

    Holds the current partition and the known order set, keeps at most one
    change-feed subscription open while focused, and runs the effects the
    reducer asks for.
    """

    def __init__(
        self,
        context: AppContext,
        list_orders: ListOrdersUseCase,
        get_order: GetOrderUseCase,
        advance_order: AdvanceOrderUseCase,
        feed: ChangeFeed,
        alerts: AlertSink,
    ):
        self._context = context
        self._list_orders = list_orders
        self._get_order = get_order
        self._advance_order = advance_order
        self._feed = feed
        self._alerts = alerts
        self._state = BoardState()
        self._subscription: Optional[Subscription] = None

    @property
    def state(self) -> BoardState:
        return self._state

    @property
    def is_subscribed(self) -> bool:
        return self._subscription is not None and self._subscription.active

    async def focus(self) -> None:
        laundry_id = self._laundry_id()
        await self.refresh()

        if self._subscription is not None and not self._subscription.active:
            logger.warning(f"Order changes subscription of laundry {laundry_id} is dead, reopening")
            await self.blur()

        if self._subscription is None:
            self._subscription = await self._feed.subscribe(
                table=ORDERS_TABLE,
                event_type="UPDATE",
                filters={"laundry_id": laundry_id},
                callback=self.on_event,
            )
            logger.info(f"Subscribed to order changes of laundry {laundry_id}")

    async def blur(self) -> None:
        if self._subscription is None:
            return
        subscription, self._subscription = self._subscription, None
        await subscription.close()
        logger.info("Order changes subscription closed")

    async def refresh(self) -> None:
        orders = await self._list_orders(self._laundry_id(), self._state.partition)
        self._state = with_orders(self._state, orders)

    async def on_event(self, event: RealtimeEvent) -> None:
        reduction = reduce(self._state, event)
        self._state = reduction.state
        for effect in reduction.effects:
            try:
                await self._run(effect)
            except Exception as e:
                logger.error(f"Board effect {type(effect).__name__} failed: {e}")

    async def switch_partition(self, partition: Partition) -> None:
        self._state = switch_partition(self._state, partition)
        await self.refresh()

    async def advance(self, order_id: str, target: OrderStatus) -> AdvanceResult:
        result = await self._advance_order(AdvanceOrderDTO(order_id=order_id, status=target))
        try:
            await self.refresh()
        except Exception as e:
            # The transition is committed; the next fetch or event reconciles the list
            logger.error(f"Refresh after advancing order {order_id} failed: {e}")
        return result

    async def choose_fulfillment(self, order_id: str, route: FulfillmentRoute,
                                 courier: Optional[Courier] = None) -> FulfillmentChoice:
        order = await self._get_order(order_id)
        choice = choose_fulfillment(order, route, courier)
        await self.switch_partition(Partition.COMPLETED)
        return choice

    async def _run(self, effect: Effect) -> None:
        if isinstance(effect, PlayAlert):
            await self._alerts.play_sound()
        elif isinstance(effect, ShowNotice):
            await self._alerts.show_notice(effect.title, effect.message)

    def _laundry_id(self) -> str:
        laundry_id = self._context.laundry_id
        if not laundry_id:
            raise ShopNotFoundError("No laundry in the current session")
        return laundry_id
