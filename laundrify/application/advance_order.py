import logging
from typing import Optional

from pydantic import BaseModel

from laundrify.application.interfaces import NotificationsService
from laundrify.domain.exceptions import OrderNotFoundError, StaleOrderError
from laundrify.domain.lifecycle import ensure_can_advance
from laundrify.domain.models import Order, OrderStatus

logger = logging.getLogger(__name__)


class AdvanceOrderDTO(BaseModel):
    order_id: str
    status: OrderStatus


class NotificationOutcome(BaseModel):
    delivered: bool
    error: Optional[str] = None


class AdvanceResult(BaseModel):
    order: Order
    notification: NotificationOutcome
    prompt_fulfillment: bool = False


class AdvanceOrderUseCase:
    """Owner moves an order one step forward.

    The status write is committed first. The customer notification is sent
    afterwards, once; its outcome is returned to the caller and never undoes
    the status change.
    """

    def __init__(self, unit_of_work, notifications_service: NotificationsService):
        self._uow = unit_of_work
        self._notifications = notifications_service

    async def __call__(self, dto: AdvanceOrderDTO) -> AdvanceResult:
        logger.info(f"Advancing order {dto.order_id} to {dto.status.value}")

        async with self._uow() as uow:
            order = await uow.orders.get_by_id(dto.order_id)
            if not order:
                raise OrderNotFoundError(f"Order {dto.order_id} not found")

            target = ensure_can_advance(order, dto.status)

            changed = await uow.orders.update_status(order.id, target, expected=order.status)
            if not changed:
                raise StaleOrderError(order.id, order.status)
            await uow.commit()

        updated = order.model_copy(update={"status": target})
        logger.info(f"Order {updated.id} is now {target.value}")

        notification = await self._notify_customer(updated)
        return AdvanceResult(
            order=updated,
            notification=notification,
            prompt_fulfillment=target == OrderStatus.READY,
        )

    async def _notify_customer(self, order: Order) -> NotificationOutcome:
        try:
            await self._notifications.notify_customer(order)
        except Exception as e:
            logger.error(f"Failed to notify customer for order {order.id}: {e}")
            return NotificationOutcome(delivered=False, error=str(e))
        logger.info(f"Customer notified for order {order.id} ({order.status.value})")
        return NotificationOutcome(delivered=True)
