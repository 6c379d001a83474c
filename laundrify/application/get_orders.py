from typing import List

from laundrify.domain.exceptions import OrderNotFoundError
from laundrify.domain.lifecycle import statuses_for
from laundrify.domain.models import Order, Partition


class GetOrderUseCase:
    def __init__(self, unit_of_work):
        self._uow = unit_of_work

    async def __call__(self, order_id: str) -> Order:
        async with self._uow() as uow:
            order = await uow.orders.get_by_id(order_id)
            if not order:
                raise OrderNotFoundError(f"Order {order_id} not found")
            return order


class ListOrdersUseCase:
    """Orders of one shop in a display partition, newest first."""

    def __init__(self, unit_of_work):
        self._uow = unit_of_work

    async def __call__(self, laundry_id: str, partition: Partition) -> List[Order]:
        async with self._uow() as uow:
            return await uow.orders.list_by_laundry(laundry_id, statuses_for(partition))
