from typing import Optional, List
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from laundrify.domain.models import Order, OrderStatus, PaymentStatus, ShopProfile
from laundrify.infrastructure.db_schema import orders_tbl, laundries_tbl
from laundrify.application.interfaces import OrderRepository, ShopRepository


class SQLAlchemyOrderRepository(OrderRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, order_id: str) -> Optional[Order]:
        result = await self._session.execute(
            select(orders_tbl).where(orders_tbl.c.id == order_id)
        )
        row = result.fetchone()
        return self._to_domain(row) if row else None

    async def list_by_laundry(self, laundry_id: str, statuses) -> List[Order]:
        result = await self._session.execute(
            select(orders_tbl)
            .where(
                orders_tbl.c.laundry_id == laundry_id,
                orders_tbl.c.status.in_([OrderStatus(s).value for s in statuses])
            )
            .order_by(orders_tbl.c.created_at.desc())
        )
        return [self._to_domain(row) for row in result.fetchall()]

    async def update_status(self, order_id: str, status: OrderStatus, expected: OrderStatus) -> bool:
        stmt = (
            update(orders_tbl)
            .where(
                orders_tbl.c.id == order_id,
                orders_tbl.c.status == OrderStatus(expected).value
            )
            .values(status=OrderStatus(status).value)
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    async def mark_paid(self, order_id: str) -> bool:
        stmt = (
            update(orders_tbl)
            .where(
                orders_tbl.c.id == order_id,
                orders_tbl.c.payment_status != PaymentStatus.PAID.value
            )
            .values(
                payment_status=PaymentStatus.PAID.value,
                status=OrderStatus.RECEIVED.value
            )
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    def _to_domain(self, row) -> Order:
        """DB row → Domain"""
        return Order.model_validate(dict(row._mapping))


class SQLAlchemyShopRepository(ShopRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, laundry_id: str) -> Optional[ShopProfile]:
        result = await self._session.execute(
            select(laundries_tbl).where(laundries_tbl.c.id == laundry_id)
        )
        row = result.fetchone()
        return self._to_domain(row) if row else None

    async def update(self, laundry_id: str, values: dict) -> bool:
        columns = {key: value for key, value in values.items() if key in laundries_tbl.c}
        stmt = (
            update(laundries_tbl)
            .where(laundries_tbl.c.id == laundry_id)
            .values(**columns)
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    async def set_push_token(self, laundry_id: str, token: Optional[str]) -> bool:
        stmt = (
            update(laundries_tbl)
            .where(laundries_tbl.c.id == laundry_id)
            .values(expo_push_token=token)
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    def _to_domain(self, row) -> ShopProfile:
        data = dict(row._mapping)
        data["services"] = data.get("services") or {}
        return ShopProfile.model_validate(data)
