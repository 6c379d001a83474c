from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, List, Optional

from laundrify.domain.models import Order, OrderStatus, RealtimeEvent, ShopProfile


class OrderRepository(ABC):
    @abstractmethod
    async def get_by_id(self, order_id: str) -> Optional[Order]:
        pass

    @abstractmethod
    async def list_by_laundry(self, laundry_id: str, statuses) -> List[Order]:
        pass

    @abstractmethod
    async def update_status(self, order_id: str, status: OrderStatus, expected: OrderStatus) -> bool:
        """Compare-and-set on status. False when the row no longer holds ``expected``."""
        pass

    @abstractmethod
    async def mark_paid(self, order_id: str) -> bool:
        """Trusted write: payment_status='paid', status='received'. False when nothing changed."""
        pass


class ShopRepository(ABC):
    @abstractmethod
    async def get_by_id(self, laundry_id: str) -> Optional[ShopProfile]:
        pass

    @abstractmethod
    async def update(self, laundry_id: str, values: dict) -> bool:
        pass

    @abstractmethod
    async def set_push_token(self, laundry_id: str, token: Optional[str]) -> bool:
        pass


class UnitOfWork(ABC):
    @property
    @abstractmethod
    def orders(self) -> OrderRepository:
        pass

    @property
    @abstractmethod
    def shops(self) -> ShopRepository:
        pass

    @abstractmethod
    async def __call__(self):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass


class NotificationsService(ABC):
    @abstractmethod
    async def notify_customer(self, order: Order) -> None:
        """Raises NotificationServiceError when the function call fails."""
        pass


class PaymentGateway(ABC):
    @abstractmethod
    async def create_subaccount(self, payload: dict) -> dict:
        pass


class Subscription(ABC):
    @property
    @abstractmethod
    def active(self) -> bool:
        """False once delivery has stopped and the subscription must be reopened."""
        pass

    @abstractmethod
    async def close(self) -> None:
        pass


class ChangeFeed(ABC):
    @abstractmethod
    async def subscribe(
        self,
        table: str,
        event_type: str,
        filters: dict[str, Any],
        callback: Callable[[RealtimeEvent], Awaitable[None]],
    ) -> Subscription:
        pass


class AlertSink(ABC):
    @abstractmethod
    async def play_sound(self) -> None:
        pass

    @abstractmethod
    async def show_notice(self, title: str, message: str) -> None:
        pass
