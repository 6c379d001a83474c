import httpx
import logging
from typing import Optional

from laundrify.application.interfaces import NotificationsService, PaymentGateway
from laundrify.domain.models import Order
from laundrify.domain.exceptions import NotificationServiceError, PaymentGatewayError

logger = logging.getLogger(__name__)


class FlutterwaveClient(PaymentGateway):
    def __init__(self, base_url: str, secret_key: str,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self._base_url = base_url.rstrip("/")
        self._secret_key = secret_key
        self._transport = transport

    async def create_subaccount(self, payload: dict) -> dict:
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(
                    f"{self._base_url}/v3/subaccounts",
                    json=payload,
                    headers={
                        "Authorization": f"Bearer {self._secret_key}",
                        "Content-Type": "application/json"
                    },
                    timeout=30.0
                )
        except httpx.RequestError as e:
            logger.error(f"Payment gateway connection error: {e}")
            raise PaymentGatewayError(f"Payment gateway unavailable: {str(e)}")

        try:
            result = response.json()
        except ValueError:
            result = None
        if not isinstance(result, dict):
            raise PaymentGatewayError(f"Payment gateway error: {response.status_code}")

        if response.status_code >= 400:
            logger.warning(f"Subaccount request rejected ({response.status_code}): {result.get('message')}")
        return result


class HTTPNotificationsClient(NotificationsService):
    """Calls the customer-facing ``send-order-notif`` function. One attempt, no retries."""

    function_name = "send-order-notif"

    def __init__(self, base_url: str, api_key: str,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._transport = transport

    async def notify_customer(self, order: Order) -> None:
        if not self._base_url:
            raise NotificationServiceError("Functions URL is not configured")

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(
                    f"{self._base_url}/{self.function_name}",
                    json={
                        "record": order.model_dump(mode="json"),
                        "type": "customer_update"
                    },
                    headers={"Authorization": f"Bearer {self._api_key}"},
                    timeout=10.0
                )
        except httpx.RequestError as e:
            raise NotificationServiceError(f"Notification function unavailable: {str(e)}")

        if response.status_code >= 300:
            raise NotificationServiceError(f"Notification function returned {response.status_code}")
