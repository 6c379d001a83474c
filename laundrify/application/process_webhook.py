import hmac
import logging
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel

from laundrify.domain.exceptions import WebhookPayloadError

logger = logging.getLogger(__name__)

CHARGE_COMPLETED = "charge.completed"
CHARGE_SUCCESSFUL = "successful"


class WebhookOutcome(str, Enum):
    APPLIED = "applied"
    IGNORED = "ignored"


class ChargeWebhookDTO(BaseModel):
    event: Optional[str] = None
    data: Any = None


def verify_signature(signature: Optional[str], secret: str) -> bool:
    """Shared-secret check of the ``verif-hash`` header."""
    if not signature or not secret:
        return False
    return hmac.compare_digest(signature.encode(), secret.encode())


class ProcessChargeWebhookUseCase:
    """Sole trusted writer of payment_status.

    Every other event type is acknowledged and dropped so the gateway does not
    retry it.
    """

    def __init__(self, unit_of_work):
        self._uow = unit_of_work

    async def __call__(self, dto: ChargeWebhookDTO) -> WebhookOutcome:
        data = dto.data if isinstance(dto.data, dict) else {}

        if dto.event != CHARGE_COMPLETED or data.get("status") != CHARGE_SUCCESSFUL:
            logger.info(f"Ignoring gateway event {dto.event} (status={data.get('status')})")
            return WebhookOutcome.IGNORED

        order_id = data.get("tx_ref")
        if not order_id:
            raise WebhookPayloadError("Charge event without tx_ref")

        async with self._uow() as uow:
            changed = await uow.orders.mark_paid(str(order_id))
            await uow.commit()

        if changed:
            logger.info(f"Order {order_id} marked paid")
        else:
            # Redelivery of an applied charge, or a reference we do not hold
            logger.warning(f"Charge for order {order_id} changed no rows")
        return WebhookOutcome.APPLIED
