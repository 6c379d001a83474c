import logging
from typing import Optional

from laundrify.domain.exceptions import ShopNotFoundError

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """Keeps the shop's single device push token in the store.

    A new registration overwrites the previous token. Disabling notifications
    clears it.
    """

    def __init__(self, unit_of_work):
        self._uow = unit_of_work

    async def register_device(self, laundry_id: str, token: Optional[str]) -> bool:
        if not token:
            # Permission denied or no physical device: nothing to deliver to
            logger.info(f"No push token for laundry {laundry_id}, registration skipped")
            return False

        await self._write(laundry_id, token)
        logger.info(f"Push token registered for laundry {laundry_id}")
        return True

    async def disable(self, laundry_id: str) -> None:
        await self._write(laundry_id, None)
        logger.info(f"Push notifications disabled for laundry {laundry_id}")

    async def is_enabled(self, laundry_id: str) -> bool:
        async with self._uow() as uow:
            profile = await uow.shops.get_by_id(laundry_id)
            if not profile:
                raise ShopNotFoundError(f"Laundry {laundry_id} not found")
            return bool(profile.expo_push_token)

    async def _write(self, laundry_id: str, token: Optional[str]) -> None:
        async with self._uow() as uow:
            found = await uow.shops.set_push_token(laundry_id, token)
            if not found:
                raise ShopNotFoundError(f"Laundry {laundry_id} not found")
            await uow.commit()
