import logging
import re
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel

from laundrify.domain.exceptions import ProfileValidationError, ShopNotFoundError
from laundrify.domain.models import ServiceItem, ShopProfile

logger = logging.getLogger(__name__)

CURRENCY_RE = re.compile(r"^[A-Za-z]{3}$")
TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class UpdateProfileDTO(BaseModel):
    name: Optional[str] = None
    address: Optional[str] = None
    description: Optional[str] = None
    contact_details: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    currency_code: Optional[str] = None
    open_time: Optional[str] = None
    close_time: Optional[str] = None
    services: Optional[dict[str, list[ServiceItem]]] = None


class GetProfileUseCase:
    def __init__(self, unit_of_work):
        self._uow = unit_of_work

    async def __call__(self, laundry_id: str) -> ShopProfile:
        async with self._uow() as uow:
            profile = await uow.shops.get_by_id(laundry_id)
            if not profile:
                raise ShopNotFoundError(f"Laundry {laundry_id} not found")
            return profile


class UpdateProfileUseCase:
    """Owner edits the shop profile. Only the fields sent are written."""

    def __init__(self, unit_of_work):
        self._uow = unit_of_work

    async def __call__(self, laundry_id: str, dto: UpdateProfileDTO) -> ShopProfile:
        values = self._validated_values(dto)
        values["updated_at"] = datetime.now(timezone.utc)

        async with self._uow() as uow:
            found = await uow.shops.update(laundry_id, values)
            if not found:
                raise ShopNotFoundError(f"Laundry {laundry_id} not found")
            await uow.commit()
            profile = await uow.shops.get_by_id(laundry_id)

        logger.info(f"Profile of laundry {laundry_id} updated: {sorted(values)}")
        return profile

    @staticmethod
    def _validated_values(dto: UpdateProfileDTO) -> dict:
        values = dto.model_dump(exclude_unset=True, mode="json")

        currency = values.get("currency_code")
        if "currency_code" in values:
            if not currency or not CURRENCY_RE.match(currency):
                raise ProfileValidationError(
                    "Please enter a valid 3-letter currency code (e.g., USD, NGN)"
                )
            values["currency_code"] = currency.upper()

        for field in ("open_time", "close_time"):
            if field in values and not TIME_RE.match(values[field] or ""):
                raise ProfileValidationError(f"{field} must be in HH:MM format")

        for group, items in (values.get("services") or {}).items():
            if not group.strip():
                raise ProfileValidationError("Service group names cannot be empty")
            if any(not item["name"].strip() for item in items):
                raise ProfileValidationError(f"Every service in '{group}' needs a name")

        return values
