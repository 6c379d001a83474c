import logging
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field

from laundrify.application.interfaces import PaymentGateway
from laundrify.domain.exceptions import PaymentGatewayError, ShopNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_COUNTRY = "NG"
DEFAULT_CONTACT_MOBILE = "08000000000"


class CreateSubaccountDTO(BaseModel):
    account_bank: str = Field(min_length=1)
    account_number: str = Field(min_length=1)
    business_name: str = Field(min_length=1)
    business_email: str = Field(min_length=3)
    business_mobile: Optional[str] = None
    laundry_id: Optional[str] = None
    bank_name: Optional[str] = None
    account_name: Optional[str] = None


class CreateSubaccountUseCase:
    """Creates a split-payout subaccount at the gateway for a shop's bank account."""

    def __init__(self, unit_of_work, gateway: PaymentGateway, split_value: float,
                 country: str = DEFAULT_COUNTRY):
        self._uow = unit_of_work
        self._gateway = gateway
        self._split_value = split_value
        self._country = country

    async def __call__(self, dto: CreateSubaccountDTO) -> str:
        logger.info(f"Creating subaccount for {dto.business_name}")

        result = await self._gateway.create_subaccount({
            "account_bank": dto.account_bank,
            "account_number": dto.account_number,
            "business_name": dto.business_name,
            "business_email": dto.business_email,
            "business_contact": dto.business_name,
            "business_contact_mobile": dto.business_mobile or DEFAULT_CONTACT_MOBILE,
            "country": self._country,
            "split_type": "percentage",
            "split_value": self._split_value,
        })

        if result.get("status") != "success":
            raise PaymentGatewayError(result.get("message") or "Subaccount creation failed")

        subaccount_id = (result.get("data") or {}).get("subaccount_id")
        if not subaccount_id:
            raise PaymentGatewayError("Gateway response has no subaccount_id")

        if dto.laundry_id:
            await self._save_payout_details(dto, subaccount_id)

        logger.info(f"Subaccount {subaccount_id} created for {dto.business_name}")
        return subaccount_id

    async def _save_payout_details(self, dto: CreateSubaccountDTO, subaccount_id: str) -> None:
        async with self._uow() as uow:
            values = {
                "account_name": dto.account_name,
                "account_number": dto.account_number,
                "bank_name": dto.bank_name,
                "bank_code": dto.account_bank,
                "email": dto.business_email,
                "subaccount_id": subaccount_id,
                "updated_at": datetime.now(timezone.utc),
            }
            found = await uow.shops.update(
                dto.laundry_id, {key: value for key, value in values.items() if value is not None}
            )
            if not found:
                raise ShopNotFoundError(f"Laundry {dto.laundry_id} not found")
            await uow.commit()
