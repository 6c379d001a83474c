from fastapi import Depends

from laundrify.config import settings
from laundrify.database import AsyncSessionLocal
from laundrify.application.advance_order import AdvanceOrderUseCase
from laundrify.application.create_subaccount import CreateSubaccountUseCase
from laundrify.application.get_orders import GetOrderUseCase, ListOrdersUseCase
from laundrify.application.manage_profile import GetProfileUseCase, UpdateProfileUseCase
from laundrify.application.process_webhook import ProcessChargeWebhookUseCase
from laundrify.application.push_tokens import NotificationDispatcher
from laundrify.infrastructure.http_clients import FlutterwaveClient, HTTPNotificationsClient
from laundrify.infrastructure.unit_of_work import UnitOfWork


# Adapters
def get_unit_of_work():
    return UnitOfWork(AsyncSessionLocal)


def get_notifications_service():
    return HTTPNotificationsClient(settings.FUNCTIONS_BASE_URL, settings.FUNCTIONS_API_KEY)


def get_payment_gateway():
    return FlutterwaveClient(settings.FLW_BASE_URL, settings.FLW_SECRET_KEY)


def get_webhook_secret() -> str:
    return settings.FLW_SECRET_HASH


# Use case factories
def get_list_orders_use_case(uow=Depends(get_unit_of_work)):
    return ListOrdersUseCase(uow)


def get_get_order_use_case(uow=Depends(get_unit_of_work)):
    return GetOrderUseCase(uow)


def get_advance_order_use_case(
    uow=Depends(get_unit_of_work),
    notifications=Depends(get_notifications_service)
):
    return AdvanceOrderUseCase(uow, notifications)


def get_process_webhook_use_case(uow=Depends(get_unit_of_work)):
    return ProcessChargeWebhookUseCase(uow)


def get_create_subaccount_use_case(
    uow=Depends(get_unit_of_work),
    gateway=Depends(get_payment_gateway)
):
    return CreateSubaccountUseCase(uow, gateway, settings.PLATFORM_SPLIT_VALUE)


def get_get_profile_use_case(uow=Depends(get_unit_of_work)):
    return GetProfileUseCase(uow)


def get_update_profile_use_case(uow=Depends(get_unit_of_work)):
    return UpdateProfileUseCase(uow)


def get_notification_dispatcher(uow=Depends(get_unit_of_work)):
    return NotificationDispatcher(uow)
