import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from laundrify.presentation.dependencies import (
    get_advance_order_use_case,
    get_create_subaccount_use_case,
    get_get_order_use_case,
    get_get_profile_use_case,
    get_list_orders_use_case,
    get_notification_dispatcher,
    get_update_profile_use_case,
)
from laundrify.presentation.schemas import (
    AdvanceOrderRequest, AdvanceOrderResponse, CreateSubaccountRequest, CreateSubaccountResponse,
    ErrorResponse, FulfillmentRequest, OrderResponse, PushTokenRequest, PushTokenResponse
)
from laundrify.application.advance_order import AdvanceOrderDTO, AdvanceOrderUseCase
from laundrify.application.create_subaccount import CreateSubaccountDTO, CreateSubaccountUseCase
from laundrify.application.get_orders import GetOrderUseCase, ListOrdersUseCase
from laundrify.application.manage_profile import GetProfileUseCase, UpdateProfileDTO, UpdateProfileUseCase
from laundrify.application.push_tokens import NotificationDispatcher
from laundrify.domain.exceptions import (
    InvalidTransitionError, OrderNotFoundError, PaymentGatewayError, ProfileValidationError,
    ShopNotFoundError, StaleOrderError
)
from laundrify.domain.lifecycle import FulfillmentChoice, choose_fulfillment
from laundrify.domain.models import Partition, ShopProfile

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/laundries/{laundry_id}/orders", response_model=List[OrderResponse])
async def list_orders(
    laundry_id: str,
    partition: Partition = Partition.ONGOING,
    use_case: ListOrdersUseCase = Depends(get_list_orders_use_case)
):
    """Orders of a laundry in the Ongoing or Completed tab"""
    try:
        orders = await use_case(laundry_id, partition)
    except SQLAlchemyError as e:
        logger.error(f"Failed to load orders of laundry {laundry_id}: {e}")
        raise HTTPException(status_code=503, detail="Could not load orders")
    return [OrderResponse.from_domain(order) for order in orders]


@router.get(
    "/orders/{order_id}",
    response_model=OrderResponse,
    responses={404: {"model": ErrorResponse}}
)
async def get_order(
    order_id: str,
    use_case: GetOrderUseCase = Depends(get_get_order_use_case)
):
    try:
        order = await use_case(order_id)
    except OrderNotFoundError:
        raise HTTPException(status_code=404, detail="Order not found")
    return OrderResponse.from_domain(order)


@router.post(
    "/orders/{order_id}/advance",
    response_model=AdvanceOrderResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}, 503: {"model": ErrorResponse}}
)
async def advance_order(
    order_id: str,
    request: AdvanceOrderRequest,
    use_case: AdvanceOrderUseCase = Depends(get_advance_order_use_case)
):
    """Move the order to the next fulfillment step"""
    try:
        result = await use_case(AdvanceOrderDTO(order_id=order_id, status=request.status))
    except OrderNotFoundError:
        raise HTTPException(status_code=404, detail="Order not found")
    except (InvalidTransitionError, StaleOrderError) as e:
        raise HTTPException(status_code=409, detail=str(e))
    except SQLAlchemyError as e:
        logger.error(f"Failed to update order {order_id}: {e}")
        raise HTTPException(status_code=503, detail="Could not update the order, try again")
    return AdvanceOrderResponse.from_result(result)


@router.post(
    "/orders/{order_id}/fulfillment",
    response_model=FulfillmentChoice,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}}
)
async def choose_order_fulfillment(
    order_id: str,
    request: FulfillmentRequest,
    use_case: GetOrderUseCase = Depends(get_get_order_use_case)
):
    """How a ready order reaches the customer; moves it to the Completed tab"""
    try:
        order = await use_case(order_id)
        return choose_fulfillment(order, request.route, request.courier)
    except OrderNotFoundError:
        raise HTTPException(status_code=404, detail="Order not found")
    except InvalidTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get(
    "/laundries/{laundry_id}/profile",
    response_model=ShopProfile,
    responses={404: {"model": ErrorResponse}}
)
async def get_profile(
    laundry_id: str,
    use_case: GetProfileUseCase = Depends(get_get_profile_use_case)
):
    try:
        return await use_case(laundry_id)
    except ShopNotFoundError:
        raise HTTPException(status_code=404, detail="Laundry not found")


@router.put(
    "/laundries/{laundry_id}/profile",
    response_model=ShopProfile,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}
)
async def update_profile(
    laundry_id: str,
    request: UpdateProfileDTO,
    use_case: UpdateProfileUseCase = Depends(get_update_profile_use_case)
):
    try:
        return await use_case(laundry_id, request)
    except ProfileValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ShopNotFoundError:
        raise HTTPException(status_code=404, detail="Laundry not found")


@router.get("/laundries/{laundry_id}/push-token", response_model=PushTokenResponse)
async def push_token_status(
    laundry_id: str,
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher)
):
    try:
        return PushTokenResponse(enabled=await dispatcher.is_enabled(laundry_id))
    except ShopNotFoundError:
        raise HTTPException(status_code=404, detail="Laundry not found")


@router.put("/laundries/{laundry_id}/push-token", response_model=PushTokenResponse)
async def register_push_token(
    laundry_id: str,
    request: PushTokenRequest,
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher)
):
    try:
        return PushTokenResponse(enabled=await dispatcher.register_device(laundry_id, request.token))
    except ShopNotFoundError:
        raise HTTPException(status_code=404, detail="Laundry not found")


@router.delete("/laundries/{laundry_id}/push-token", response_model=PushTokenResponse)
async def disable_push_token(
    laundry_id: str,
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher)
):
    try:
        await dispatcher.disable(laundry_id)
    except ShopNotFoundError:
        raise HTTPException(status_code=404, detail="Laundry not found")
    return PushTokenResponse(enabled=False)


@router.post(
    "/subaccounts",
    response_model=CreateSubaccountResponse,
    responses={400: {"description": "Gateway or store error"}}
)
async def create_subaccount(
    request: CreateSubaccountRequest,
    use_case: CreateSubaccountUseCase = Depends(get_create_subaccount_use_case)
):
    """Create the payout subaccount at the payment gateway"""
    try:
        subaccount_id = await use_case(CreateSubaccountDTO(**request.model_dump()))
    except (PaymentGatewayError, ShopNotFoundError, SQLAlchemyError, ValueError) as e:
        logger.error(f"Subaccount creation failed: {e}")
        return JSONResponse(status_code=400, content={"error": str(e)})
    return CreateSubaccountResponse(subaccount_id=subaccount_id)
