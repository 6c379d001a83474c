import pytest
from sqlalchemy.exc import OperationalError

from laundrify.application.advance_order import AdvanceOrderUseCase
from laundrify.application.context import AppContext, Session
from laundrify.application.get_orders import GetOrderUseCase, ListOrdersUseCase
from laundrify.application.orders_board import OrdersBoard
from laundrify.domain.exceptions import InvalidTransitionError, ShopNotFoundError
from laundrify.domain.models import Courier, FulfillmentRoute, OrderStatus, Partition, RealtimeEvent

from conftest import LAUNDRY_ID, FakeAlertSink, FakeChangeFeed, make_order


@pytest.fixture
def feed():
    return FakeChangeFeed()


@pytest.fixture
def alerts():
    return FakeAlertSink()


@pytest.fixture
def board(uow, notifications, feed, alerts):
    return OrdersBoard(
        context=AppContext(session=Session(user_id="owner-1", laundry_id=LAUNDRY_ID)),
        list_orders=ListOrdersUseCase(uow),
        get_order=GetOrderUseCase(uow),
        advance_order=AdvanceOrderUseCase(uow, notifications),
        feed=feed,
        alerts=alerts,
    )


def paid_event(order_id="order-new"):
    return RealtimeEvent.model_validate({
        "eventType": "UPDATE",
        "table": "orders",
        "old": {"status": "received"},
        "new": make_order(order_id, OrderStatus.PAID, customer_name="Bola").model_dump(mode="json"),
    })


async def test_focus_fetches_and_subscribes_once(board, feed):
    await board.focus()
    await board.focus()

    assert [o.id for o in board.state.orders] == ["order-2", "order-1", "order-4"]
    assert len(feed.subscriptions) == 1
    subscription = feed.subscriptions[0]
    assert subscription["table"] == "orders"
    assert subscription["event_type"] == "UPDATE"
    assert subscription["filters"] == {"laundry_id": LAUNDRY_ID}


async def test_blur_closes_subscription(board, feed):
    await board.focus()
    await board.blur()
    await board.blur()

    assert not board.is_subscribed
    assert feed.subscriptions[0]["subscription"].closed == 1

    await board.focus()
    assert len(feed.subscriptions) == 2


async def test_paid_event_plays_alert_and_merges(board, feed, alerts):
    await board.focus()
    await feed.subscriptions[0]["callback"](paid_event())

    assert alerts.sounds == 1
    assert alerts.notices == [("New Paid Order!", "Customer Bola has just paid for an order!")]
    assert board.state.orders[0].id == "order-new"


async def test_alert_failure_does_not_stop_merge(board, alerts):
    async def broken():
        raise RuntimeError("no audio device")

    alerts.play_sound = broken
    await board.focus()
    await board.on_event(paid_event())

    assert alerts.notices
    assert board.state.orders[0].id == "order-new"


async def test_switch_partition_refetches(board):
    await board.focus()
    await board.switch_partition(Partition.COMPLETED)

    assert board.state.partition == Partition.COMPLETED
    assert [o.id for o in board.state.orders] == ["order-3"]


async def test_advance_refreshes_list(board, uow, notifications):
    await board.focus()
    result = await board.advance("order-2", OrderStatus.READY)

    assert result.prompt_fulfillment
    assert uow.orders.orders["order-2"].status == OrderStatus.READY
    assert "order-2" not in {o.id for o in board.state.orders}
    assert notifications.sent[0].id == "order-2"


async def test_choose_fulfillment_moves_to_completed(board):
    await board.focus()
    choice = await board.choose_fulfillment("order-3", FulfillmentRoute.COURIER, Courier.UBER)

    assert choice.redirect_url == "https://m.uber.com/ul/"
    assert board.state.partition == Partition.COMPLETED


async def test_choose_fulfillment_rejects_unready_order(board):
    with pytest.raises(InvalidTransitionError):
        await board.choose_fulfillment("order-1", FulfillmentRoute.PICKUP)


async def test_focus_without_laundry(uow, notifications, feed, alerts):
    board = OrdersBoard(
        context=AppContext(session=Session(user_id="owner-1")),
        list_orders=ListOrdersUseCase(uow),
        get_order=GetOrderUseCase(uow),
        advance_order=AdvanceOrderUseCase(uow, notifications),
        feed=feed,
        alerts=alerts,
    )
    with pytest.raises(ShopNotFoundError):
        await board.focus()
    assert feed.subscriptions == []


async def test_focus_reopens_dead_subscription(board, feed):
    await board.focus()
    feed.subscriptions[0]["subscription"].dead = True
    assert not board.is_subscribed

    await board.focus()

    assert len(feed.subscriptions) == 2
    assert feed.subscriptions[0]["subscription"].closed == 1
    assert board.is_subscribed


async def test_failed_advance_leaves_board_untouched(board, uow, notifications):
    await board.focus()
    before = board.state
    uow.fail_on_commit = OperationalError("UPDATE", {}, Exception("connection reset"))

    with pytest.raises(OperationalError):
        await board.advance("order-2", OrderStatus.READY)

    assert board.state == before
    assert board.state.orders[0].status == OrderStatus.PROCESSING
    assert notifications.sent == []
