import pytest

from laundrify.domain.exceptions import InvalidTransitionError
from laundrify.domain.lifecycle import (
    COURIER_LINKS, can_advance, choose_fulfillment, classify, ensure_can_advance, statuses_for
)
from laundrify.domain.models import (
    FORWARD_CHAIN, Courier, FulfillmentRoute, OrderStatus, Partition
)

from conftest import make_order


@pytest.mark.parametrize("current, target", list(zip(FORWARD_CHAIN, FORWARD_CHAIN[1:])))
def test_advance_to_immediate_successor(current, target):
    order = make_order(status=current)
    assert can_advance(order, target)
    assert ensure_can_advance(order, target.value) == target


@pytest.mark.parametrize("current", FORWARD_CHAIN)
def test_advance_rejects_every_other_target(current):
    order = make_order(status=current)
    position = FORWARD_CHAIN.index(current)
    for target in FORWARD_CHAIN:
        if FORWARD_CHAIN.index(target) == position + 1:
            continue
        assert not can_advance(order, target)
        with pytest.raises(InvalidTransitionError):
            ensure_can_advance(order, target)
    assert order.status == current


def test_picked_up_is_terminal():
    assert make_order(status=OrderStatus.PICKED_UP).next_status() is None


def test_unknown_target_is_rejected():
    order = make_order(status=OrderStatus.PAID)
    assert not can_advance(order, "washed")
    with pytest.raises(InvalidTransitionError):
        ensure_can_advance(order, "washed")


@pytest.mark.parametrize("status, partition", [
    (OrderStatus.PAID, Partition.ONGOING),
    (OrderStatus.RECEIVED, Partition.ONGOING),
    (OrderStatus.PROCESSING, Partition.ONGOING),
    (OrderStatus.READY, Partition.COMPLETED),
    (OrderStatus.PICKED_UP, Partition.COMPLETED),
])
def test_classify(status, partition):
    assert classify(make_order(status=status)) == partition
    assert classify(status.value) == partition


def test_statuses_for_covers_the_chain_once():
    ongoing = statuses_for(Partition.ONGOING)
    completed = statuses_for("Completed")
    assert set(ongoing) | set(completed) == set(FORWARD_CHAIN)
    assert not set(ongoing) & set(completed)


def test_choose_courier_gives_redirect():
    order = make_order(status=OrderStatus.READY)
    choice = choose_fulfillment(order, FulfillmentRoute.COURIER, Courier.BOLT)
    assert choice.redirect_url == COURIER_LINKS[Courier.BOLT]
    assert choice.partition == Partition.COMPLETED
    assert order.status == OrderStatus.READY


def test_choose_pickup_has_no_redirect():
    choice = choose_fulfillment(make_order(status=OrderStatus.READY), "pickup", Courier.UBER)
    assert choice.route == FulfillmentRoute.PICKUP
    assert choice.courier is None
    assert choice.redirect_url is None


def test_courier_route_needs_courier():
    with pytest.raises(ValueError):
        choose_fulfillment(make_order(status=OrderStatus.READY), FulfillmentRoute.COURIER)


def test_fulfillment_only_for_ready_orders():
    with pytest.raises(InvalidTransitionError):
        choose_fulfillment(make_order(status=OrderStatus.PROCESSING), FulfillmentRoute.OWN_DELIVERY)
