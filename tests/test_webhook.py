import json

import pytest
from fastapi.testclient import TestClient

from laundrify.application.process_webhook import (
    ChargeWebhookDTO, ProcessChargeWebhookUseCase, WebhookOutcome, verify_signature
)
from laundrify.domain.exceptions import WebhookPayloadError
from laundrify.domain.models import OrderStatus, PaymentStatus
from laundrify.main import app
from laundrify.presentation.dependencies import get_unit_of_work, get_webhook_secret

SECRET = "flw-test-hash"


def charge(tx_ref="order-4", event="charge.completed", status="successful"):
    return {"event": event, "data": {"id": 4521, "tx_ref": tx_ref, "status": status, "amount": 2500}}


@pytest.fixture
def client(uow):
    app.dependency_overrides[get_unit_of_work] = lambda: uow
    app.dependency_overrides[get_webhook_secret] = lambda: SECRET
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_verify_signature():
    assert verify_signature(SECRET, SECRET)
    assert not verify_signature("wrong", SECRET)
    assert not verify_signature(None, SECRET)
    assert not verify_signature(SECRET, "")


async def test_successful_charge_marks_order_paid(uow):
    outcome = await ProcessChargeWebhookUseCase(uow)(ChargeWebhookDTO(**charge()))

    order = uow.orders.orders["order-4"]
    assert outcome == WebhookOutcome.APPLIED
    assert order.payment_status == PaymentStatus.PAID
    assert order.status == OrderStatus.RECEIVED
    assert uow.orders.mark_paid_calls == 1
    assert uow.commits == 1


@pytest.mark.parametrize("payload", [
    charge(event="transfer.completed"),
    charge(status="failed"),
    {"event": "charge.completed", "data": None},
])
async def test_other_events_are_ignored(uow, payload):
    outcome = await ProcessChargeWebhookUseCase(uow)(ChargeWebhookDTO(**payload))

    assert outcome == WebhookOutcome.IGNORED
    assert uow.orders.mark_paid_calls == 0


async def test_missing_tx_ref(uow):
    with pytest.raises(WebhookPayloadError):
        await ProcessChargeWebhookUseCase(uow)(ChargeWebhookDTO(**charge(tx_ref=None)))


async def test_redelivered_charge_is_acknowledged(uow):
    use_case = ProcessChargeWebhookUseCase(uow)
    await use_case(ChargeWebhookDTO(**charge()))

    assert await use_case(ChargeWebhookDTO(**charge())) == WebhookOutcome.APPLIED
    assert uow.orders.orders["order-4"].status == OrderStatus.RECEIVED


def test_route_rejects_bad_signature_before_store(client, uow):
    response = client.post("/webhooks/flutterwave", json=charge(), headers={"verif-hash": "nope"})

    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}
    assert uow.orders.mark_paid_calls == 0


def test_route_rejects_missing_signature(client, uow):
    response = client.post("/webhooks/flutterwave", json=charge())

    assert response.status_code == 401
    assert uow.orders.mark_paid_calls == 0


def test_route_applies_charge(client, uow):
    response = client.post("/webhooks/flutterwave", json=charge(), headers={"verif-hash": SECRET})

    assert response.status_code == 200
    assert response.json() == {"status": "success"}
    assert uow.orders.orders["order-4"].payment_status == PaymentStatus.PAID


def test_route_acknowledges_ignored_event(client, uow):
    response = client.post(
        "/webhooks/flutterwave", json=charge(status="failed"), headers={"verif-hash": SECRET}
    )

    assert response.status_code == 200
    assert uow.orders.mark_paid_calls == 0


def test_route_unparsable_body(client):
    response = client.post(
        "/webhooks/flutterwave", content=b"{not json", headers={"verif-hash": SECRET}
    )

    assert response.status_code == 400
    assert "error" in response.json()


def test_route_store_failure(client, uow):
    uow.fail_on_commit = RuntimeError("connection reset")

    response = client.post(
        "/webhooks/flutterwave", content=json.dumps(charge()), headers={"verif-hash": SECRET}
    )

    assert response.status_code == 400
    assert response.json() == {"error": "connection reset"}


@pytest.mark.parametrize("body", [b"[]", b"\"charge.completed\"", b"null"])
def test_route_acknowledges_non_object_body(client, uow, body):
    response = client.post("/webhooks/flutterwave", content=body, headers={"verif-hash": SECRET})

    assert response.status_code == 200
    assert response.json() == {"status": "success"}
    assert uow.orders.mark_paid_calls == 0
