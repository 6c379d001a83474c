import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from laundrify.presentation.dependencies import get_process_webhook_use_case, get_webhook_secret
from laundrify.application.process_webhook import (
    ChargeWebhookDTO, ProcessChargeWebhookUseCase, verify_signature
)

logger = logging.getLogger(__name__)

router = APIRouter()

SIGNATURE_HEADER = "verif-hash"


@router.post("/webhooks/flutterwave")
async def flutterwave_webhook(
    request: Request,
    use_case: ProcessChargeWebhookUseCase = Depends(get_process_webhook_use_case),
    secret: str = Depends(get_webhook_secret)
):
    """Flutterwave charge callback"""
    if not verify_signature(request.headers.get(SIGNATURE_HEADER), secret):
        logger.warning("Webhook rejected: missing or wrong signature")
        return JSONResponse(status_code=401, content={"error": "Unauthorized"})

    try:
        payload = await request.json()
        # Anything but an object carries no event and is acknowledged as ignored
        dto = ChargeWebhookDTO.model_validate(payload) if isinstance(payload, dict) else ChargeWebhookDTO()
        outcome = await use_case(dto)
    except Exception as e:
        logger.error(f"Webhook processing failed: {e}")
        return JSONResponse(status_code=400, content={"error": str(e)})

    logger.info(f"Webhook {outcome.value}")
    return {"status": "success"}
