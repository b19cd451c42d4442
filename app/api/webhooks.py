from __future__ import annotations

import json
import logging

from fastapi import APIRouter, BackgroundTasks, HTTPException, Request, Response
from fastapi.responses import PlainTextResponse

from app.application.dto.webhook_event import WebhookEventDTO
from app.infrastructure.whatsapp.webhook_verify import verify_get_request
from app.wiring.dependencies import get_handle_incoming_message_use_case
from app.core.config import settings


router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/webhooks/whatsapp")
def verify_webhook(request: Request):
    params = request.query_params
    if not params.get("hub.mode"):
        # Whapi.Cloud pings the webhook URL with a bare GET
        return {"status": "ok"}
    challenge = verify_get_request(params, settings.WHATSAPP_VERIFY_TOKEN)
    if challenge is not None:
        return PlainTextResponse(challenge)
    logger.warning("Webhook verification failed", extra={"endpoint": "/webhooks/whatsapp"})
    raise HTTPException(status_code=403, detail="Verification failed")


@router.post("/webhooks/whatsapp")
async def whatsapp_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
) -> Response:
    try:
        try:
            use_case = get_handle_incoming_message_use_case()
        except Exception as e:
            logger.exception("Failed to initialize use case", extra={"reason": str(e)})
            return Response(status_code=500)

        body = await request.body()
        try:
            payload = json.loads(body.decode("utf-8")) if body else {}
        except Exception:
            logger.exception("Failed to parse webhook body")
            return Response(status_code=400)

        try:
            dto = WebhookEventDTO.model_validate(payload)
            events = dto.extract_events(settings.WHAPI_BASE_URL)

            logger.info("Webhook received", extra={"endpoint": "/webhooks/whatsapp", "value": len(events)})

            for event in events:
                background_tasks.add_task(use_case.handle, event)

            return Response(status_code=200)
        except Exception as e:
            logger.exception("Error processing webhook event", extra={"reason": str(e)})
            return Response(status_code=500)
    except Exception as e:
        logger.exception("Fatal error in webhook handler", extra={"reason": str(e)})
        return Response(status_code=500)
