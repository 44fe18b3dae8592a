# routers/webhooks.py
"""
Provider webhook receiver.

POST /api/webhooks/payment always answers 200 once the body is parsed;
"processed" tells whether a payment-updated broadcast was attempted.
No signature verification is performed on the incoming notification.
"""
from typing import Any

from fastapi import APIRouter, Body, Depends

from logging_config import get_logger
from schemas.webhook import WebhookResult
from services.broadcaster import BroadcastPublisher, get_publisher
from services.webhook_service import WebhookIngestor

logger = get_logger(__name__)

router = APIRouter(prefix="/api/webhooks", tags=["webhooks"])


@router.post("/payment", response_model=WebhookResult, response_model_exclude_none=True)
def payment_webhook(
     payload: Any = Body(None),
     publisher: BroadcastPublisher = Depends(get_publisher),
):
     """Receives Worldpay text-to-pay conversation status notifications."""
     logger.info("webhook_received", payload=payload)
     return WebhookIngestor(publisher).ingest(payload)
