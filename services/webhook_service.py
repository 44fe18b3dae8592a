# services/webhook_service.py
"""
Webhook ingestion for provider payment status notifications.

A notification is either PROCESSED (payment status change with payment
details, republished on the broadcast channel) or UNRECOGNIZED (acknowledged
and dropped). Unrecognized events are not errors: answering with a failure
would make the provider retry them forever.
"""
import enum
from typing import Any, Optional

from pydantic import ValidationError as SchemaError

from config import PAYMENT_UPDATED_EVENT, PAYMENT_UPDATES_CHANNEL
from logging_config import get_logger
from schemas.webhook import PaymentUpdateEvent, WebhookEnvelope, WebhookResult
from services.broadcaster import BroadcastPublisher

logger = get_logger(__name__)


class WebhookState(str, enum.Enum):
     """Outcome of ingesting a single notification."""
     UNRECOGNIZED = "unrecognized"
     PROCESSED = "processed"


def _parse(payload: Any) -> Optional[WebhookEnvelope]:
     if not isinstance(payload, dict):
          return None
     try:
          return WebhookEnvelope.model_validate(payload)
     except SchemaError as e:
          logger.warning("webhook_schema_mismatch", errors=e.error_count())
          return None


def state_of(envelope: Optional[WebhookEnvelope]) -> WebhookState:
     if envelope is not None and envelope.is_payment_status_change:
          return WebhookState.PROCESSED
     return WebhookState.UNRECOGNIZED


def extract_update(envelope: WebhookEnvelope) -> PaymentUpdateEvent:
     """Pull the broadcast fields out of a payment status change envelope."""
     details = envelope.data.paymentDetails
     return PaymentUpdateEvent(
          paymentId=details.id,
          customerId=envelope.data.customerId,
          merchantId=envelope.data.merchantId,
          status=details.status,
          lastUpdatedDateTime=details.lastUpdatedDateTime,
          eventType=envelope.eventType,
     )


class WebhookIngestor:
     """Turns provider notifications into payment-updated broadcasts."""

     def __init__(self, publisher: BroadcastPublisher):
          self.publisher = publisher

     def ingest(self, payload: Any) -> WebhookResult:
          envelope = _parse(payload)

          if state_of(envelope) is WebhookState.UNRECOGNIZED:
               data = payload.get("data") if isinstance(payload, dict) else None
               logger.info(
                    "webhook_not_processed",
                    event_type=payload.get("eventType") if isinstance(payload, dict) else None,
                    has_payment_details=isinstance(data, dict) and data.get("paymentDetails") is not None,
               )
               return WebhookResult(message="Webhook received but not processed", processed=False)

          update = extract_update(envelope)
          logger.info(
               "webhook_payment_update",
               payment_id=update.paymentId,
               status=update.status,
               customer_id=update.customerId,
          )

          self.publisher.publish(
               PAYMENT_UPDATES_CHANNEL,
               PAYMENT_UPDATED_EVENT,
               update.model_dump(exclude_none=True),
          )

          return WebhookResult(
               message="Webhook received and processed",
               processed=True,
               paymentId=update.paymentId,
               status=update.status,
          )
