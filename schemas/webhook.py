# schemas/webhook.py
"""
Schemas for provider webhook envelopes and the payment-update broadcast.
"""
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict


PAYMENT_STATUS_EVENT_TYPE = "texttopay.conversation.status"


class PaymentDetails(BaseModel):
     """Provider-defined; values are relayed as received, whatever their JSON type."""

     id: Optional[Any] = None
     status: Optional[Any] = None
     lastUpdatedDateTime: Optional[Any] = None

     model_config = ConfigDict(extra="allow")


class WebhookData(BaseModel):
     paymentDetails: Optional[PaymentDetails] = None
     customerId: Optional[Any] = None
     merchantId: Optional[Any] = None

     model_config = ConfigDict(extra="allow")


class WebhookEnvelope(BaseModel):
     """Provider event envelope. Only the fields used for routing are typed."""

     eventType: Optional[Any] = None
     data: Optional[WebhookData] = None

     model_config = ConfigDict(extra="allow")

     @property
     def is_payment_status_change(self) -> bool:
          return (
               self.eventType == PAYMENT_STATUS_EVENT_TYPE
               and self.data is not None
               and self.data.paymentDetails is not None
          )


class PaymentUpdateEvent(BaseModel):
     """
     Payload of the payment-updated broadcast.

     Fields carry the provider's values unchanged, so ids and timestamps may
     arrive as numbers.
     """

     paymentId: Optional[Any] = None
     customerId: Optional[Any] = None
     merchantId: Optional[Any] = None
     status: Optional[Any] = None
     lastUpdatedDateTime: Optional[Any] = None
     eventType: Optional[Any] = None

     model_config = ConfigDict(extra="ignore")


class WebhookResult(BaseModel):
     message: str
     processed: bool
     paymentId: Optional[Any] = None
     status: Optional[Any] = None
