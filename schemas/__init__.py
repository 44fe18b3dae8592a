# schemas/__init__.py
from .customer import CustomerCreate
from .payment import PaymentCreate, ProviderPaymentRequest
from .webhook import (
     PAYMENT_STATUS_EVENT_TYPE,
     PaymentUpdateEvent,
     WebhookEnvelope,
     WebhookResult,
)

__all__ = [
     "CustomerCreate",
     "PaymentCreate",
     "ProviderPaymentRequest",
     "PAYMENT_STATUS_EVENT_TYPE",
     "PaymentUpdateEvent",
     "WebhookEnvelope",
     "WebhookResult",
]
