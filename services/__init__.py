# services/__init__.py
from .broadcaster import BroadcastPublisher, get_publisher
from .webhook_service import WebhookIngestor, WebhookState
from .worldpay_client import WorldpayClient, get_worldpay_client

__all__ = [
     "BroadcastPublisher",
     "get_publisher",
     "WebhookIngestor",
     "WebhookState",
     "WorldpayClient",
     "get_worldpay_client",
]
