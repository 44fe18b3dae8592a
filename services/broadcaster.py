# services/broadcaster.py
"""
Broadcast publisher for payment status updates.

Wraps the Pusher Channels HTTP API. Publishing is fire-and-forget: a failure
is logged and swallowed, the caller never learns whether fan-out succeeded.
"""
from typing import Any, Dict, Optional

import pusher

from config import get_pusher_settings
from logging_config import get_logger

logger = get_logger(__name__)


class BroadcastPublisher:
     """Publishes events to the hosted pub/sub service."""

     def __init__(self, client: Optional[Any] = None):
          self._client = client

     def _get_client(self) -> Any:
          if self._client is None:
               settings = get_pusher_settings()
               self._client = pusher.Pusher(
                    app_id=settings.app_id,
                    key=settings.key,
                    secret=settings.secret,
                    cluster=settings.cluster,
                    ssl=True,
               )
          return self._client

     def publish(self, channel: str, event_name: str, payload: Dict[str, Any]) -> bool:
          """
          Trigger event_name on channel with payload.

          Returns True when the provider accepted the event, False otherwise.
          Never raises.
          """
          try:
               self._get_client().trigger(channel, event_name, payload)
          except Exception as e:
               logger.error(
                    "broadcast_failed",
                    channel=channel,
                    event_name=event_name,
                    error=str(e),
               )
               return False

          logger.info("broadcast_published", channel=channel, event_name=event_name)
          return True


_publisher: Optional[BroadcastPublisher] = None


def get_publisher() -> BroadcastPublisher:
     """FastAPI dependency returning the process-wide publisher."""
     global _publisher
     if _publisher is None:
          _publisher = BroadcastPublisher()
     return _publisher
