# client/subscriber.py
"""
Broadcast subscription for payment-updated events.

The transport (Pusher Channels over a websocket, via pysher) only ever puts
messages on a queue. ReconciliationLoop is the single consumer of that queue
and the only code that touches the store, so updates are applied one at a
time in delivery order.
"""
import queue
import threading
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

import pysher
import requests
from pydantic import ValidationError as SchemaError

from config import PAYMENT_UPDATED_EVENT, PAYMENT_UPDATES_CHANNEL
from logging_config import get_logger
from schemas.webhook import PaymentUpdateEvent

from .api import ApiError, TextToPayApi
from .store import ReconciliationStore

logger = get_logger(__name__)


@dataclass(frozen=True)
class ConnectionChanged:
     connected: bool


@dataclass(frozen=True)
class PaymentUpdated:
     data: Any


ChannelMessage = Union[ConnectionChanged, PaymentUpdated]


class PusherSubscriber:
     """
     Feeds connection signals and payment-updated events into a queue.

     pysher only reports a dropped socket through connection.state, so a
     watcher thread polls it and signals disconnected once the state leaves
     "connected". A reconnect is reported again by connection_established.
     """

     def __init__(
          self,
          api: TextToPayApi,
          messages: "queue.Queue[ChannelMessage]",
          pusher_factory: Callable[..., Any] = pysher.Pusher,
          watch_interval: float = 1.0,
     ):
          self.api = api
          self.messages = messages
          self.watch_interval = watch_interval
          self._pusher_factory = pusher_factory
          self._pusher = None
          self._connected: Optional[bool] = None
          self._lock = threading.Lock()
          self._stopped = threading.Event()
          self._watcher: Optional[threading.Thread] = None

     def start(self) -> bool:
          """
          Fetch the public subscription config and connect.

          Returns False (and signals disconnected) if the config could not be
          loaded or the transport could not be created.
          """
          try:
               config = self.api.pusher_config()
               self._pusher = self._pusher_factory(config["key"], cluster=config["cluster"], secure=True)
               self._pusher.connection.bind("pusher:connection_established", self._on_connected)
               self._pusher.connection.bind("pusher:connection_failed", self._on_connection_lost)
               self._pusher.connection.bind("pusher:error", self._on_error)
               self._pusher.connect()
          except (ApiError, requests.RequestException, KeyError, TypeError, ValueError) as e:
               logger.error("pusher_init_failed", error=str(e))
               self.messages.put(ConnectionChanged(False))
               return False

          self._stopped.clear()
          self._watcher = threading.Thread(target=self._watch, name="pusher-state-watcher", daemon=True)
          self._watcher.start()
          logger.info("pusher_initialized", cluster=config["cluster"])
          return True

     def stop(self) -> None:
          self._stopped.set()
          if self._watcher is not None:
               self._watcher.join(timeout=self.watch_interval * 2)
               self._watcher = None
          if self._pusher is not None:
               self._pusher.disconnect()
               self._pusher = None
          with self._lock:
               self._connected = False
          self.messages.put(ConnectionChanged(False))

     def check_connection(self) -> None:
          """Signal disconnected if the transport is no longer connected."""
          pusher = self._pusher
          if pusher is None:
               return
          state = getattr(pusher.connection, "state", None)
          if state != "connected":
               self._signal(False, state=state)

     def _watch(self) -> None:
          while not self._stopped.wait(self.watch_interval):
               self.check_connection()

     def _signal(self, connected: bool, **context: Any) -> None:
          with self._lock:
               # Nothing to report until the first connect, or when unchanged.
               if connected == bool(self._connected):
                    return
               self._connected = connected
          if not connected:
               logger.warning("pusher_disconnected", **context)
          self.messages.put(ConnectionChanged(connected))

     def _on_connected(self, *args: Any) -> None:
          channel = self._pusher.subscribe(PAYMENT_UPDATES_CHANNEL)
          channel.bind(PAYMENT_UPDATED_EVENT, self._on_payment_updated)
          self._signal(True)

     def _on_connection_lost(self, *args: Any) -> None:
          self._signal(False, reason="connection_failed")

     def _on_error(self, data: Any = None, *args: Any) -> None:
          logger.warning("pusher_error", data=data)
          self.check_connection()

     def _on_payment_updated(self, data: Any, *args: Any) -> None:
          self.messages.put(PaymentUpdated(data))


def decode_event(data: Any) -> PaymentUpdateEvent:
     """Validate a raw broadcast payload (JSON text or mapping)."""
     if isinstance(data, (str, bytes)):
          return PaymentUpdateEvent.model_validate_json(data)
     return PaymentUpdateEvent.model_validate(data)


class ReconciliationLoop:
     """Drains the subscription queue into the store."""

     def __init__(self, store: ReconciliationStore, messages: "queue.Queue[ChannelMessage]"):
          self.store = store
          self.messages = messages
          self._stopped = threading.Event()

     def dispatch(self, message: ChannelMessage) -> None:
          if isinstance(message, ConnectionChanged):
               self.store.set_connected(message.connected)
               return

          logger.info("payment_update_received", data=message.data)
          try:
               event = decode_event(message.data)
          except SchemaError as e:
               logger.warning("payment_update_invalid", errors=e.error_count())
               return
          self.store.apply_update(event)

     def run_pending(self) -> int:
          """Apply every queued message without blocking; returns how many."""
          handled = 0
          while True:
               try:
                    message = self.messages.get_nowait()
               except queue.Empty:
                    return handled
               self.dispatch(message)
               handled += 1

     def run_forever(self, poll_interval: float = 0.5) -> None:
          while not self._stopped.is_set():
               try:
                    message = self.messages.get(timeout=poll_interval)
               except queue.Empty:
                    continue
               self.dispatch(message)

     def stop(self) -> None:
          self._stopped.set()


def subscribe(
     api: TextToPayApi,
     store: ReconciliationStore,
     pusher_factory: Optional[Callable[..., Any]] = None,
) -> tuple:
     """Wire a subscriber and a loop around a fresh queue."""
     messages: "queue.Queue[ChannelMessage]" = queue.Queue()
     subscriber = PusherSubscriber(api, messages, pusher_factory or pysher.Pusher)
     return subscriber, ReconciliationLoop(store, messages)
