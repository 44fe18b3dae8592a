# client/notifier.py
"""
User-facing notifications for the client.

A notification is transient: it replaces the previous one and expires after
NOTIFICATION_TTL seconds. Completed payments additionally fire the
celebration hook.
"""
import time
from dataclasses import dataclass
from typing import Callable, Optional

NOTIFICATION_TTL = 5.0


@dataclass
class Notification:
     message: str
     type: str
     expires_at: float


class Notifier:

     def __init__(
          self,
          on_notify: Optional[Callable[[Notification], None]] = None,
          on_celebrate: Optional[Callable[[], None]] = None,
          clock: Callable[[], float] = time.monotonic,
     ):
          self._on_notify = on_notify
          self._on_celebrate = on_celebrate
          self._clock = clock
          self._current: Optional[Notification] = None
          self.celebrations = 0

     def notify(self, message: str, type: str = "info") -> Notification:
          notification = Notification(message=message, type=type, expires_at=self._clock() + NOTIFICATION_TTL)
          self._current = notification
          if self._on_notify is not None:
               self._on_notify(notification)
          return notification

     def celebrate(self) -> None:
          self.celebrations += 1
          if self._on_celebrate is not None:
               self._on_celebrate()

     def dismiss(self) -> None:
          self._current = None

     @property
     def current(self) -> Optional[Notification]:
          """The visible notification, or None once it has expired or been dismissed."""
          if self._current is not None and self._clock() >= self._current.expires_at:
               self._current = None
          return self._current
