# client/__init__.py
"""
Merchant-side client of the Text-to-Pay service.

Holds the session's view of customers, payments and activity, persisted to a
local key/value store, and reconciles it with payment-updated broadcasts.
"""
from .store import ReconciliationStore
from .storage import MemoryStorage, SqlStorage

__all__ = [
     "ReconciliationStore",
     "MemoryStorage",
     "SqlStorage",
]
