# models/__init__.py
from .base import Base
from .storage_entry import StorageEntry

__all__ = [
     "Base",
     "StorageEntry",
]
