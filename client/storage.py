# client/storage.py
"""
Local key/value storage for the client's cached collections.

Each entry is a string (a JSON array in practice) under a fixed name. The
SQL-backed implementation survives restarts; the memory one does not.
"""
from typing import Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.engine import Engine

from database import get_session_context, init_db, make_engine
from models import StorageEntry


class LocalStorage:
     """Interface shared by the storage backends."""

     def get_item(self, key: str) -> Optional[str]:
          raise NotImplementedError

     def set_item(self, key: str, value: str) -> None:
          raise NotImplementedError

     def remove_item(self, key: str) -> None:
          raise NotImplementedError

     def keys(self) -> List[str]:
          raise NotImplementedError


class MemoryStorage(LocalStorage):

     def __init__(self, initial: Optional[Dict[str, str]] = None):
          self._items: Dict[str, str] = dict(initial or {})

     def get_item(self, key: str) -> Optional[str]:
          return self._items.get(key)

     def set_item(self, key: str, value: str) -> None:
          self._items[key] = value

     def remove_item(self, key: str) -> None:
          self._items.pop(key, None)

     def keys(self) -> List[str]:
          return sorted(self._items)


class SqlStorage(LocalStorage):
     """Storage entries kept in the storage_entries table."""

     def __init__(self, engine: Optional[Engine] = None):
          self.engine = engine or make_engine()
          init_db(self.engine)

     def get_item(self, key: str) -> Optional[str]:
          with get_session_context(self.engine) as db:
               entry = db.get(StorageEntry, key)
               return entry.value if entry is not None else None

     def set_item(self, key: str, value: str) -> None:
          with get_session_context(self.engine) as db:
               entry = db.get(StorageEntry, key)
               if entry is None:
                    db.add(StorageEntry(key=key, value=value))
               else:
                    entry.value = value

     def remove_item(self, key: str) -> None:
          with get_session_context(self.engine) as db:
               entry = db.get(StorageEntry, key)
               if entry is not None:
                    db.delete(entry)

     def keys(self) -> List[str]:
          with get_session_context(self.engine) as db:
               return list(db.scalars(select(StorageEntry.key).order_by(StorageEntry.key)))
