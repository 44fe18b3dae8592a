# models/storage_entry.py
from sqlalchemy import Column, DateTime, String, Text, func
from .base import Base


class StorageEntry(Base):
     """
     One named local-storage slot of the client (payments, customers, activity).

     The value is the JSON-serialized array exactly as the client wrote it.
     """
     __tablename__ = "storage_entries"

     key = Column(String(100), primary_key=True)
     value = Column(Text, nullable=False)
     updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

     def __repr__(self):
          return f"<StorageEntry(key='{self.key}', size={len(self.value or '')})>"
