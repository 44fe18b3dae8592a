# database.py
"""
SQLAlchemy engine and session management for the client's durable storage.

This module provides:
- Engine construction from TEXTTOPAY_STORAGE_URL (SQLite file by default)
- Session factory and a context manager for unit-of-work use
- Table creation for first use

Usage:
     from database import get_session_context

     with get_session_context(engine) as db:
          db.get(StorageEntry, "payments")
"""
from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from config import get_storage_url
from logging_config import get_logger

logger = get_logger(__name__)


def make_engine(url: Optional[str] = None, echo: bool = False) -> Engine:
     """
     Create an engine for the given URL (defaults to TEXTTOPAY_STORAGE_URL).

     SQLite connections may be used from the subscriber's callback thread, so
     the same-thread check is disabled for them.
     """
     url = url or get_storage_url()
     connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
     return create_engine(url, echo=echo, connect_args=connect_args)


def make_session_factory(engine: Engine) -> sessionmaker:
     return sessionmaker(
          bind=engine,
          autocommit=False,
          autoflush=False,
          expire_on_commit=False,
     )


@contextmanager
def get_session_context(engine: Engine) -> Generator[Session, None, None]:
     """
     Context manager for database sessions.

     Commits on success, rolls back and re-raises on error.
     """
     session = make_session_factory(engine)()
     try:
          yield session
          session.commit()
     except Exception:
          session.rollback()
          raise
     finally:
          session.close()


def init_db(engine: Engine) -> None:
     """
     Create the storage tables if they don't exist.
     """
     from models import Base
     Base.metadata.create_all(bind=engine)


def check_connection(engine: Engine) -> bool:
     """
     Test database connectivity.

     Returns:
          bool: True if connection successful, False otherwise
     """
     try:
          with engine.connect() as conn:
               conn.execute(text("SELECT 1"))
          return True
     except Exception as e:
          logger.error("storage_connection_failed", error=str(e))
          return False
