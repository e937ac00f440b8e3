"""Database layer utilities for the SQLAlchemy-backed key-value namespace."""
from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from .config import get_settings

settings = get_settings()

_connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}

engine: Engine = create_engine(settings.database_url, pool_pre_ping=True, future=True, connect_args=_connect_args)

SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    future=True,
    expire_on_commit=False,
)

Base = declarative_base()


def init_db(bind: Engine | None = None) -> None:
    """Create the storage table when missing."""
    # Import models to ensure they are registered on the metadata before create_all runs.
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


__all__ = [
    "Base",
    "SessionLocal",
    "init_db",
]
