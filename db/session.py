"""Database session management for the reservation platform."""

import os
from typing import Generator

from sqlalchemy import create_engine as sa_create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from core.config import settings


class DatabaseConfig:
    """Database configuration settings."""

    POOL_PRE_PING: bool = os.getenv("DB_POOL_PRE_PING", "true").lower() == "true"
    ECHO: bool = os.getenv("DB_ECHO", "false").lower() == "true"


def create_engine(url: str = settings.database_url, echo: bool = DatabaseConfig.ECHO) -> Engine:
    """
    Create SQLAlchemy engine.

    Args:
        url: Database URL
        echo: Whether to log all SQL statements

    Returns:
        SQLAlchemy engine
    """
    connect_args = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False

    return sa_create_engine(
        url,
        echo=echo,
        pool_pre_ping=DatabaseConfig.POOL_PRE_PING,
        connect_args=connect_args,
    )


# Global engine instance
engine: Engine = create_engine()

# Session factory
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
)


def get_session() -> Generator[Session, None, None]:
    """
    Dependency for getting a database session.

    Yields:
        Session instance

    Example:
        def my_view(session: Session = Depends(get_session)):
            ...
    """
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def init_db(bind: Engine = engine) -> None:
    """Initialize database by creating all tables."""
    from .base import Base
    from . import models_sqlalchemy  # noqa: F401

    Base.metadata.create_all(bind=bind)


def drop_db(bind: Engine = engine) -> None:
    """Drop all database tables. Use with caution!"""
    from .base import Base

    Base.metadata.drop_all(bind=bind)
