"""
SQLAlchemy engine, session factory and declarative base.

On Postgres every connection carries a connect timeout and a server-side
statement timeout (see Settings), so no store call can block forever.
"""
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from reading_tracker.core.config import settings


def _connect_args() -> dict:
    if settings.is_postgres:
        return {
            "connect_timeout": settings.DB_CONNECT_TIMEOUT_S,
            "options": f"-c statement_timeout={settings.DB_STATEMENT_TIMEOUT_MS}",
        }
    if settings.DATABASE_URL.startswith("sqlite"):
        return {"check_same_thread": False, "timeout": settings.DB_CONNECT_TIMEOUT_S}
    return {}


engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    connect_args=_connect_args(),
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    pass


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
