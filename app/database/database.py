import logging
from typing import Any, Dict, Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import settings

logger = logging.getLogger(__name__)


def build_engine(url: str, echo: bool = False) -> Engine:
    """
    Engine for comments/ratings storage.

    PostgreSQL gets pre-ping so dropped pooled connections are replaced.
    SQLite (local runs, tests) is opened across threads, and an in-memory
    database is pinned to one connection so every session sees the same tables.
    """
    if not url:
        raise ValueError("DATABASE_URL is not set")

    parsed = make_url(url)
    options: Dict[str, Any] = {"echo": echo, "future": True}
    if parsed.get_backend_name() == "sqlite":
        options["connect_args"] = {"check_same_thread": False}
        if parsed.database in (None, "", ":memory:"):
            options["poolclass"] = StaticPool
    else:
        options["pool_pre_ping"] = True

    logger.info(f"Database backend: {parsed.get_backend_name()}")
    return create_engine(parsed, **options)


engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db() -> Iterator[Session]:
    # Uncommitted work is discarded if the handler fails
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
