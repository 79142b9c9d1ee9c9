# teamdash/db/session.py
# Database engine and session management
from typing import Generator
import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from teamdash.core.config import settings
from teamdash.db import models

logger = logging.getLogger(__name__)


def build_engine(database_url: str):
    engine_args = {"pool_pre_ping": True}
    if database_url.startswith("sqlite"):
        engine_args["connect_args"] = {"check_same_thread": False}
        # In-memory databases live inside a single connection
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            engine_args["poolclass"] = StaticPool
    return create_engine(database_url, **engine_args)


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
)


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI
    """
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db() -> None:
    """
    Create all tables that do not exist yet
    """
    models.Base.metadata.create_all(bind=engine)
    logger.info("Database tables ensured on %s", engine.url.render_as_string(hide_password=True))


def drop_all_tables() -> None:
    models.Base.metadata.drop_all(bind=engine)
    logger.info("All database tables dropped")
