"""
Database connection and initialization
"""

import logging
from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ink_atlas.config import get_config
from ink_atlas.models.database import Base

logger = logging.getLogger(__name__)


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """Create engine; sqlite connections are shareable across threads"""
    kwargs = {"echo": echo}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url or database_url == "sqlite://":
            kwargs["poolclass"] = StaticPool
    return create_engine(database_url, **kwargs)


_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None


def get_engine() -> Engine:
    global _engine
    if _engine is None:
        config = get_config()
        _engine = create_db_engine(config.database_url, echo=config.debug)
    return _engine


def get_session_factory() -> sessionmaker:
    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
    return _session_factory


def init_db(engine: Optional[Engine] = None):
    """Initialize database - create all tables"""
    Base.metadata.create_all(bind=engine or get_engine())
    logger.info("✅ Database initialized")


@contextmanager
def get_db_context(factory: Optional[sessionmaker] = None) -> Generator[Session, None, None]:
    """Context manager for transactional database sessions"""
    db = (factory or get_session_factory())()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
