import logging
from typing import Any, Dict, Iterator
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from chapterquiz.core.config import settings

logger = logging.getLogger(__name__)

def engine_options(url: str) -> Dict[str, Any]:
    opts: Dict[str, Any] = {"future": True, "pool_pre_ping": True, "echo": settings.DATABASE_ECHO}
    if make_url(url).get_backend_name() != "sqlite":
        opts.update(
            pool_size=settings.DATABASE_POOL_SIZE,
            max_overflow=settings.DATABASE_MAX_OVERFLOW,
            pool_timeout=settings.DATABASE_POOL_TIMEOUT,
        )
    return opts

def build_engine(url: str) -> Engine:
    return create_engine(url, **engine_options(url))

engine = build_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False, future=True)

def get_db() -> Iterator[Session]:
    """Dependency for getting a database session; always closed on exit."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_db(bind: Engine = engine) -> None:
    """Create tables. Development and tests only."""
    from chapterquiz.models.orm import Base
    Base.metadata.create_all(bind=bind)
    logger.info("Database schema ensured on %s", bind.url.render_as_string(hide_password=True))
