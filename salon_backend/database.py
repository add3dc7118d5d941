from datetime import datetime, timezone

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from salon_backend.core import config


def build_engine(url: str, echo: bool = False):
    connect_args = {}
    if url.startswith('sqlite'):
        connect_args['check_same_thread'] = False
    return create_engine(url, echo=echo, connect_args=connect_args)


engine = build_engine(config.DATABASE_URL, echo=config.DATABASE_ECHO)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()


def utcnow() -> datetime:
    """Current instant as naive UTC, the form every timestamp column stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
