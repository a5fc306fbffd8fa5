"""Database session utilities."""

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

from .config import settings
from .models import Base

#  Engine & Session factory
# Create the SQLAlchemy engine from the configured DATABASE_URL.
engine = create_engine(settings.DATABASE_URL, future=True, echo=False)

# Session factory used everywhere in the app.
SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    expire_on_commit=True,
    future=True,
)


@contextmanager
def get_db() -> Generator[Session, None, None]:
    """
    Yield a SQLAlchemy Session and always close it.

    We commit on success, rollback on error, and close in all cases.
    """
    db: Session = SessionLocal()
    try:
        yield db
        db.commit()          # no-op if nothing was changed
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db() -> None:
    """Create every table known to the ORM metadata (idempotent)."""
    Base.metadata.create_all(bind=engine)
