"""Database configuration and session management."""

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from period_overview.config import settings


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


engine = create_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,
)

session_maker = sessionmaker(
    engine,
    class_=Session,
    expire_on_commit=False,
)


@contextmanager
def get_session(maker: sessionmaker[Session] | None = None) -> Iterator[Session]:
    """Yield a session that commits on success and rolls back on error."""
    with (maker or session_maker)() as session:
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise


def init_db(bind: Engine | None = None) -> None:
    """Create the statistic tables on the given engine (module engine by default)."""
    from period_overview import models  # noqa: F401
    from period_overview.logger import get_logger

    Base.metadata.create_all(bind or engine)
    get_logger(__name__).info("Database initialized", tables=sorted(Base.metadata.tables))
