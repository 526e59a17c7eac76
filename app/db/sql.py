from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import Settings
from app.db.base import Base


def create_db_engine(settings: Settings) -> Engine:
    if settings.is_sqlite:
        kwargs: dict[str, object] = {"connect_args": {"check_same_thread": False}}
        # In-memory databases live as long as their connection.
        if settings.database_url in {"sqlite://", "sqlite:///:memory:"}:
            kwargs["poolclass"] = StaticPool
        return create_engine(settings.database_url, echo=settings.database_echo, **kwargs)

    return create_engine(
        settings.database_url,
        echo=settings.database_echo,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_pre_ping=True,
    )


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def create_tables(engine: Engine) -> None:
    # Import registers the tables on Base.metadata.
    from app.db import tables  # noqa: F401

    Base.metadata.create_all(bind=engine)
