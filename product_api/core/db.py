from __future__ import annotations

from functools import lru_cache
from typing import Any

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from product_api.core.config import get_settings


class Base(DeclarativeBase):
    """Declarative base for the SQLAlchemy models."""


def build_engine(url: str, *, echo: bool = False) -> Engine:
    """
    Create an engine for ``url``.

    SQLite needs its own connect args: the connection is used from the
    threadpool FastAPI runs sync endpoints in, and an in-memory database only
    lives as long as its single connection.
    """
    kwargs: dict[str, Any] = {"echo": echo}
    parsed = make_url(url)
    if parsed.get_backend_name() == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
        if parsed.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
    else:
        # pool_pre_ping evita conexiones rotas
        kwargs["pool_pre_ping"] = True
    return create_engine(url, **kwargs)


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    settings = get_settings()
    return build_engine(settings.database_url_resolved, echo=settings.db_echo)


@lru_cache(maxsize=1)
def get_sessionmaker() -> sessionmaker[Session]:
    return sessionmaker(
        bind=get_engine(),
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        class_=Session,
    )


def create_tables(engine: Engine | None = None) -> None:
    # Import models so they register on Base.metadata.
    from product_api import models  # noqa: F401

    Base.metadata.create_all(bind=engine or get_engine())
