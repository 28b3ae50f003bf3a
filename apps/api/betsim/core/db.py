# apps/api/betsim/core/db.py
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from apps.api.betsim.core.config import SQLALCHEMY_DSN


class Base(DeclarativeBase):
    pass


def _make_engine(dsn: str) -> Engine:
    if not dsn.startswith("sqlite"):
        return create_engine(dsn, pool_pre_ping=True)

    kwargs = {"connect_args": {"check_same_thread": False}}
    if dsn in ("sqlite://", "sqlite:///:memory:", "sqlite+pysqlite:///:memory:"):
        # one shared connection, otherwise every session sees an empty database
        kwargs["poolclass"] = StaticPool
    eng = create_engine(dsn, **kwargs)

    # pysqlite defers BEGIN on its own, which breaks SAVEPOINT; take over.
    @event.listens_for(eng, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(eng, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")

    return eng


engine = _make_engine(SQLALCHEMY_DSN)
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def get_db() -> Iterator[Session]:
    """FastAPI dependency: one session per request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    # register tables on Base.metadata before create_all
    from apps.api.betsim import models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def reset_db() -> None:
    from apps.api.betsim import models  # noqa: F401

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
