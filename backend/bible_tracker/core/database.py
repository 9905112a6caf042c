from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

# Base class for all database models
Base = declarative_base()


def create_db_engine(database_url: str) -> Engine:
    """
    Create the database engine (connection pool) for a URL.

    SQLite connections are shared across threads by the test client and
    uvicorn's threadpool, and an in-memory database only exists for the
    lifetime of one connection, so it gets a StaticPool.
    """
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)
    return create_engine(database_url, pool_pre_ping=True)


def create_session_factory(engine: Engine) -> sessionmaker:
    # autocommit=False: changes require explicit commit
    # autoflush=False: don't auto-flush before queries
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request) -> Iterator[Session]:
    """
    Dependency for getting database session.

    The session factory is built once by the application factory and kept on
    app.state. The session is always closed after the request completes.
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
