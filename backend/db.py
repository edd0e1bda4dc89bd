# backend/db.py
"""
backend/db.py

Database configuration and session management for the Customer Management API.

This module sets up the SQLAlchemy engine, session factory, and declarative base
for ORM models. It also defines a FastAPI dependency (`get_db`) that provides
one database session per request; the routers wrap that session in a
`UnitOfWork` before handing it to the services.

Key features:
- Works against PostgreSQL or SQLite, chosen by `DATABASE_URL`.
- Connection is robust to transient DB restarts (`pool_pre_ping=True`).
- Foreign keys are switched on for SQLite so cascades and referential
  integrity behave the same as on Postgres.
"""

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base

from .config import DATABASE_URL, SQL_ECHO


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """
    Issue `PRAGMA foreign_keys=ON` on every new SQLite connection.

    SQLite ships with foreign key enforcement disabled; without it the
    ON DELETE CASCADE clauses and the order/customer references are ignored.
    """

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(url: str, echo: bool = False) -> Engine:
    """Create an engine for `url`, applying the SQLite specifics when needed."""
    connect_args = {}
    if url.startswith("sqlite"):
        # TestClient and uvicorn may touch the connection from another thread
        connect_args["check_same_thread"] = False

    new_engine = create_engine(
        url,
        echo=echo,
        pool_pre_ping=True,
        future=True,
        connect_args=connect_args,
    )
    if url.startswith("sqlite"):
        enable_sqlite_foreign_keys(new_engine)
    return new_engine


engine = build_engine(DATABASE_URL, echo=SQL_ECHO)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)

Base = declarative_base()


# FastAPI dependency
def get_db():
    """
    Provide a SQLAlchemy database session to FastAPI request handlers.

    Yields:
        Session: A SQLAlchemy session connected to the configured database.

    Ensures:
        - A session is opened when the request starts.
        - The session is closed automatically when the request ends.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
