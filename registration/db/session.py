# registration/db/session.py
from __future__ import annotations

from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine

# ---------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------


def create_db_engine(conn_str: str) -> Engine:
    """
    Build an engine for the given SQLAlchemy URL.

    SQLite connections are shared with the worker threads that run
    the blocking DB calls, so the same-thread check is disabled there.
    """
    connect_args = {}
    if conn_str.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(
        conn_str,
        echo=False,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


# ---------------------------------------------------------------------
# Schema initialization (non-destructive)
# ---------------------------------------------------------------------
def init_db(engine: Engine) -> None:
    """
    Create the counter and submission tables if they don't exist.

    Existing tables are never dropped or altered.
    """
    # Import models so that SQLModel sees all table definitions
    from registration.db import models  # noqa: F401

    SQLModel.metadata.create_all(engine)
