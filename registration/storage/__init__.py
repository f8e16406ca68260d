# registration/storage/__init__.py
"""
Pluggable storage backends.

`build_stores(settings)` returns the (CounterStore, SubmissionStore) pair
selected by STORAGE_BACKEND.
"""

from __future__ import annotations

from typing import Tuple

from registration.core.config import Settings
from registration.db.session import create_db_engine
from registration.storage.base import CounterStore, SubmissionStore
from registration.storage.db_store import SqlCounterStore, SqlSubmissionStore
from registration.storage.file_store import FileCounterStore, FileSubmissionStore

__all__ = [
    "CounterStore",
    "SubmissionStore",
    "FileCounterStore",
    "FileSubmissionStore",
    "SqlCounterStore",
    "SqlSubmissionStore",
    "build_stores",
]


def build_stores(settings: Settings) -> Tuple[CounterStore, SubmissionStore]:
    if settings.STORAGE_BACKEND == "db":
        if not settings.DB_CONN_STR:
            raise RuntimeError("DB_CONN_STR must be set when STORAGE_BACKEND=db")
        engine = create_db_engine(settings.DB_CONN_STR)
        return SqlCounterStore(engine), SqlSubmissionStore(engine)

    return FileCounterStore(settings.DATA_DIR), FileSubmissionStore(settings.DATA_DIR)
