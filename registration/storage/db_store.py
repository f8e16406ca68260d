# registration/storage/db_store.py
"""
Database backend (PostgreSQL in production, SQLite in tests).

The counter increment is one statement:

    INSERT INTO region_counters (region_key, value) VALUES (:key, 1)
    ON CONFLICT (region_key) DO UPDATE SET value = region_counters.value + 1
    RETURNING value

The row lock taken by the upsert serializes concurrent increments of the
same region, so no application-level lock is needed here.
"""

from __future__ import annotations

import asyncio
from typing import Optional

from sqlalchemy import select as sa_select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from registration.core.errors import StorageError
from registration.db.models.counter import RegionCounter
from registration.db.models.submission import Submission, SubmissionRow
from registration.storage.base import CounterStore, SubmissionStore

# Dialects that support INSERT ... ON CONFLICT ... RETURNING
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class SqlCounterStore(CounterStore):
    """Per-region counters, one row per region key."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        try:
            self._insert = _UPSERT_INSERTS[engine.dialect.name]
        except KeyError:
            raise ValueError(
                f"Unsupported database dialect for counters: {engine.dialect.name}"
            ) from None

    def _increment_stmt(self, region_key: str):
        table = RegionCounter.__table__
        stmt = self._insert(table).values(region_key=region_key, value=1)
        stmt = stmt.on_conflict_do_update(
            index_elements=[table.c.region_key],
            set_={"value": table.c.value + 1},
        )
        return stmt.returning(table.c.value)

    def _increment_sync(self, region_key: str) -> int:
        try:
            # engine.begin() → commit on success, rollback on error
            with self.engine.begin() as conn:
                return conn.execute(self._increment_stmt(region_key)).scalar_one()
        except SQLAlchemyError as e:
            raise StorageError(f"Counter increment failed for {region_key!r}: {e}") from e

    def _current_sync(self, region_key: str) -> int:
        table = RegionCounter.__table__
        try:
            with self.engine.connect() as conn:
                value = conn.execute(
                    sa_select(table.c.value).where(table.c.region_key == region_key)
                ).scalar_one_or_none()
        except SQLAlchemyError as e:
            raise StorageError(f"Counter read failed for {region_key!r}: {e}") from e
        return value or 0

    async def increment(self, region_key: str) -> int:
        return await asyncio.to_thread(self._increment_sync, region_key)

    async def current(self, region_key: str) -> int:
        return await asyncio.to_thread(self._current_sync, region_key)


class SqlSubmissionStore(SubmissionStore):
    """One `submissions` row per record."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def _create_sync(self, submission: Submission) -> None:
        row = SubmissionRow(**submission.model_dump())
        try:
            with Session(self.engine) as session:
                session.add(row)
                session.commit()
        except IntegrityError as e:
            raise StorageError(
                f"Record {submission.region_key}/{submission.id} already exists"
            ) from e
        except SQLAlchemyError as e:
            raise StorageError(f"Cannot insert record {submission.id}: {e}") from e

    def _get_sync(self, region_key: str, submission_id: str) -> Optional[Submission]:
        try:
            with Session(self.engine) as session:
                row = session.exec(
                    select(SubmissionRow).where(
                        SubmissionRow.region_key == region_key,
                        SubmissionRow.id == submission_id,
                    )
                ).first()
                if row is None:
                    return None
                return Submission.model_validate(row.model_dump(exclude={"row_id"}))
        except SQLAlchemyError as e:
            raise StorageError(f"Cannot load record {submission_id}: {e}") from e

    async def create(self, submission: Submission) -> None:
        await asyncio.to_thread(self._create_sync, submission)

    async def get(self, region_key: str, submission_id: str) -> Optional[Submission]:
        return await asyncio.to_thread(self._get_sync, region_key, submission_id)
