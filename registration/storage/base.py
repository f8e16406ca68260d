# registration/storage/base.py
"""
Storage interfaces.

Both backends (JSON files, SQL database) implement the same two contracts:

- CounterStore.increment(key) returns 1, 2, 3, ... per region key, with no
  repeats and no gaps even under concurrent calls; keys are independent.
- SubmissionStore.create(record) persists one record and never overwrites
  an existing one.

Failures surface as StorageError; a value is returned only once it is durable.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from registration.db.models.submission import Submission


class CounterStore(ABC):
    @abstractmethod
    async def increment(self, region_key: str) -> int:
        """Atomically add 1 to the region counter and return the new value."""

    @abstractmethod
    async def current(self, region_key: str) -> int:
        """Return the last issued value for the region (0 if none)."""


class SubmissionStore(ABC):
    @abstractmethod
    async def create(self, submission: Submission) -> None:
        """Persist a new record; raise StorageError if it already exists."""

    @abstractmethod
    async def get(self, region_key: str, submission_id: str) -> Optional[Submission]:
        """Load a stored record by region and ID, or None."""
