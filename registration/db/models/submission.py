# registration/db/models/submission.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


class Submission(SQLModel):
    """
    One registration record.

    Notes:
    - `id` is `prefix + seq` (e.g. "ر1"); it is unique only inside its region,
      since several regions share the same prefix.
    - Records are written once and never updated or deleted.
    """

    id: str = Field(max_length=32)
    seq: int
    region_key: str = Field(index=True, max_length=32)
    region: str = Field(max_length=50)  # label as submitted
    prefix: str = Field(max_length=4)

    name: str = Field(max_length=100)
    phone: str = Field(max_length=30)
    email: str = Field(max_length=120)

    # Timestamp stored in UTC (naive in DB, but we treat it as UTC)
    saved_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class SubmissionRow(Submission, table=True):
    """DB row for a Submission (database backend)."""

    __tablename__ = "submissions"
    __table_args__ = (UniqueConstraint("region_key", "seq", name="uq_submission_region_seq"),)

    row_id: Optional[int] = Field(default=None, primary_key=True)
