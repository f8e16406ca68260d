# registration/db/models/counter.py
from __future__ import annotations

from sqlmodel import Field, SQLModel


class RegionCounter(SQLModel, table=True):
    """
    Last issued sequence number per region.

    Rows are created lazily by the first submission of a region
    (INSERT ... ON CONFLICT DO UPDATE), so a missing row means 0.
    """

    __tablename__ = "region_counters"

    region_key: str = Field(primary_key=True, max_length=32)
    value: int = Field(default=0)
