# registration/db/models/__init__.py
"""
Import all model modules so SQLModel registers their tables
when init_db() calls SQLModel.metadata.create_all(engine).
"""

from .counter import RegionCounter  # noqa: F401
from .submission import Submission, SubmissionRow  # noqa: F401

__all__ = [
    "RegionCounter",
    "Submission",
    "SubmissionRow",
]
