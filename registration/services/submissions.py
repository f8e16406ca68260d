# registration/services/submissions.py
"""
Submission intake: validate → assign ID → persist.

Flow per request:
    RECEIVED → VALIDATED → ID_ASSIGNED → PERSISTED

Validation errors (missing field, unknown region) stop before the counter
is touched. A storage error after the counter advanced leaves a permanent
gap in that region's sequence; it is logged, not rolled back.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from registration.core.errors import InvalidRegionError, MissingFieldsError
from registration.core.regions import resolve_region
from registration.core.text_utils import sanitize_fields
from registration.db.models.submission import Submission
from registration.storage.base import CounterStore, SubmissionStore

logger = logging.getLogger(__name__)


def build_submission_id(prefix: str, seq: int) -> str:
    """ID format: prefix + number (e.g. ر1, ش2, م15)."""
    return f"{prefix}{seq}"


async def register_submission(
    payload: Mapping[str, Any],
    counters: CounterStore,
    submissions: SubmissionStore,
    *,
    now: Optional[datetime] = None,
) -> Submission:
    """
    Validate a raw form payload and store it under a fresh per-region ID.

    Raises:
        MissingFieldsError: a required field is empty after trimming.
        InvalidRegionError: region label is not in the region table.
        StorageError:       counter increment or record write failed.
    """
    fields = sanitize_fields(dict(payload))

    if not all(fields.values()):
        raise MissingFieldsError()

    region = resolve_region(fields["region"])
    if region is None:
        raise InvalidRegionError()

    seq = await counters.increment(region.key)

    submission = Submission(
        id=build_submission_id(region.prefix, seq),
        seq=seq,
        region_key=region.key,
        region=region.label,
        prefix=region.prefix,
        name=fields["name"],
        phone=fields["phone"],
        email=fields["email"],
        saved_at=now or datetime.now(timezone.utc),
    )

    try:
        await submissions.create(submission)
    except Exception:
        logger.error(
            "Counter for region %s advanced to %d but record %s was not saved; "
            "sequence gap left at %d",
            region.key,
            seq,
            submission.id,
            seq,
        )
        raise

    logger.info("Saved submission %s (region=%s)", submission.id, region.key)
    return submission
