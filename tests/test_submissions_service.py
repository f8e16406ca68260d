import asyncio
import logging
from datetime import datetime, timezone

import pytest

from conftest import EASTERN, MADINAH, MAKKAH, RIYADH, make_form, run
from registration.core.errors import InvalidRegionError, MissingFieldsError, StorageError
from registration.services.submissions import build_submission_id, register_submission
from registration.storage.base import SubmissionStore


class FailingSubmissionStore(SubmissionStore):
    async def create(self, submission):
        raise StorageError("disk gone")

    async def get(self, region_key, submission_id):
        return None


def test_build_submission_id():
    assert build_submission_id("ر", 15) == "ر15"


def test_ids_per_region(stores):
    counters, submissions = stores

    first = run(register_submission(make_form(RIYADH), counters, submissions))
    second = run(register_submission(make_form(RIYADH), counters, submissions))
    other = run(register_submission(make_form(EASTERN), counters, submissions))

    assert (first.id, second.id, other.id) == ("ر1", "ر2", "ش1")
    assert run(submissions.get("riyadh", "ر2")) is not None
    assert run(submissions.get("eastern", "ش1")) is not None


def test_record_contents(stores):
    counters, submissions = stores
    now = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
    form = make_form(RIYADH, name="  خالد  ", email=" k@example.com ")

    sub = run(register_submission(form, counters, submissions, now=now))

    assert sub.name == "خالد"
    assert sub.email == "k@example.com"
    assert sub.region == RIYADH
    assert sub.region_key == "riyadh"
    assert sub.prefix == "ر"
    assert sub.seq == 1
    assert sub.saved_at == now


def test_shared_prefix_regions_have_separate_sequences(stores):
    counters, submissions = stores
    a = run(register_submission(make_form(MAKKAH), counters, submissions))
    b = run(register_submission(make_form(MADINAH), counters, submissions))
    assert a.id == b.id == "م1"
    assert (a.region_key, b.region_key) == ("makkah", "madinah")


def test_same_form_twice_gives_two_records(stores):
    counters, submissions = stores
    form = make_form(RIYADH)
    ids = {run(register_submission(form, counters, submissions)).id for _ in range(2)}
    assert ids == {"ر1", "ر2"}


@pytest.mark.parametrize("field", ["name", "phone", "email", "region"])
def test_missing_field_is_rejected(stores, field):
    counters, submissions = stores
    form = make_form(RIYADH)
    del form[field]

    with pytest.raises(MissingFieldsError):
        run(register_submission(form, counters, submissions))
    assert run(counters.current("riyadh")) == 0


def test_whitespace_name_is_rejected_without_side_effects(stores):
    counters, submissions = stores
    with pytest.raises(MissingFieldsError):
        run(register_submission(make_form(RIYADH, name="   "), counters, submissions))

    assert run(counters.current("riyadh")) == 0
    assert run(submissions.get("riyadh", "ر1")) is None


def test_unknown_region_is_rejected_without_counter_change(stores):
    counters, submissions = stores
    run(register_submission(make_form(RIYADH), counters, submissions))

    with pytest.raises(InvalidRegionError):
        run(register_submission(make_form("not a real region"), counters, submissions))

    assert run(counters.current("riyadh")) == 1


def test_concurrent_submissions_get_distinct_ids(stores):
    counters, submissions = stores
    n = 20

    async def burst():
        return await asyncio.gather(
            *(register_submission(make_form(EASTERN), counters, submissions) for _ in range(n))
        )

    results = run(burst())
    assert sorted(s.seq for s in results) == list(range(1, n + 1))
    assert len({s.id for s in results}) == n
    assert run(counters.current("eastern")) == n


def test_failed_write_leaves_logged_gap(file_stores, caplog):
    counters, _ = file_stores

    with caplog.at_level(logging.ERROR, logger="registration.services.submissions"):
        with pytest.raises(StorageError):
            run(register_submission(make_form(RIYADH), counters, FailingSubmissionStore()))

    # counter is not rolled back
    assert run(counters.current("riyadh")) == 1
    assert "sequence gap left at 1" in caplog.text
    assert "riyadh" in caplog.text


def test_unexpected_write_error_also_logs_gap(file_stores, caplog):
    counters, _ = file_stores

    class DeniedSubmissionStore(FailingSubmissionStore):
        async def create(self, submission):
            raise PermissionError("read-only filesystem")

    with caplog.at_level(logging.ERROR, logger="registration.services.submissions"):
        with pytest.raises(PermissionError):
            run(register_submission(make_form(RIYADH), counters, DeniedSubmissionStore()))

    assert run(counters.current("riyadh")) == 1
    assert "sequence gap left at 1" in caplog.text
