import asyncio
import pathlib
import sys

import pytest

# Ensure repo root is on PYTHONPATH for direct package imports (e.g. `import registration`).
_REPO_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

from registration.core.config import Settings  # noqa: E402
from registration.db.session import create_db_engine, init_db  # noqa: E402
from registration.storage.db_store import SqlCounterStore, SqlSubmissionStore  # noqa: E402
from registration.storage.file_store import FileCounterStore, FileSubmissionStore  # noqa: E402

RIYADH = "منطقة الرياض"
EASTERN = "المنطقة الشرقية"
MAKKAH = "منطقة مكة المكرمة"
MADINAH = "منطقة المدينة المنورة"


def make_form(region: str = RIYADH, **overrides) -> dict:
    form = {
        "name": "محمد العتيبي",
        "phone": "0500000000",
        "email": "m@example.com",
        "region": region,
    }
    form.update(overrides)
    return form


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def file_settings(tmp_path):
    return Settings(STORAGE_BACKEND="file", DATA_DIR=tmp_path / "data")


@pytest.fixture
def file_stores(tmp_path):
    data_dir = tmp_path / "data"
    return FileCounterStore(data_dir), FileSubmissionStore(data_dir)


@pytest.fixture
def engine(tmp_path):
    engine = create_db_engine(f"sqlite:///{tmp_path / 'registration.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def sql_stores(engine):
    return SqlCounterStore(engine), SqlSubmissionStore(engine)


@pytest.fixture(params=["file", "db"])
def stores(request, tmp_path):
    """Both backends, so every contract test runs against each of them."""
    if request.param == "file":
        data_dir = tmp_path / "data"
        yield FileCounterStore(data_dir), FileSubmissionStore(data_dir)
        return

    engine = create_db_engine(f"sqlite:///{tmp_path / 'registration.db'}")
    init_db(engine)
    yield SqlCounterStore(engine), SqlSubmissionStore(engine)
    engine.dispose()
