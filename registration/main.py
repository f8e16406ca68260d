# registration/main.py
import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from registration.api.v1.pages import router as pages_router
from registration.api.v1.submissions import router as submissions_router
from registration.core.config import Settings, get_settings
from registration.db.session import init_db
from registration.storage import build_stores
from registration.storage.db_store import SqlCounterStore

# -----------------------------------------------------------------------------
# Logging: make sure we see clear startup errors in the console
# -----------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
log = logging.getLogger("registration")

# Compute absolute path to registration/static based on this file location
STATIC_DIR = Path(__file__).resolve().parent / "static"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI app.

    Storage backend is chosen once here (STORAGE_BACKEND) and the stores
    are shared by all requests through `app.state`.
    """
    settings = settings or get_settings()

    app = FastAPI(title="Regional Registration", debug=settings.DEBUG)

    counter_store, submission_store = build_stores(settings)
    app.state.settings = settings
    app.state.counter_store = counter_store
    app.state.submission_store = submission_store

    # -------------------------------------------------------------------------
    # Static files (form JS/CSS)
    # -------------------------------------------------------------------------
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    # -------------------------------------------------------------------------
    # Routers
    # -------------------------------------------------------------------------
    app.include_router(submissions_router, tags=["submissions"])
    app.include_router(pages_router, include_in_schema=False)

    # -------------------------------------------------------------------------
    # Startup: create tables if missing (db backend only, non-destructive)
    # -------------------------------------------------------------------------
    @app.on_event("startup")
    def _startup() -> None:
        if isinstance(counter_store, SqlCounterStore):
            try:
                init_db(counter_store.engine)
                log.info("Storage backend: db (tables ready).")
            except Exception as e:
                # Never crash the app on init errors; log and allow /ping to work.
                log.exception("DB init failed: %s", e)
        else:
            log.info("Storage backend: file (data dir: %s).", settings.DATA_DIR.resolve())

    # -------------------------------------------------------------------------
    # Minimal health endpoint
    # -------------------------------------------------------------------------
    @app.get("/ping")
    def ping():
        """Simple liveness check."""
        return {"ok": True}

    return app


app = create_app()
