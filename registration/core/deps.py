# registration/core/deps.py
"""
Common FastAPI dependencies:

- Counter store (`get_counter_store`)
- Submission store (`get_submission_store`)
- Jinja2 templates helper (`templates`)

The stores are built once in `create_app()` and kept on `app.state`.
"""

from __future__ import annotations

from pathlib import Path

from fastapi import Request
from fastapi.templating import Jinja2Templates

from registration.storage.base import CounterStore, SubmissionStore

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def get_counter_store(request: Request) -> CounterStore:
    return request.app.state.counter_store


def get_submission_store(request: Request) -> SubmissionStore:
    return request.app.state.submission_store
