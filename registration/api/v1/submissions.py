# registration/api/v1/submissions.py
"""
Form submission endpoint.

POST /save
  body: JSON object {name, phone, email, region}
        (url-encoded / multipart form bodies are accepted too)

  200 {"ok": true}              record saved; the generated ID is not returned
  400 {"error": "..."}          missing field / unknown region
  500 {"error": "..."}          storage failure (details only in the server log)
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from registration.core.deps import get_counter_store, get_submission_store
from registration.core.errors import StorageError, SubmissionError
from registration.services.submissions import register_submission
from registration.storage.base import CounterStore, SubmissionStore

logger = logging.getLogger(__name__)

router = APIRouter()

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def _read_payload(request: Request) -> Dict[str, Any]:
    """
    Read the request body as a flat dict.

    Anything that is not a JSON object (empty body, invalid JSON, a list...)
    becomes {} so it is reported as missing fields.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        return {k: v for k, v in form.items() if isinstance(v, str)}

    try:
        data = await request.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


@router.post("/save")
async def save_submission(
    request: Request,
    counters: CounterStore = Depends(get_counter_store),
    submissions: SubmissionStore = Depends(get_submission_store),
):
    payload = await _read_payload(request)

    try:
        await register_submission(payload, counters, submissions)
    except StorageError as e:
        logger.error("Storage error while saving submission: %s", e)
        return JSONResponse({"error": e.public_message}, status_code=e.status_code)
    except SubmissionError as e:
        return JSONResponse({"error": e.public_message}, status_code=e.status_code)
    except Exception:
        logger.exception("Unexpected error while saving submission")
        return JSONResponse({"error": StorageError.public_message}, status_code=500)

    return {"ok": True}
