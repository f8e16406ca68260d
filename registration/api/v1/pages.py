"""
Frontend page routes.
Renders the public registration form.
"""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from registration.core.deps import templates
from registration.core.regions import list_regions

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
def registration_form(request: Request):
    """Registration form; region options come from the static region table."""
    return templates.TemplateResponse(
        request,
        "index.html",
        {"regions": list_regions()},
    )
