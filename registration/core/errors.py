# registration/core/errors.py
"""
Submission error hierarchy.

Every error carries the HTTP status and the generic message shown to the
client. Internal details (paths, DB errors) stay in the logs only.
"""

from __future__ import annotations


class SubmissionError(Exception):
    status_code: int = 500
    public_message: str = "Server error saving file."


class MissingFieldsError(SubmissionError):
    status_code = 400
    public_message = "All fields are required."


class InvalidRegionError(SubmissionError):
    status_code = 400
    public_message = "Invalid region selected."


class StorageError(SubmissionError):
    """Counter increment or record write failed."""

    status_code = 500
    public_message = "Server error saving file."
