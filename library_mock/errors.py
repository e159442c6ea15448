"""Error catalog for the mock server.

Two error envelopes coexist and are kept per route group because existing
clients parse them differently:
  - catalog/context routes: {"success": false, "message": ...}
  - organization/access/identity routes: {"detail": ...}
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from fastapi.responses import JSONResponse

from .headers import ACCEPTED_ORG_IDS


_ORG_CHOICES = " or ".join(ACCEPTED_ORG_IDS)


@dataclass(frozen=True, slots=True)
class ErrorCode:
    """A stable (status, message) pair rendered into one of the two envelopes."""

    status: int
    message: str

    def as_message(self) -> JSONResponse:
        return JSONResponse({"success": False, "message": self.message}, status_code=self.status)

    def as_detail(self) -> JSONResponse:
        return JSONResponse({"detail": self.message}, status_code=self.status)


# Catalog routes
ORG_HEADER_REQUIRED = ErrorCode(400, f"Invalid or missing org-id header. Must be {_ORG_CHOICES}")
ORG_HEADER_INVALID = ErrorCode(400, f"Invalid org-id header. Must be {_ORG_CHOICES}")
DESCRIPTION_REQUIRED = ErrorCode(400, "description is required")
LIBRARY_NOT_FOUND = ErrorCode(404, "Library not found")
LIBRARY_NOT_IN_ORG = ErrorCode(403, "Library not found in this organization")
CONTEXT_NOT_FOUND = ErrorCode(404, "Context not found in this library")

# Organization / access / identity routes
UNAUTHORIZED = ErrorCode(401, "Unauthorized")
ORG_FIELDS_REQUIRED = ErrorCode(400, "name and owner_id are required")
ORGANIZATION_NOT_FOUND = ErrorCode(404, "Organization not found")
USER_ID_REQUIRED = ErrorCode(400, "user_id is required")
USER_ALREADY_MEMBER = ErrorCode(400, "User already in organization")
MEMBER_NOT_FOUND = ErrorCode(404, "User not found in organization")
ACCESS_FIELDS_REQUIRED = ErrorCode(400, "user_id, action, resource_type, and resource_id are required")


class UploadRejected(Exception):
    """Raised by the upload parser when a multipart part violates the limits."""

    def __init__(self, message: str, *, details: Any | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def as_response(self) -> JSONResponse:
        payload: dict[str, Any] = {"success": False, "message": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return JSONResponse(payload, status_code=400)


def error_from_exception(exc: Exception) -> dict[str, Any]:
    """Convert an unexpected exception into a stable error shape."""

    return {
        "success": False,
        "message": "Unexpected error in mock server.",
        "error": {"type": type(exc).__name__, "message": str(exc)},
    }
