"""Access check handler.

Implements:
- POST /check-access

Only organization resources are understood. Membership grants ``read``;
``write`` and ``delete`` need the admin role. Anything else is a plain
``{"allowed": false}``, never an error.
"""

from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse

from .. import errors
from ..bodies import read_body, text
from ..state import ROLE_ADMIN, MockStateStore

from ._common import request_store


REQUIRED_FIELDS = ("user_id", "action", "resource_type", "resource_id")

READ_ACTIONS = frozenset({"read"})
ADMIN_ACTIONS = frozenset({"write", "delete"})


def is_allowed(store: MockStateStore, *, user_id: str, action: str, resource_type: str, resource_id: str) -> bool:
    if resource_type != "organization":
        return False
    member = store.find_member(resource_id, user_id)
    if member is None:
        return False
    if action in READ_ACTIONS:
        return True
    if action in ADMIN_ACTIONS:
        return member.role == ROLE_ADMIN
    return False


async def post_check_access(request: Request) -> JSONResponse:
    body = await read_body(request)
    if any(not body.get(name) for name in REQUIRED_FIELDS):
        return errors.ACCESS_FIELDS_REQUIRED.as_detail()

    allowed = is_allowed(
        request_store(request),
        user_id=text(body["user_id"]),
        action=text(body["action"]),
        resource_type=text(body["resource_type"]),
        resource_id=text(body["resource_id"]),
    )
    return JSONResponse({"allowed": allowed})
