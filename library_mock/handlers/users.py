"""Identity and health handlers.

- GET /users/me: fabricates a new user per call (the token is never decoded)
- GET /health
"""

from __future__ import annotations

from faker import Faker
from fastapi import Request
from fastapi.responses import JSONResponse

from .. import errors
from ..catalog import fake
from ..state import User
from ..versioning import new_id, now_utc_iso

from ._common import request_context, request_store


def fabricate_user(faker: Faker | None = None) -> User:
    f = faker or fake
    return User(user_id=new_id(), email=f.email(), name=f.name())


async def get_users_me(request: Request) -> JSONResponse:
    if not request_context(request).has_bearer:
        return errors.UNAUTHORIZED.as_detail()

    user = request_store(request).remember_user(fabricate_user())
    return JSONResponse(user.to_dict())


async def get_health(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok", "timestamp": now_utc_iso()})
