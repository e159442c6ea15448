"""Organization and membership handlers.

Implements:
- POST   /organizations
- GET    /organizations
- POST   /organizations/{organization_id}/users
- GET    /organizations/{organization_id}/users
- DELETE /organizations/{organization_id}/users

Errors use the bare {"detail": ...} envelope.
"""

from __future__ import annotations

import logging

from fastapi import Request, Response
from fastapi.responses import JSONResponse

from .. import errors
from ..bodies import read_body, text
from ..responses import cursor_page, parse_int

from ._common import request_context, request_store


log = logging.getLogger("library_mock.handlers.organizations")

DEFAULT_PAGE_SIZE = 20


async def post_organizations(request: Request) -> JSONResponse:
    body = await read_body(request)
    name = body.get("name")
    owner_id = body.get("owner_id")
    if not name or not owner_id:
        return errors.ORG_FIELDS_REQUIRED.as_detail()

    store = request_store(request)
    org = store.create_organization(
        name=text(name),
        owner_id=text(owner_id),
        description=text(body.get("description") or ""),
    )
    log.info("organization %s created (owner=%s)", org.id, org.owner_id)
    return JSONResponse(org.to_dict(), status_code=201)


async def get_organizations(request: Request) -> JSONResponse:
    if not request_context(request).has_bearer:
        return errors.UNAUTHORIZED.as_detail()

    store = request_store(request)
    return JSONResponse({"organizations": [org.to_dict() for org in store.list_organizations()]})


async def post_organization_users(request: Request) -> JSONResponse:
    store = request_store(request)
    org_id = str(request.path_params.get("organization_id") or "")
    if org_id not in store.organizations:
        return errors.ORGANIZATION_NOT_FOUND.as_detail()

    body = await read_body(request)
    user_id = body.get("user_id")
    if not user_id:
        return errors.USER_ID_REQUIRED.as_detail()

    member = store.add_member(org_id, text(user_id), text(body.get("role") or "member"))
    if member is None:
        return errors.USER_ALREADY_MEMBER.as_detail()

    log.info("user %s added to organization %s as %s", member.user_id, org_id, member.role)
    return JSONResponse({}, status_code=201)


async def get_organization_users(request: Request) -> JSONResponse:
    """Cursor-paginated membership listing.

    ``next_cursor`` is the user_id of the last row on this page; pass it back
    as ``cursor`` to continue. It is null once the list is exhausted.
    """

    store = request_store(request)
    org_id = str(request.path_params.get("organization_id") or "")
    if org_id not in store.organizations:
        return errors.ORGANIZATION_NOT_FOUND.as_detail()

    size = parse_int(request.query_params.get("size"), DEFAULT_PAGE_SIZE)
    rows, next_cursor = cursor_page(
        store.members(org_id),
        cursor=request.query_params.get("cursor"),
        size=size,
        key="user_id",
    )
    return JSONResponse(
        {
            "users": [{"user_id": row.user_id, "role": row.role} for row in rows],
            "next_cursor": next_cursor,
        }
    )


async def delete_organization_users(request: Request) -> Response:
    store = request_store(request)
    org_id = str(request.path_params.get("organization_id") or "")
    if org_id not in store.organizations:
        return errors.ORGANIZATION_NOT_FOUND.as_detail()

    body = await read_body(request)
    user_id = body.get("user_id")
    if not user_id:
        return errors.USER_ID_REQUIRED.as_detail()

    if not store.remove_member(org_id, text(user_id)):
        return errors.MEMBER_NOT_FOUND.as_detail()

    log.info("user %s removed from organization %s", user_id, org_id)
    return Response(status_code=204)
