"""Library catalog handlers.

Implements:
- GET  /libraries
- GET  /library/{id}
- GET  /library/{libraryId}/context/{contextId}
- POST /library/{id}/contexts

All four answer errors as {"success": false, "message": ...}. The ``org-id``
header scopes the catalog to one of the two seeded organizations.
"""

from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from .. import errors
from ..bodies import text
from ..catalog import filter_elements, library_matches, materialize_elements, normalize_search, random_category
from ..errors import UploadRejected
from ..headers import RequestContext
from ..responses import ok, paginate, parse_int
from ..state import Library, LibraryElement, MockStateStore
from ..uploads import read_context_upload
from ..versioning import new_id

from ._common import request_context, request_settings, request_store


log = logging.getLogger("library_mock.handlers.libraries")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 8


def _owned_library(
    store: MockStateStore,
    ctx: RequestContext,
    library_id: str,
) -> tuple[Library | None, JSONResponse | None]:
    """Resolve a library for the (already validated) org header: 404 unknown, 403 foreign."""

    library = store.get_library(library_id)
    if library is None:
        return None, errors.LIBRARY_NOT_FOUND.as_message()
    if library.organization_id != ctx.org_id:
        return None, errors.LIBRARY_NOT_IN_ORG.as_message()
    return library, None


def _page_params(request: Request) -> tuple[int, int, str]:
    query = request.query_params
    return (
        parse_int(query.get("page"), DEFAULT_PAGE),
        parse_int(query.get("limit"), DEFAULT_LIMIT),
        normalize_search(query.get("search")),
    )


def _with_debug(payload: dict, request: Request, store: MockStateStore) -> dict:
    if request_settings(request).debug:
        payload["mock"] = {"revision": store.global_revision}
    return payload


async def get_libraries(request: Request) -> JSONResponse:
    ctx = request_context(request)
    if not ctx.org_id_valid:
        return errors.ORG_HEADER_REQUIRED.as_message()

    store = request_store(request)
    page, limit, search = _page_params(request)

    candidates = store.libraries_for_org(ctx.org_id)
    if search:
        candidates = [
            lib for lib in candidates if library_matches(lib, store.stored_elements(lib.id), search)
        ]

    result = paginate(candidates, page=page, limit=limit)
    payload = ok(
        {
            "orgId": ctx.org_id,
            "libraries": [lib.to_dict() for lib in result.items],
            "count": len(result.items),
            "total": result.total,
        }
    )
    payload.update(result.meta())
    return JSONResponse(_with_debug(payload, request, store), status_code=200)


async def get_library(request: Request) -> JSONResponse:
    ctx = request_context(request)
    if not ctx.org_id_valid:
        return errors.ORG_HEADER_REQUIRED.as_message()

    store = request_store(request)
    library_id = str(request.path_params.get("id") or "")
    library, error = _owned_library(store, ctx, library_id)
    if error is not None:
        return error

    page, limit, search = _page_params(request)
    elements = filter_elements(materialize_elements(library, store.stored_elements(library.id)), search)
    result = paginate(elements, page=page, limit=limit)

    payload = ok(library.to_dict())
    payload.update(
        {
            "name": library.title,
            "elements": [el.to_dict() for el in result.items],
            "elementsCount": len(result.items),
            "totalElements": result.total,
        }
    )
    payload.update(result.meta())
    return JSONResponse(_with_debug(payload, request, store), status_code=200)


async def get_library_context(request: Request) -> JSONResponse:
    """Look up a stored context; filler elements are not addressable by id.

    The org header is optional here. When present it must be valid and must
    own the library.
    """

    ctx = request_context(request)
    if ctx.has_org_id and not ctx.org_id_valid:
        return errors.ORG_HEADER_INVALID.as_message()

    store = request_store(request)
    library_id = str(request.path_params.get("libraryId") or "")
    context_id = str(request.path_params.get("contextId") or "")

    library = store.get_library(library_id)
    if library is None:
        return errors.LIBRARY_NOT_FOUND.as_message()
    if ctx.has_org_id and library.organization_id != ctx.org_id:
        return errors.LIBRARY_NOT_IN_ORG.as_message()

    element = next((el for el in store.stored_elements(library_id) if el.id == context_id), None)
    if element is None:
        return errors.CONTEXT_NOT_FOUND.as_message()

    payload = ok(
        {
            "libraryId": library_id,
            "library": library.to_dict(),
            "context": element.to_dict(),
        }
    )
    return JSONResponse(payload, status_code=200)


async def post_library_contexts(request: Request) -> JSONResponse:
    try:
        upload = await read_context_upload(request)
    except UploadRejected as exc:
        log.info("context upload rejected: %s", exc.message)
        return exc.as_response()

    ctx = request_context(request)
    if not ctx.org_id_valid:
        return errors.ORG_HEADER_REQUIRED.as_message()

    description = text(upload.fields.get("description"))
    if not description.strip():
        return errors.DESCRIPTION_REQUIRED.as_message()

    store = request_store(request)
    library_id = str(request.path_params.get("id") or "")
    library, error = _owned_library(store, ctx, library_id)
    if error is not None:
        return error

    element = LibraryElement(
        id=new_id(),
        title=description,
        category=random_category(),
        description=description,
    )
    new_count = store.add_element(library, element)
    log.info("context %s created in %s (contextCount=%d, files=%d)", element.id, library.id, new_count, len(upload.files))

    payload = ok(
        {
            "element": element.to_dict(),
            "filesUploaded": len(upload.files),
            "files": [f.to_dict() for f in upload.files],
            "newContextCount": new_count,
        }
    )
    return JSONResponse(payload, status_code=201)
