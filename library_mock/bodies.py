"""Request body helpers.

Policy: body parsing never raises for malformed input. A body that cannot be
read as an object becomes ``{}`` and the handler's required-field checks
answer with their usual 400.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import Request


log = logging.getLogger("library_mock.bodies")

JsonObject = dict[str, Any]


def content_type(request: Request) -> str:
    return (request.headers.get("content-type") or "").split(";", 1)[0].strip().lower()


async def read_json_object(request: Request) -> JsonObject:
    """Parse a JSON object body; anything else yields an empty dict."""

    ctype = content_type(request)
    if ctype != "application/json" and not ctype.endswith("+json"):
        return {}
    raw = await request.body()
    if not raw:
        return {}
    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        log.debug("ignoring malformed JSON body: %s", exc)
        return {}
    return data if isinstance(data, dict) else {}


async def read_body(request: Request) -> JsonObject:
    """Read a JSON or url-encoded body into a flat dict of fields."""

    if content_type(request) == "application/x-www-form-urlencoded":
        form = await request.form()
        return {key: value for key, value in form.items() if isinstance(value, str)}
    return await read_json_object(request)


def text(value: Any) -> str:
    """Coerce a body field to text the way query/form values arrive."""

    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
