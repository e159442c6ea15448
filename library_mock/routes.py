"""Registry of the mock's endpoints.

Each entry maps a path template and its methods to a handler. Registration
order matters only where templates overlap: ``/library/{id}/contexts`` and
``/library/{libraryId}/context/{contextId}`` are listed before
``/library/{id}`` for readability, though Starlette matches them exactly.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI

from .handlers.access import post_check_access
from .handlers.libraries import get_libraries, get_library, get_library_context, post_library_contexts
from .handlers.organizations import (
    delete_organization_users,
    get_organization_users,
    get_organizations,
    post_organization_users,
    post_organizations,
)
from .handlers.users import get_health, get_users_me


log = logging.getLogger("library_mock.routes")

# Each item: {'path': str, 'methods': [str], 'handler': callable}
KNOWN_ROUTES: list[dict[str, Any]] = [
    {"path": "/health", "methods": ["GET"], "handler": get_health},
    {"path": "/libraries", "methods": ["GET"], "handler": get_libraries},
    {"path": "/library/{id}/contexts", "methods": ["POST"], "handler": post_library_contexts},
    {"path": "/library/{libraryId}/context/{contextId}", "methods": ["GET"], "handler": get_library_context},
    {"path": "/library/{id}", "methods": ["GET"], "handler": get_library},
    {"path": "/organizations", "methods": ["GET"], "handler": get_organizations},
    {"path": "/organizations", "methods": ["POST"], "handler": post_organizations},
    {"path": "/organizations/{organization_id}/users", "methods": ["POST"], "handler": post_organization_users},
    {"path": "/organizations/{organization_id}/users", "methods": ["GET"], "handler": get_organization_users},
    {"path": "/organizations/{organization_id}/users", "methods": ["DELETE"], "handler": delete_organization_users},
    {"path": "/check-access", "methods": ["POST"], "handler": post_check_access},
    {"path": "/users/me", "methods": ["GET"], "handler": get_users_me},
]


def describe_routes() -> list[str]:
    """Human-readable route list, one "METHOD path" line per method."""

    lines: list[str] = []
    for item in KNOWN_ROUTES:
        for method in item["methods"]:
            lines.append(f"{method:<6} {item['path']}")
    return lines


def register_known_routes(app: FastAPI) -> None:
    for item in KNOWN_ROUTES:
        app.add_route(item["path"], item["handler"], methods=item["methods"])
        log.debug("registered %s %s", ",".join(item["methods"]), item["path"])
