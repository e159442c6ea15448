"""Shared plumbing for route handlers: context, store and settings lookup."""

from __future__ import annotations

from fastapi import Request

from ..config import Settings
from ..headers import RequestContext, build_request_context
from ..state import MockStateStore


def request_context(request: Request) -> RequestContext:
    ctx = getattr(request.state, "ctx", None)
    if ctx is None:
        ctx = build_request_context(request.headers)
        request.state.ctx = ctx
    return ctx


def request_store(request: Request) -> MockStateStore:
    store: MockStateStore | None = getattr(request.state, "store", None)
    if store is None:
        store = request.app.state.store
    return store


def request_settings(request: Request) -> Settings:
    settings: Settings | None = getattr(request.state, "settings", None)
    if settings is None:
        settings = request.app.state.settings
    return settings
