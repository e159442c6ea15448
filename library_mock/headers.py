"""Header normalization utilities.

Catalog routes are scoped by the ``org-id`` header; two routes are gated by a
Bearer-shaped ``Authorization`` header. Neither value is verified against a
real identity: the mock only checks shape and membership in a fixed set.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping


ORG_ID = "org-id"
AUTHORIZATION = "Authorization"
BEARER_PREFIX = "Bearer "

ACCEPTED_ORG_IDS: tuple[str, ...] = ("org-001", "org-002")


def _lower_map(headers: Mapping[str, str]) -> dict[str, str]:
    return {str(k).lower(): str(v) for k, v in headers.items()}


@dataclass(slots=True)
class RequestContext:
    """Normalized request context derived from headers.

    - org_id: raw ``org-id`` value ("" when missing)
    - authorization: raw ``Authorization`` value ("" when missing)
    """

    org_id: str
    authorization: str

    @property
    def has_org_id(self) -> bool:
        return bool(self.org_id)

    @property
    def org_id_valid(self) -> bool:
        return self.org_id in ACCEPTED_ORG_IDS

    @property
    def has_bearer(self) -> bool:
        # Any token is accepted, including an empty one after the prefix.
        return self.authorization.startswith(BEARER_PREFIX)


def build_request_context(headers: Mapping[str, str]) -> RequestContext:
    """Build a RequestContext from incoming headers. Always succeeds."""

    h = _lower_map(headers)
    return RequestContext(
        org_id=h.get(ORG_ID, ""),
        authorization=h.get(AUTHORIZATION.lower(), ""),
    )
