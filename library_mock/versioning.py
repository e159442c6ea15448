"""Small helpers for IDs, timestamps and deterministic offsets (mock-friendly).

Timestamps use the millisecond ``...Z`` form that browser clients produce with
``Date.toISOString()``, so fixtures and generated rows look the same.
"""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4


def now_utc_iso() -> str:
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def new_id() -> str:
    return str(uuid4())


def id_checksum(value: str) -> int:
    """Additive character-code checksum of an identifier.

    Not a hash in any cryptographic sense: it only has to be stable per id so
    synthesized rows keep their titles/categories across reads.
    """

    return sum(ord(ch) for ch in value)
