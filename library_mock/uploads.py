"""Multipart parsing for context creation.

Accepts up to ``MAX_FILES`` parts under the ``files`` field, each a PDF of at
most ``MAX_FILE_BYTES``. Any violation rejects the whole request before the
handler looks at headers or fields. File bytes are measured and discarded.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from fastapi import Request
from starlette.datastructures import UploadFile

from .bodies import content_type, read_body
from .errors import UploadRejected


log = logging.getLogger("library_mock.uploads")

FILES_FIELD = "files"
MAX_FILES = 10
MAX_FILE_BYTES = 5 * 1024 * 1024
ALLOWED_MIME_TYPES = frozenset({"application/pdf"})

_CHUNK = 64 * 1024


@dataclass(frozen=True, slots=True)
class UploadedFile:
    name: str
    size: int
    type: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "size": self.size, "type": self.type}


@dataclass(slots=True)
class ContextUpload:
    fields: dict[str, Any] = field(default_factory=dict)
    files: list[UploadedFile] = field(default_factory=list)


async def _measure(upload: UploadFile) -> int:
    if upload.size is not None:
        return upload.size
    size = 0
    while True:
        chunk = await upload.read(_CHUNK)
        if not chunk:
            return size
        size += len(chunk)
        if size > MAX_FILE_BYTES:
            return size


async def check_upload(upload: UploadFile, *, accepted: int) -> UploadedFile:
    """Validate one file part; ``accepted`` is the number of files already kept."""

    if accepted >= MAX_FILES:
        raise UploadRejected("Too many files", details={"limit": MAX_FILES})
    mime = (upload.content_type or "").lower()
    if mime not in ALLOWED_MIME_TYPES:
        raise UploadRejected("Solo se permiten archivos PDF", details={"file": upload.filename, "type": mime})
    size = await _measure(upload)
    if size > MAX_FILE_BYTES:
        raise UploadRejected("File too large", details={"file": upload.filename, "limit": MAX_FILE_BYTES})
    return UploadedFile(name=upload.filename or "", size=size, type=mime)


async def read_context_upload(request: Request) -> ContextUpload:
    """Parse the request into text fields plus accepted file metadata.

    Non-multipart bodies (JSON or url-encoded) are read as fields only.
    """

    if content_type(request) != "multipart/form-data":
        return ContextUpload(fields=await read_body(request))

    result = ContextUpload()
    async with request.form() as form:
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                if key != FILES_FIELD:
                    raise UploadRejected("Unexpected field", details={"field": key})
                result.files.append(await check_upload(value, accepted=len(result.files)))
            else:
                # Last value wins for repeated text fields.
                result.fields[key] = value
    log.debug("multipart accepted: %d file(s), fields=%s", len(result.files), sorted(result.fields))
    return result
