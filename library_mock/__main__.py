"""Module entrypoint for the mock server.

Starts the FastAPI app under uvicorn. See :mod:`library_mock.config` for the
environment variables it reads.
"""

from __future__ import annotations

import uvicorn

from .config import load_settings


def main() -> None:
    settings = load_settings()

    uvicorn.run(
        "library_mock.server:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
        # UI mocks are often run behind reverse proxies / tunnels.
        proxy_headers=True,
        forwarded_allow_ips="*",
    )


if __name__ == "__main__":
    main()
