"""Mock server package (libraries, organizations and access checks).

Serves in-memory fixtures for UI development and integration tests.
The runtime lives in :mod:`library_mock.server`; state in :mod:`library_mock.state`.
"""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.1.0"
