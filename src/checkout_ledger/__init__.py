"""Checkout Ledger - a hash-linked ledger of book checkouts.

Every checkout is recorded as a block whose SHA-256 hash covers its
position, timestamp, payload, and the hash of the block before it.  The
chain lives in memory for the lifetime of the process and is served over a
small FastAPI application.

Version Management
------------------
``__version__`` is read from the installed package metadata at import time.
The single source of truth is the ``version`` field in ``pyproject.toml``;
``server.py`` and ``health.py`` import ``__version__`` from here.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

# ---------------------------------------------------------------------------
# Package version - read from pyproject.toml via importlib.metadata.
#
# If the package is imported without being installed (rare, but possible
# when running straight from a checkout), fall back to "0.0.0-dev" so the
# application can still start.
# ---------------------------------------------------------------------------
try:
    __version__: str = version("checkout-ledger")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
