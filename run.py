"""
Entry point for the slicekit service.

Running this script with ``python run.py`` starts the FastAPI server
defined in ``backend/slicekit/main.py``.  The bind address can be
changed with the ``SLICEKIT_HOST`` and ``SLICEKIT_PORT`` environment
variables.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import uvicorn

logging.basicConfig(
    level=logging.DEBUG if os.getenv("SLICE_DEBUG") else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def main() -> None:
    """Run the Uvicorn server hosting the slicekit API."""
    # Ensure ``backend`` is on sys.path so ``slicekit`` can be imported
    # when the project has not been installed.
    backend_dir = Path(__file__).resolve().parent / "backend"
    if str(backend_dir) not in sys.path:
        sys.path.append(str(backend_dir))

    from slicekit.main import app  # type: ignore

    host = os.getenv("SLICEKIT_HOST", "0.0.0.0")
    port = int(os.getenv("SLICEKIT_PORT", "8000"))
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
