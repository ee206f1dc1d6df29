"""
Server entrypoint: run the FastAPI app under uvicorn.

Run from the backend dir:  python backend_entry.py --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

_backend_dir = Path(__file__).resolve().parent
if str(_backend_dir) not in sys.path:
    sys.path.insert(0, str(_backend_dir))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="World Cup Predictor API server")
    parser.add_argument("--host", default=os.environ.get("HOST", "127.0.0.1"))
    parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")))
    parser.add_argument("--reload", action="store_true", help="Reload on code changes (dev only)")
    args = parser.parse_args(argv)

    import uvicorn

    from core.config import get_settings

    settings = get_settings()
    logging.getLogger(__name__).info(
        "Starting %s on %s:%s", settings.app_name, args.host, args.port
    )
    uvicorn.run(
        "main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        app_dir=str(_backend_dir),
        log_level=settings.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
