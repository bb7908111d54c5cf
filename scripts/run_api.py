"""
Start the Newsdesk API server with uvicorn.

Usage:
    python scripts/run_api.py                 # settings from .env
    python scripts/run_api.py --port 8080 --no-reload

Responsibility: Local API startup
"""

import argparse
import sys
import os

# Add project root to Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import uvicorn
from src.config import settings


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=f"Run the {settings.app.app_name} API")
    parser.add_argument("--host", default=settings.app.api_host)
    parser.add_argument("--port", type=int, default=settings.app.api_port)
    parser.add_argument(
        "--no-reload", action="store_true",
        help="Disable auto-reload (on by default when APP_DEBUG is true)"
    )
    return parser.parse_args(argv)


if __name__ == "__main__":
    args = parse_args()

    print(f"{settings.app.app_name} {settings.app.app_version} ({settings.app.environment.value})")
    print(f"Live coverage API on http://{args.host}:{args.port}/api/live-coverages")
    print(f"Swagger docs at http://{args.host}:{args.port}/docs")

    uvicorn.run(
        "api.main:app",
        host=args.host,
        port=args.port,
        reload=settings.app.debug and not args.no_reload,
        log_level=settings.app.log_level.lower()
    )
