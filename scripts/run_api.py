"""
Run FastAPI Server
==================

Script to start the churn scoring server.

Usage:
    python scripts/run_api.py
    python scripts/run_api.py --port 8000 --reload
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import uvicorn

from config import get_config
from telco_churn.utils import setup_logging


def parse_args(api_config: dict):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Run the churn scoring server")

    parser.add_argument(
        "--host",
        type=str,
        default=api_config.get("host", "0.0.0.0"),
        help="Host to bind to"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=api_config.get("port", 8000),
        help="Port to bind to"
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload"
    )

    return parser.parse_args()


def main():
    """Run the API server."""
    config = get_config()
    args = parse_args(config.get("api", {}))
    log_config = config.get("logging", {})
    setup_logging(level=log_config.get("level", "INFO"), log_file=log_config.get("file"))

    print(f"""
    ╔═══════════════════════════════════════════════════╗
    ║       Churn Scoring API Server                    ║
    ╠═══════════════════════════════════════════════════╣
    ║  Host: {args.host:<15}                            ║
    ║  Port: {args.port:<15}                            ║
    ║  Reload: {str(args.reload):<13}                            ║
    ╠═══════════════════════════════════════════════════╣
    ║  Demo:     http://localhost:{args.port}/demo            ║
    ║  API Docs: http://localhost:{args.port}/docs            ║
    ╚═══════════════════════════════════════════════════╝
    """)

    uvicorn.run(
        "telco_churn.api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload
    )


if __name__ == "__main__":
    main()
