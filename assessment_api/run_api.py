#!/usr/bin/env python3
"""Startup script for the Fire Risk Assessment Engine API.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-01-19
Version: 1.0.0
License: MIT

Example:
    Run with the default data directory::

        python -m assessment_api.run_api

    Or specify a data directory and port::

        python -m assessment_api.run_api --data-dir /srv/fra-data --port 8201
"""

import argparse
import uvicorn

from utils.config import config

from .api import app
from .api_utils import initialize_services


def main():
    """Main entry point for running the API server."""
    parser = argparse.ArgumentParser(
        description="Fire Risk Assessment Engine API Server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run on the default port
  python -m assessment_api.run_api

  # Run against a custom data directory on port 8201
  python -m assessment_api.run_api --data-dir /srv/fra-data --port 8201
        """
    )

    parser.add_argument(
        "--data-dir",
        type=str,
        default=str(config.DATA_DIR),
        help=f"Base data directory (default: {config.DATA_DIR})"
    )
    parser.add_argument(
        "--host",
        type=str,
        default=config.API_HOST,
        help=f"Host to bind to (default: {config.API_HOST})"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=config.API_PORT,
        help=f"Port to bind to (default: {config.API_PORT})"
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development"
    )

    args = parser.parse_args()

    print(f"Data directory: {args.data_dir}")
    print(f"Server will run on: http://{args.host}:{args.port}")
    print(f"API documentation: http://{args.host}:{args.port}/docs")
    print()

    # Initialize the services
    try:
        initialize_services(args.data_dir)
        print("✓ Assessment services initialized successfully")
        print()
    except Exception as e:
        print(f"✗ Failed to initialize assessment services: {e}")
        return 1

    # Run the server
    uvicorn.run(
        app,
        host=args.host,
        port=args.port,
        reload=args.reload
    )

    return 0


if __name__ == "__main__":
    exit(main())

# Made with Bob
