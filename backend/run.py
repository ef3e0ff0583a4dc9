#!/usr/bin/env python3
"""
Quick start script for the Broker Assistant API server.

Usage:
    python run.py
    python run.py --port 8080
    python run.py --no-reload
"""

import argparse
import uvicorn

from estate_assistant.config import get_settings


def main():
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Run the Broker Assistant API server")
    parser.add_argument("--host", default=settings.HOST, help=f"Host to bind to (default: {settings.HOST})")
    parser.add_argument("--port", type=int, default=settings.PORT, help=f"Port to listen on (default: {settings.PORT})")
    parser.add_argument("--no-reload", action="store_true", help="Disable auto-reload (always off when DEBUG is false)")

    args = parser.parse_args()
    reload = settings.DEBUG and not args.no_reload

    print("=" * 60)
    print("  Broker Assistant - Real Estate Chat & Lead Scoring API")
    print("=" * 60)
    print(f"\n  Starting server at http://{args.host}:{args.port}")
    print(f"  API Docs: http://localhost:{args.port}/docs")
    print(f"  Router mode: {'llm' if settings.USE_LLM_ROUTER else 'rules'}")
    print(f"  Auto-reload: {'enabled' if reload else 'disabled'}")
    print("\n" + "=" * 60 + "\n")

    uvicorn.run(
        "estate_assistant.main:app",
        host=args.host,
        port=args.port,
        reload=reload,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
