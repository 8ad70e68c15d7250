#!/usr/bin/env python3
"""
scripts/serve.py
================
Start the gridmeasures index server.

Usage:
    python scripts/serve.py --host 0.0.0.0 --port 8000 --reload
"""
import argparse
import logging
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))


def main():
    parser = argparse.ArgumentParser(description="gridmeasures Index Server")
    parser.add_argument("--host",   default="0.0.0.0", help="Bind host")
    parser.add_argument("--port",   default=8000, type=int, help="Bind port")
    parser.add_argument("--reload", action="store_true", help="Hot reload")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    print(f"Starting gridmeasures server on {args.host}:{args.port}")

    try:
        from gridmeasures.deployment.server.app import serve
    except ImportError:
        print("Server requires: pip install gridmeasures[server]")
        sys.exit(1)
    serve(host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
