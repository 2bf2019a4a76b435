#!/usr/bin/env python3
"""Start the map API under uvicorn, honouring the PORT environment variable."""

import argparse
import os
import subprocess
import sys


def _port_from_env(default: int = 8000) -> int:
    raw = os.environ.get("PORT", str(default))
    try:
        return int(raw)
    except ValueError:
        print(f"Warning: Invalid PORT value '{raw}', using default {default}", file=sys.stderr)
        return default


def main() -> int:
    parser = argparse.ArgumentParser(description="Run the Pulse map API.")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=_port_from_env())
    parser.add_argument("--reload", action="store_true", help="Restart on source changes (development only).")
    args = parser.parse_args()

    src_path = os.path.abspath("src")
    if not os.path.isdir(src_path):
        print(f"Warning: src directory not found at {src_path}", file=sys.stderr)
        src_path = os.getcwd()
    pythonpath = os.environ.get("PYTHONPATH", "")
    os.environ["PYTHONPATH"] = f"{src_path}{os.pathsep}{pythonpath}" if pythonpath else src_path

    stores_file = os.environ.get("PULSE_STORES_FILE", os.path.join("data", "stores.geo.json"))
    if not os.path.exists(stores_file):
        print(f"Warning: {stores_file} is missing; run generate_data.py first", file=sys.stderr)

    cmd = [
        sys.executable,
        "-m",
        "uvicorn",
        "pulsemap.main:app",
        "--host",
        args.host,
        "--port",
        str(args.port),
        "--proxy-headers",
        "--forwarded-allow-ips", "*",
    ]
    if args.reload:
        cmd.append("--reload")

    print(f"Starting map API on {args.host}:{args.port}", file=sys.stderr)
    try:
        return subprocess.call(cmd)
    except KeyboardInterrupt:
        print("Server interrupted by user", file=sys.stderr)
        return 0


if __name__ == "__main__":
    sys.exit(main())
