#!/usr/bin/env python
"""
Serve the print pricing API with uvicorn.

Usage:
    python scripts/run_api.py [--port 8000] [--materials path.csv] [--finishing path.csv]
"""
import argparse
import os
import subprocess
import sys
from pathlib import Path


def main():
    parser = argparse.ArgumentParser(description="Run the Print Pricing API")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--materials", help="Saved materials sheet export (CSV)")
    parser.add_argument("--finishing", help="Saved finishing sheet export (CSV)")
    parser.add_argument("--no-reload", action="store_true")
    args = parser.parse_args()

    project_root = Path(__file__).parent.parent
    os.chdir(project_root)

    # Ensure src is in python path
    env = os.environ.copy()
    src_path = str(project_root / "src")
    env["PYTHONPATH"] = os.pathsep.join(p for p in (src_path, env.get("PYTHONPATH")) if p)
    if args.materials:
        env["PRINT_PRICING_MATERIALS_CSV"] = str(Path(args.materials).resolve())
    if args.finishing:
        env["PRINT_PRICING_FINISHING_CSV"] = str(Path(args.finishing).resolve())

    command = [
        sys.executable, "-m", "uvicorn",
        "print_pricing.api.main:app",
        "--host", args.host,
        "--port", str(args.port),
    ]
    if not args.no_reload:
        command.append("--reload")

    print(f"Starting Print Pricing API on {args.host}:{args.port}...")
    try:
        subprocess.run(command, env=env)
    except KeyboardInterrupt:
        print("\nAPI stopped.")


if __name__ == "__main__":
    main()
