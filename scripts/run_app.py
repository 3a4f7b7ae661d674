#!/usr/bin/env python3
"""Launch the newsdesk API with uvicorn and wait until it is healthy.

This script handles:
- Reporting whether a NewsAPI key is configured (sample data is served otherwise)
- Starting the FastAPI backend
- Graceful shutdown on Ctrl+C
"""

from __future__ import annotations

import argparse
import subprocess
import sys
import time
from pathlib import Path
from typing import Sequence

import httpx

ROOT_DIR = Path(__file__).resolve().parents[1]
UVICORN_APP = "newsdesk.api.server:app"


def check_api_key() -> bool:
    """Report whether live headlines are available."""

    from newsdesk.config import settings

    if settings.has_api_key:
        print("[env] NEWS_API_KEY is configured; live headlines enabled.")
        return True
    print("[env] NEWS_API_KEY is not set. Serving bundled sample articles.")
    return False


def start_process(label: str, command: Sequence[str]) -> subprocess.Popen:
    """Launch a child process and return the handle."""

    print(f"[{label}] {' '.join(command)}")
    return subprocess.Popen(command, cwd=ROOT_DIR)  # noqa: S603 - command constructed above


def wait_for_backend(base_url: str, timeout: float) -> bool:
    """Poll the backend health endpoint until it responds or timeout occurs."""

    health_url = f"{base_url.rstrip('/')}/health"
    deadline = time.time() + timeout
    print(f"[backend] Waiting for health check at {health_url} ...")
    while time.time() < deadline:
        try:
            httpx.get(health_url, timeout=3.0).raise_for_status()
        except httpx.HTTPError:
            time.sleep(1.0)
            continue
        print("[backend] Health check succeeded.")
        return True
    print("[backend] Health check timed out.")
    return False


def shutdown_process(proc: subprocess.Popen | None, label: str) -> None:
    if proc is None or proc.poll() is not None:
        return

    print(f"[{label}] Stopping...")
    proc.terminate()
    try:
        proc.wait(timeout=10)
    except subprocess.TimeoutExpired:
        print(f"[{label}] Terminate timed out. Killing...")
        proc.kill()


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Start the newsdesk FastAPI backend.")
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host/interface for the FastAPI server (default: 127.0.0.1).",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=3003,
        help="Port for the FastAPI server (default: 3003).",
    )
    parser.add_argument(
        "--startup-timeout",
        type=float,
        default=30.0,
        help="Seconds to wait for the health endpoint before giving up.",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable uvicorn auto-reload.",
    )
    return parser.parse_args(argv)


def build_command(args: argparse.Namespace) -> list[str]:
    command = [
        sys.executable,
        "-m",
        "uvicorn",
        UVICORN_APP,
        "--host",
        args.host,
        "--port",
        str(args.port),
    ]
    if args.reload:
        command.append("--reload")
    return command


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    check_api_key()

    base_url = f"http://{args.host}:{args.port}"
    proc = None
    try:
        proc = start_process("backend", build_command(args))
        if not wait_for_backend(base_url, args.startup_timeout):
            return 1

        print(f"[runner] Backend API: {base_url}")
        print(f"[runner] API Docs: {base_url}/docs")
        while proc.poll() is None:
            time.sleep(0.5)
        print(f"[backend] exited with status {proc.returncode}.")
    except KeyboardInterrupt:
        print("\n[runner] Caught KeyboardInterrupt. Shutting down...")
    finally:
        shutdown_process(proc, "backend")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
