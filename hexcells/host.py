"""Standalone game host: runs a server until every player has left."""

from __future__ import annotations

import subprocess
import sys
import time
from typing import List, Optional

from hexcells.protocol import GAME_PORT
from hexcells.server import Server

READY_LINE = "ready"


def spawn_host(height: int, width: int, port: int = GAME_PORT) -> subprocess.Popen:
    """Start a host process and wait until it accepts connections."""
    process = subprocess.Popen(
        [sys.executable, "-m", "hexcells.host", str(height), str(width), str(port)],
        stdout=subprocess.PIPE,
        text=True,
    )
    line = process.stdout.readline().strip()
    if line != READY_LINE:
        process.kill()
        process.wait()
        raise RuntimeError("host failed to start")
    return process


def _to_int(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) not in (2, 3):
        print("Call format: host [height] [width] [port]", file=sys.stderr)
        return 1
    height, width = _to_int(args[0]), _to_int(args[1])
    if height <= 0 or width <= 0:
        print("Wrong field size specified", file=sys.stderr)
        return 1
    port = _to_int(args[2]) if len(args) == 3 else GAME_PORT
    try:
        server = Server(height, width, port)
        server.start()
    except OSError:
        print("Server: exception", file=sys.stderr)
        return 1
    print(READY_LINE, flush=True)
    try:
        while server.busy():
            time.sleep(0.2)
    finally:
        server.close()
    print("Server shutdown", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())