"""Run the user API server until SIGINT or SIGTERM."""

from __future__ import annotations

import argparse
import signal
import sys
import threading
import time
from collections.abc import Sequence
from typing import Optional

from apisample import logger
from apisample.database import DatabaseInstance, close, migrate, new_database
from apisample.entities import new_domains
from apisample.server import Server, ServerInstance, new_server

SHUTDOWN_TIMEOUT = 2.0


def _serve_until_signalled(server: Server) -> None:
    stop = threading.Event()
    failures: list[BaseException] = []

    def run() -> None:
        try:
            server.start()
        except Exception as exc:
            failures.append(exc)
            stop.set()

    previous = {
        sig: signal.signal(sig, lambda signum, frame: stop.set())
        for sig in (signal.SIGINT, signal.SIGTERM)
    }
    try:
        threading.Thread(target=run, daemon=True).start()
        while not stop.wait(0.5):
            pass
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)

    if failures:
        logger.fatal(str(failures[0]))

    sys.stderr.write(f"{time.strftime('%Y/%m/%d %H:%M:%S')} Shutdown Server ...\n")
    deadline = time.monotonic() + SHUTDOWN_TIMEOUT
    try:
        server.shutdown(SHUTDOWN_TIMEOUT)
    except Exception as exc:
        logger.error(f"Server Shutdown: {exc}")
    time.sleep(max(0.0, deadline - time.monotonic()))
    logger.sync()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Connect to MySQL, migrate the schema and serve HTTP until signalled."""
    argparse.ArgumentParser(prog="apisample").parse_args(argv)

    try:
        engine = new_database(DatabaseInstance.MYSQL)
    except Exception as exc:
        logger.fatal(str(exc))

    try:
        try:
            migrate(engine, *new_domains())
            server = new_server(ServerInstance.ECHO, engine)
        except Exception as exc:
            logger.fatal(str(exc))
        _serve_until_signalled(server)
    finally:
        try:
            close(engine)
        except Exception as exc:
            logger.error(str(exc))
    return 0


if __name__ == "__main__":
    sys.exit(main())