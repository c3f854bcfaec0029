"""HTTP servers hosting the routed WSGI applications."""

from __future__ import annotations

import threading
from collections.abc import Iterable, Mapping
from enum import IntEnum
from typing import Any, Callable, Optional

from sqlalchemy.engine import Engine
from werkzeug.serving import BaseWSGIServer, make_server

from apisample import logger
from apisample.router import new_echo_router, new_gin_router
from apisample.webconfig import load_echo_config, load_gin_config


class ServerInstance(IntEnum):
    GIN = 0
    ECHO = 1


class Server:
    """A threaded HTTP server that can be started once and shut down."""

    def __init__(self, host: str, port: str, app: Callable[..., Any]) -> None:
        self.host = host
        self.port = str(port)
        self.app = app
        self.address = f"{host}:{port}"
        self._lock = threading.Lock()
        self._server: Optional[BaseWSGIServer] = None
        self._closed = False

    def start(self) -> None:
        """Serve on the configured address until shut down."""
        with self._lock:
            if self._closed:
                raise RuntimeError("server closed")
            if self._server is not None:
                raise RuntimeError("server already started")
            self._server = server = make_server(self.host, int(self.port), self.app, threaded=True)
        try:
            server.serve_forever()
        finally:
            server.server_close()

    def shutdown(self, timeout: Optional[float] = None) -> None:
        """Stop serving, waiting at most ``timeout`` seconds."""
        with self._lock:
            self._closed = True
            server = self._server
        if server is None:
            return
        stopper = threading.Thread(target=server.shutdown, daemon=True)
        stopper.start()
        stopper.join(timeout)
        if stopper.is_alive():
            raise TimeoutError("server shutdown timed out")


def new_echo_server(
    host: str, port: str, cors_allow_origins: Iterable[str], engine: Engine
) -> Server:
    try:
        app = new_echo_router(engine, cors_allow_origins)
    except Exception as exc:
        logger.error(str(exc), host=host, port=port)
        raise
    return Server(host, port, app)


def new_gin_server(
    host: str, port: str, cors_allow_origins: Iterable[str], engine: Engine
) -> Server:
    return Server(host, port, new_gin_router(engine, cors_allow_origins))


def new_server(
    instance: int, engine: Engine, environ: Optional[Mapping[str, str]] = None
) -> Server:
    """Build the chosen server with settings read from ``environ``."""
    if instance == ServerInstance.GIN:
        config = load_gin_config(environ)
        return new_gin_server(config.host, config.port, config.cors_allow_origins, engine)
    if instance == ServerInstance.ECHO:
        config = load_echo_config(environ)
        return new_echo_server(config.host, config.port, config.cors_allow_origins, engine)
    raise ValueError("invalid server instance")