"""WSGI applications routing HTTP requests to the user handlers."""

from __future__ import annotations

import json
import time
from collections.abc import Callable, Iterable
from typing import Any, Optional

from sqlalchemy.engine import Engine
from werkzeug.exceptions import HTTPException, InternalServerError
from werkzeug.routing import Map
from werkzeug.wrappers import Request, Response

from apisample import logger
from apisample.repository import UserRepository
from apisample.service import UserService


class UserHandler:
    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service


class _Application:
    def __init__(self, cors_allow_origins: Iterable[str]) -> None:
        self.cors_allow_origins = tuple(cors_allow_origins)
        self.url_map = Map()
        self._views: dict[str, Callable[..., Response]] = {}
        self.user_handler: Optional[UserHandler] = None

    def _dispatch(self, request: Request) -> Response:
        try:
            endpoint, arguments = self.url_map.bind_to_environ(request.environ).match()
        except HTTPException as exc:
            return self._error_response(exc)
        return self._views[endpoint](request, **arguments)

    def _error_response(self, exc: HTTPException) -> Response:
        raise NotImplementedError

    def _handle(self, request: Request) -> Response:
        try:
            return self._dispatch(request)
        except Exception as exc:
            logger.error(str(exc), method=request.method, path=request.path)
            return self._error_response(InternalServerError())

    def __call__(self, environ: dict[str, Any], start_response: Callable[..., Any]) -> Iterable[bytes]:
        return self._handle(Request(environ))(environ, start_response)


class _EchoApplication(_Application):
    """Answers errors with a JSON ``message`` body."""

    def _error_response(self, exc: HTTPException) -> Response:
        response = Response(
            json.dumps({"message": exc.name}), status=exc.code, mimetype="application/json"
        )
        allow = dict(exc.get_headers()).get("Allow")
        if allow:
            response.headers["Allow"] = allow
        return response


class _GinApplication(_Application):
    """Logs every request; unmatched routes get a plain 404, failures an empty 500."""

    def _error_response(self, exc: HTTPException) -> Response:
        if isinstance(exc, InternalServerError):
            return Response(status=500)
        return Response("404 page not found", status=404, mimetype="text/plain")

    def _handle(self, request: Request) -> Response:
        started = time.perf_counter()
        response = super()._handle(request)
        logger.info(
            "request",
            status=response.status_code,
            latency=time.perf_counter() - started,
            client_ip=request.remote_addr,
            method=request.method,
            path=request.path,
        )
        return response


def new_echo_router(engine: Engine, cors_allow_origins: Iterable[str]) -> _EchoApplication:
    """Build the JSON application wired to the user service on ``engine``."""
    app = _EchoApplication(cors_allow_origins)
    app.user_handler = UserHandler(UserService(UserRepository(engine)))
    return app


def new_gin_router(engine: Engine, cors_allow_origins: Iterable[str]) -> _GinApplication:
    return _GinApplication(cors_allow_origins)