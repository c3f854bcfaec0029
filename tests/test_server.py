import json
import socket
import threading
import time
import urllib.error
import urllib.request

import pytest

from apisample.database import DatabaseInstance, close, migrate, new_database
from apisample.entities import new_domains
from apisample.server import ServerInstance, new_echo_server, new_gin_server, new_server


@pytest.fixture
def engine():
    db = new_database(DatabaseInstance.SQLITE, {})
    migrate(db, *new_domains())
    yield db
    close(db)


def _free_port():
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def _fetch(url):
    for _ in range(100):
        try:
            with urllib.request.urlopen(url, timeout=2) as response:
                return response.status, response.read()
        except urllib.error.HTTPError as exc:
            return exc.code, exc.read()
        except OSError:
            time.sleep(0.05)
    raise AssertionError("server did not answer")


def _run(server):
    thread = threading.Thread(target=server.start, daemon=True)
    thread.start()
    return thread


def test_new_server_echo_reads_environment(engine):
    environ = {
        "WEB_HOST": "127.0.0.1",
        "WEB_PORT": "9123",
        "WEB_CORS_ALLOW_ORIGINS": "http://app.example.com",
    }
    server = new_server(ServerInstance.ECHO, engine, environ)
    assert server.address == "127.0.0.1:9123"
    assert server.app.cors_allow_origins == ("http://app.example.com",)
    assert server.app.user_handler.user_service.get_users() == []


def test_new_server_gin_uses_defaults(engine):
    server = new_server(ServerInstance.GIN, engine, {})
    assert server.address == "0.0.0.0:8080"
    assert server.app.cors_allow_origins == ("http://0.0.0.0:8001",)


def test_new_server_rejects_unknown_instance(engine):
    with pytest.raises(ValueError, match="invalid server instance"):
        new_server(7, engine, {})


def test_echo_server_serves_until_shutdown(engine):
    port = _free_port()
    server = new_echo_server("127.0.0.1", str(port), [], engine)
    thread = _run(server)
    status, body = _fetch(f"http://127.0.0.1:{port}/users")
    server.shutdown(5)
    thread.join(5)
    assert status == 404
    assert json.loads(body) == {"message": "Not Found"}
    assert not thread.is_alive()


def test_gin_server_serves_until_shutdown(engine):
    port = _free_port()
    server = new_gin_server("127.0.0.1", str(port), [], engine)
    thread = _run(server)
    status, body = _fetch(f"http://127.0.0.1:{port}/anything")
    server.shutdown(5)
    thread.join(5)
    assert (status, body) == (404, b"404 page not found")
    assert not thread.is_alive()


def test_server_cannot_start_after_shutdown(engine):
    server = new_echo_server("127.0.0.1", str(_free_port()), [], engine)
    server.shutdown(1)
    with pytest.raises(RuntimeError, match="closed"):
        server.start()


def test_server_cannot_start_twice(engine):
    port = _free_port()
    server = new_gin_server("127.0.0.1", str(port), [], engine)
    thread = _run(server)
    _fetch(f"http://127.0.0.1:{port}/")
    try:
        with pytest.raises(RuntimeError, match="already started"):
            server.start()
    finally:
        server.shutdown(5)
        thread.join(5)