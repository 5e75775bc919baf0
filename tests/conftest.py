"""Shared pytest fixtures for the AlertSink test suite.

HTTP behaviour is exercised two ways: :class:`httpx.MockTransport` for
fast, in-process checks of requests and status handling, and a real
threaded HTTP server (``alert_server``) that plays the part of an
AlertManager ``/api/v2/alerts`` endpoint.
"""

import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import httpx
import pytest

ALERTS_PATH = "/api/v2/alerts"


class RecordingServer:
    """A local AlertManager stand-in that records every POST it receives.

    Attributes:
        requests: List of ``(path, headers, body)`` tuples, in arrival
            order.  Header names are lower-cased; *body* is the decoded
            first line of the request body.
        status: HTTP status returned for every request.
    """

    def __init__(self, status: int = 200):
        self.requests: list[tuple[str, dict, str]] = []
        self.status = status
        self._lock = threading.Lock()
        recorder = self

        class _Handler(BaseHTTPRequestHandler):
            def do_POST(self):
                length = int(self.headers.get("Content-Length", 0))
                raw = self.rfile.read(length)
                line = raw.decode("utf-8").splitlines()[0] if raw else ""
                with recorder._lock:
                    recorder.requests.append(
                        (self.path, {k.lower(): v for k, v in self.headers.items()}, line)
                    )
                response = b'{"success": true}'
                self.send_response(recorder.status)
                self.send_header("Content-Type", "application/json")
                self.send_header("Content-Length", str(len(response)))
                self.end_headers()
                self.wfile.write(response)

            def log_message(self, format, *args):
                pass

        self._server = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)

    @property
    def url(self) -> str:
        host, port = self._server.server_address[:2]
        return f"http://{host}:{port}{ALERTS_PATH}"

    @property
    def bodies(self) -> list[str]:
        with self._lock:
            return [body for _path, _headers, body in self.requests]

    def start(self) -> "RecordingServer":
        self._thread.start()
        return self

    def stop(self) -> None:
        self._server.shutdown()
        self._server.server_close()
        self._thread.join(timeout=5)


@pytest.fixture(autouse=True)
def _no_proxy(monkeypatch):
    """Keep proxy settings from the environment away from local test servers."""
    for name in ("HTTP_PROXY", "HTTPS_PROXY", "ALL_PROXY", "http_proxy", "https_proxy", "all_proxy"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def alert_server():
    """Factory fixture that starts recording servers on free ports.

    Every server started through the factory is shut down at teardown.

    Yields:
        A callable ``make(status=200) -> RecordingServer``.
    """
    servers: list[RecordingServer] = []

    def make(status: int = 200) -> RecordingServer:
        server = RecordingServer(status=status).start()
        servers.append(server)
        return server

    yield make
    for server in servers:
        server.stop()


@pytest.fixture()
def captured():
    """Build a MockTransport that records requests and answers with *status*.

    Returns:
        A callable ``make(status=200) -> (transport, requests)`` where
        *requests* is the list the transport appends each
        :class:`httpx.Request` to.
    """

    def make(status: int = 200):
        requests: list[httpx.Request] = []

        def respond(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(status, json={"success": status < 300})

        return httpx.MockTransport(respond), requests

    return make
