"""Shared fixtures: a scriptable SOCKS4 proxy stub."""

import socket
import socketserver
import threading
import time
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

import pytest

from socks4_client.core.network import ProxyEndpoint
from socks4_client.core.protocol import REQUEST_HEADER_SIZE, ConnectRequest, build_reply


@dataclass
class Script:
    """What the stub sends back after reading a request.

    Attributes:
        reply: Bytes written after the request has been read; a sequence of
            chunks is written one segment at a time with a pause in between
        then_close: Close the connection right after ``reply``; otherwise echo
            whatever the client sends until it hangs up
    """

    reply: bytes | Sequence[bytes] = field(default_factory=build_reply)
    then_close: bool = False
    chunk_delay: float = 0.05

    def chunks(self) -> list[bytes]:
        return [self.reply] if isinstance(self.reply, bytes) else list(self.reply)


class StubProxyServer(socketserver.ThreadingMixIn, socketserver.TCPServer):
    """Minimal SOCKS4 proxy that records requests and replays a script."""

    allow_reuse_address = True
    daemon_threads = True

    def __init__(self) -> None:
        super().__init__(("127.0.0.1", 0), StubHandler)
        self.script = Script()
        self.requests: list[ConnectRequest] = []
        self.raw_requests: list[bytes] = []
        self.closed_by_client = threading.Event()
        self._lock = threading.Lock()

    @property
    def endpoint(self) -> ProxyEndpoint:
        host, port = self.server_address[:2]
        return ProxyEndpoint(host, port)

    def record(self, raw: bytes) -> None:
        with self._lock:
            self.raw_requests.append(raw)
            self.requests.append(ConnectRequest.from_bytes(raw))


class StubHandler(socketserver.BaseRequestHandler):
    """Read one CONNECT request, answer with the server's script."""

    server: StubProxyServer

    def _read_request(self) -> bytes:
        data = b""
        while len(data) <= REQUEST_HEADER_SIZE or not data.endswith(b"\x00"):
            chunk = self.request.recv(1024)
            if not chunk:
                return data
            data += chunk
        return data

    def handle(self) -> None:
        raw = self._read_request()
        if not raw:
            self.server.closed_by_client.set()
            return
        self.server.record(raw)

        script = self.server.script
        self.request.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
        for i, chunk in enumerate(script.chunks()):
            if i:
                time.sleep(script.chunk_delay)
            self.request.sendall(chunk)
        if script.then_close:
            return

        try:
            while data := self.request.recv(4096):
                self.request.sendall(data)
        except OSError:
            pass
        self.server.closed_by_client.set()


@pytest.fixture
def stub_proxy() -> Iterator[StubProxyServer]:
    server = StubProxyServer()
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield server
    finally:
        server.shutdown()
        server.server_close()


@pytest.fixture
def closed_port() -> int:
    """A local port nobody listens on."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.fixture
def created_sockets(monkeypatch: pytest.MonkeyPatch) -> list[socket.socket]:
    """Record every socket the handshake opens towards a proxy."""
    created: list[socket.socket] = []
    original = socket.create_connection

    def tracking_create_connection(*args, **kwargs):
        sock = original(*args, **kwargs)
        created.append(sock)
        return sock

    monkeypatch.setattr(socket, "create_connection", tracking_create_connection)
    return created
