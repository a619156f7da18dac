"""SOCKS4 CONNECT handshake over a single TCP socket.

This module implements the client half of the SOCKS4 protocol:
- TCP connect to the proxy
- Target resolution to an IPv4 address
- CONNECT request framing
- Reply reading with partial-read handling
- Reply validation and failure classification

The handshake is stateless; every call owns exactly one socket from creation
until it is either returned to the caller or closed. No timeout is applied
unless one is configured, so a proxy that stops answering blocks the caller.

Example:
    handshake = Socks4Handshake(HandshakeConfig(timeout=5))
    sock = handshake.connect(ProxyEndpoint("10.0.0.1", 1080), "example.com", 80)
    sock.sendall(b"GET / HTTP/1.0\\r\\n\\r\\n")
"""

import contextlib
import socket

from loguru import logger

from socks4_client.core.config import HandshakeConfig
from socks4_client.core.exceptions import (
    ProxyError,
    ProxyIOError,
    ProxyUnreachableError,
    StreamClosedError,
)
from socks4_client.core.network import ProxyEndpoint
from socks4_client.core.protocol import (
    REPLY_HEADER_SIZE,
    REPLY_TRAILER_SIZE,
    ConnectRequest,
    check_reply_header,
    encode_username,
    validate_port,
)
from socks4_client.core.utils.utils import format_frame

from .dns_handler import DNSResolver


def recv_exactly(sock: socket.socket, size: int) -> bytes:
    """Read ``size`` bytes, looping over partial reads.

    Returns fewer bytes only when the peer closed the stream first.
    """
    buf = bytearray()
    while len(buf) < size:
        chunk = sock.recv(size - len(buf))
        if not chunk:
            break
        buf += chunk
    return bytes(buf)


class Socks4Handshake:
    """Open TCP connections tunneled through a SOCKS4 proxy."""

    def __init__(self, config: HandshakeConfig | None = None, resolver: DNSResolver | None = None) -> None:
        self.config = config or HandshakeConfig()
        self.resolver = resolver or DNSResolver(self.config.nameservers)

    def _open(self, proxy: ProxyEndpoint) -> socket.socket:
        """Connect to the proxy itself.

        Without a configured timeout the process-wide ``socket.getdefaulttimeout()``
        applies, as it does for a plain ``socket.create_connection``.
        """
        try:
            if self.config.timeout is None:
                sock = socket.create_connection(proxy.address)
            else:
                sock = socket.create_connection(proxy.address, timeout=self.config.timeout)
        except OSError as e:
            raise ProxyUnreachableError(proxy.host, proxy.port, e) from e
        if self.config.tcp_nodelay:
            with contextlib.suppress(OSError):
                sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
        return sock

    def _read_reply(self, sock: socket.socket) -> None:
        header = recv_exactly(sock, REPLY_HEADER_SIZE)
        logger.debug(f"SOCKS4 reply header: {format_frame(header)}")
        if len(header) < REPLY_HEADER_SIZE:
            raise StreamClosedError(REPLY_HEADER_SIZE, len(header))
        check_reply_header(header)

        # DSTPORT and DSTIP are meaningless for CONNECT but must leave the stream
        trailer = recv_exactly(sock, REPLY_TRAILER_SIZE)
        if len(trailer) < REPLY_TRAILER_SIZE:
            if self.config.strict_drain:
                raise StreamClosedError(
                    REPLY_HEADER_SIZE + REPLY_TRAILER_SIZE, REPLY_HEADER_SIZE + len(trailer)
                )
            logger.warning(
                f"Proxy closed the stream after {len(trailer)} of {REPLY_TRAILER_SIZE} reply trailer bytes"
            )

    def connect(self, proxy: ProxyEndpoint, target_host: str, target_port: int) -> socket.socket:
        """Connect to ``target_host:target_port`` through ``proxy``.

        Args:
            proxy: SOCKS4 proxy to go through
            target_host: Host name or IPv4 address of the final destination
            target_port: Port of the final destination

        Returns:
            socket.socket: Connected socket, owned by the caller from now on

        Raises:
            ValueError: If the port or user-id cannot be encoded
            ProxyError: On any handshake failure; the socket is already closed
        """
        validate_port(target_port)
        userid = encode_username(proxy.username)
        if not target_host:
            msg = "target host must not be empty"
            raise ValueError(msg)

        logger.debug(f"Connecting to {target_host}:{target_port} through {proxy.host}:{proxy.port}")
        with contextlib.ExitStack() as stack:
            sock = stack.enter_context(self._open(proxy))
            try:
                address = self.resolver.resolve_packed(target_host)
                frame = ConnectRequest(address=address, port=target_port, userid=userid).to_bytes()
                logger.debug(f"SOCKS4 request: {format_frame(frame)}")
                sock.sendall(frame)
                self._read_reply(sock)
            except ProxyError as e:
                logger.debug(f"SOCKS4 handshake with {proxy.host}:{proxy.port} failed: {e}")
                raise
            except OSError as e:
                raise ProxyIOError(str(e)) from e

            # Success: hand the socket over instead of closing it on exit
            stack.pop_all()
            logger.debug(f"SOCKS4 tunnel to {target_host}:{target_port} established")
            return sock
