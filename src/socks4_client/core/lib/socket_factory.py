"""Socket factory that routes every connection through a SOCKS4 proxy.

:class:`Socks4SocketFactory` mirrors the ``socket.create_connection``
signature, so it can be handed to any code that takes a "connect to
host:port" callable and stay unaware of the proxy.

Example:
    factory = Socks4SocketFactory(ProxyEndpoint.from_url("socks4://10.0.0.1:1080"))
    sock = factory(("example.com", 80), timeout=10)
"""

import ipaddress
import socket

from socks4_client.core.config import HandshakeConfig
from socks4_client.core.network import ProxyEndpoint

from .handshake import Socks4Handshake

# Type aliases
Host = str | ipaddress.IPv4Address
Address = tuple[Host, int]

# The sentinel socket.create_connection and http.client use for "no explicit timeout"
_DEFAULT_TIMEOUT = socket._GLOBAL_DEFAULT_TIMEOUT  # noqa: SLF001


class Socks4SocketFactory:
    """Create sockets connected through a fixed SOCKS4 proxy.

    The proxy does not authenticate beyond the optional user-id carried by
    ``proxy``.
    """

    def __init__(self, proxy: ProxyEndpoint, config: HandshakeConfig | None = None) -> None:
        self.proxy = proxy
        self.config = config or HandshakeConfig()
        self._handshake = Socks4Handshake(self.config)

    def create_socket(self, host: Host, port: int) -> socket.socket:
        """Connect to ``host:port`` through the proxy."""
        return self._handshake.connect(self.proxy, str(host), port)

    def create_connection(
        self,
        address: Address,
        timeout: float | None | object = _DEFAULT_TIMEOUT,
        source_address: tuple[str, int] | None = None,  # noqa: ARG002
    ) -> socket.socket:
        """Drop-in replacement for :func:`socket.create_connection`.

        Can be assigned to ``http.client.HTTPConnection._create_connection``.

        Args:
            address: ``(host, port)`` of the final destination
            timeout: Overrides the configured timeout for this connection;
                ``socket._GLOBAL_DEFAULT_TIMEOUT`` keeps the configured one
            source_address: Accepted for signature compatibility and ignored;
                the local end is chosen by the OS

        Returns:
            socket.socket: Connected socket
        """
        host, port = address
        if timeout is _DEFAULT_TIMEOUT:
            return self.create_socket(host, port)
        handshake = Socks4Handshake(self.config.with_timeout(timeout), self._handshake.resolver)
        return handshake.connect(self.proxy, str(host), port)

    __call__ = create_connection

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.proxy})"
