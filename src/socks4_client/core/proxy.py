"""Main entry point for opening SOCKS4 tunnels.

Example:
    from socks4_client.core.proxy import open_tunnel

    # Reach example.com:80 through a proxy on localhost:1080
    sock = open_tunnel("socks4://127.0.0.1:1080", "example.com", 80)
"""

import socket

from socks4_client.core.config import HandshakeConfig
from socks4_client.core.network import ProxyEndpoint

from .lib import Socks4Handshake


def open_tunnel(
    proxy: ProxyEndpoint | str,
    host: str,
    port: int,
    config: HandshakeConfig | None = None,
) -> socket.socket:
    """Open a connection to ``host:port`` through ``proxy``.

    Args:
        proxy: Proxy endpoint or ``socks4://`` URL
        host: Destination host name or IPv4 address
        port: Destination port
        config: Handshake settings

    Returns:
        socket.socket: Connected socket owned by the caller
    """
    if isinstance(proxy, str):
        proxy = ProxyEndpoint.from_url(proxy)
    return Socks4Handshake(config).connect(proxy, host, port)


__all__ = ["open_tunnel"]
