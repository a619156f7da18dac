"""Core SOCKS4 client components."""

from socks4_client.core.config import HandshakeConfig

from .dns_handler import DNSResolver
from .handshake import Socks4Handshake, recv_exactly
from .socket_factory import Socks4SocketFactory

__all__ = [
    "DNSResolver",
    "HandshakeConfig",
    "recv_exactly",
    "Socks4Handshake",
    "Socks4SocketFactory",
]
