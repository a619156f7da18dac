"""Proxy endpoint description.

This module provides:
- The immutable :class:`ProxyEndpoint` describing where the SOCKS4 proxy lives
- Parsing of ``socks4://[user@]host[:port]`` URLs into endpoints

Example:
    proxy = ProxyEndpoint.from_url("socks4://alice@10.0.0.1:1080")
    print(f"Using proxy {proxy.host}:{proxy.port} as {proxy.username}")
"""

from dataclasses import dataclass
from typing import Final
from urllib.parse import unquote, urlsplit

from socks4_client.core.protocol import validate_port

DEFAULT_PROXY_PORT: Final = 1080
URL_SCHEME: Final = "socks4"


@dataclass(frozen=True)
class ProxyEndpoint:
    """SOCKS4 proxy location and identity.

    Attributes:
        host: Proxy host name or IP address
        port: Proxy TCP port
        username: Optional user-id sent in the request; ``bytes`` are sent as-is
    """

    host: str
    port: int = DEFAULT_PROXY_PORT
    username: str | bytes | None = None

    def __post_init__(self) -> None:
        if not self.host:
            msg = "proxy host must not be empty"
            raise ValueError(msg)
        validate_port(self.port)

    @property
    def address(self) -> tuple[str, int]:
        return self.host, self.port

    @classmethod
    def from_url(cls, url: str) -> "ProxyEndpoint":
        """Parse a ``socks4://[user@]host[:port]`` URL.

        Args:
            url: Proxy URL; the user part is percent-decoded

        Returns:
            ProxyEndpoint: Endpoint described by the URL

        Raises:
            ValueError: If the scheme is not ``socks4`` or the host is missing
        """
        parts = urlsplit(url)
        if parts.scheme.lower() != URL_SCHEME:
            msg = f"unsupported proxy scheme {parts.scheme!r}, expected {URL_SCHEME!r}"
            raise ValueError(msg)
        if not parts.hostname:
            msg = f"proxy URL {url!r} has no host"
            raise ValueError(msg)
        username = unquote(parts.username) if parts.username else None
        return cls(host=parts.hostname, port=parts.port or DEFAULT_PROXY_PORT, username=username)

    def __str__(self) -> str:
        user = f"{self.username!s}@" if isinstance(self.username, str) and self.username else ""
        return f"{URL_SCHEME}://{user}{self.host}:{self.port}"
