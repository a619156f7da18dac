"""Handshake settings."""

from dataclasses import dataclass, replace
from typing import Final

# Defaults
DEFAULT_TIMEOUT: Final = None  # Fall back to socket.getdefaulttimeout()
DEFAULT_TCP_NODELAY: Final = True
DEFAULT_STRICT_DRAIN: Final = False


@dataclass(frozen=True)
class HandshakeConfig:
    """Tunables for :class:`~socks4_client.core.lib.handshake.Socks4Handshake`.

    Attributes:
        timeout: Seconds allowed for the proxy connect and for each read.
            ``None`` uses ``socket.getdefaulttimeout()``, which blocks
            indefinitely unless the process set one, so a stalled proxy stalls
            the caller.
        tcp_nodelay: Disable Nagle's algorithm on the proxy socket
        strict_drain: Raise if the proxy closes the stream before sending the
            last 6 reply bytes, instead of logging a warning
        nameservers: Nameservers queried with dnspython when the system
            resolver cannot resolve the target host
    """

    timeout: float | None = DEFAULT_TIMEOUT
    tcp_nodelay: bool = DEFAULT_TCP_NODELAY
    strict_drain: bool = DEFAULT_STRICT_DRAIN
    nameservers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.timeout is not None and self.timeout <= 0:
            msg = f"timeout must be positive or None, got {self.timeout}"
            raise ValueError(msg)

    def with_timeout(self, timeout: float | None) -> "HandshakeConfig":
        return replace(self, timeout=timeout)
