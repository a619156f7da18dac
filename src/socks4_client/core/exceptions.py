"""Custom exceptions for the SOCKS4 client.

Every failure of a handshake is raised as a subclass of :class:`ProxyError`, so
callers can either catch the whole family or discriminate on the concrete type:

- :class:`ProxyUnreachableError` - the TCP connect to the proxy failed
- :class:`DNSResolutionError` - the target host has no IPv4 address
- :class:`StreamClosedError` - the proxy closed the stream mid-reply
- :class:`ProtocolVersionError` - the reply VN byte was not 0
- :class:`ProxyConnectionRefusedError` - the reply CD byte was not 90
- :class:`ProxyIOError` - any other socket error during the exchange

The underlying ``OSError`` (when there is one) is chained as ``__cause__``.

Example:
    try:
        sock = Socks4Handshake().connect(proxy, "example.com", 80)
    except ProxyConnectionRefusedError as e:
        console.print(f"[red]Proxy refused the request: {e.code}")
"""

import enum


class ProxyType(enum.Enum):
    """Proxy protocol an error originated from."""

    SOCKS4 = "socks4"


class ProxyError(Exception):
    """Base exception for proxy errors."""

    proxy_type = ProxyType.SOCKS4

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.proxy_type.value}: {self.message}"


class ProxyUnreachableError(ProxyError):
    """Raised when the TCP connection to the proxy cannot be established."""

    def __init__(self, host: str, port: int, reason: object = None) -> None:
        message = f"cannot connect to proxy {host}:{port}"
        if reason is not None:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.host = host
        self.port = port


class DNSResolutionError(ProxyError):
    """Raised when DNS resolution fails."""

    def __init__(self, host: str, reason: object = None) -> None:
        message = f"cannot resolve {host!r} to an IPv4 address"
        if reason is not None:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.host = host


class StreamClosedError(ProxyError):
    """Raised when the proxy closes the stream before a full reply arrived."""

    def __init__(self, expected: int, received: int) -> None:
        super().__init__(f"stream is closed after {received} of {expected} reply bytes")
        self.expected = expected
        self.received = received


class ProtocolVersionError(ProxyError):
    """Raised when the reply version byte is not 0."""

    def __init__(self, observed: int) -> None:
        super().__init__(f"proxy returned VN {observed}")
        self.observed = observed


class ProxyConnectionRefusedError(ProxyError):
    """Raised when the proxy does not grant the CONNECT request.

    Attributes:
        code: Reply code (CD byte) sent by the proxy
        reason: Human readable meaning of ``code``
    """

    def __init__(self, code: int, reason: str) -> None:
        super().__init__(f"proxy returned CD {code}: {reason}")
        self.code = code
        self.reason = reason


class ProxyIOError(ProxyError):
    """Raised when a socket operation fails during the handshake."""
