"""Target host resolution to IPv4 using the system resolver and dnspython."""

import ipaddress
import socket
from typing import TYPE_CHECKING, Final, cast

import dns.exception
import dns.resolver
from loguru import logger

from socks4_client.core.exceptions import DNSResolutionError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from dns.resolver import Resolver

# DNS resolver constants
DEFAULT_TIMEOUT: Final = 1.0  # seconds
DEFAULT_LIFETIME: Final = 3.0  # seconds


class DNSResolver:
    """Resolve a host to the 4-byte address placed in DSTIP.

    The system resolver is tried first. When it fails and nameservers were
    configured, they are queried for an ``A`` record one at a time.
    """

    def __init__(self, nameservers: "Sequence[str]" = ()) -> None:
        """Initialize the resolver.

        Args:
            nameservers: Fallback nameserver addresses, tried in order

        Raises:
            ValueError: If a nameserver is not an IP address or DoH URL
        """
        self.nameservers = list(nameservers)
        self.resolver: Resolver | None = None
        if self.nameservers:
            self.resolver = cast("Resolver", dns.resolver.Resolver(configure=False))
            self.resolver.timeout = DEFAULT_TIMEOUT
            self.resolver.lifetime = DEFAULT_LIFETIME
            # dnspython validates on assignment; fail here rather than mid-handshake
            self.resolver.nameservers = self.nameservers

    def _try_literal(self, host: str) -> str | None:
        try:
            address = ipaddress.ip_address(host)
        except ValueError:
            return None
        if address.version != 4:
            raise DNSResolutionError(host, "SOCKS4 carries IPv4 addresses only")
        return str(address)

    def _try_system_dns(self, host: str) -> str | None:
        """Try resolving using system DNS."""
        try:
            return socket.gethostbyname(host)
        except (socket.gaierror, UnicodeError) as e:
            logger.debug(f"System DNS resolution failed for {host}: {e}")
            return None

    def _try_nameservers(self, host: str) -> str | None:
        """Try resolving using configured nameservers."""
        if self.resolver is None:
            return None
        for nameserver in self.nameservers:
            try:
                self.resolver.nameservers = [nameserver]
                answer = self.resolver.resolve(host, "A")
                return str(answer[0])
            except dns.exception.DNSException as e:
                logger.debug(f"Nameserver {nameserver} failed for {host}: {e}")
        return None

    def resolve(self, host: str) -> str:
        """Resolve host name to a dotted-quad IPv4 address.

        Args:
            host: Host name or IPv4 literal

        Returns:
            str: Resolved IPv4 address

        Raises:
            DNSResolutionError: If no method yields an IPv4 address
        """
        if ip := self._try_literal(host):
            return ip

        if ip := self._try_system_dns(host):
            return ip

        if ip := self._try_nameservers(host):
            return ip

        raise DNSResolutionError(host)

    def resolve_packed(self, host: str) -> bytes:
        """Resolve host name to packed 4-byte form."""
        return socket.inet_aton(self.resolve(host))
