"""SOCKS4 wire format.

Request frame (client to proxy)::

    +----+----+----+----+----+----+----+----+----+----+....+----+
    | VN | CD | DSTPORT |      DSTIP        | USERID       |NULL|
    +----+----+----+----+----+----+----+----+----+----+....+----+
       1    1      2              4           variable       1

Reply frame (proxy to client)::

    +----+----+----+----+----+----+----+----+
    | VN | CD | DSTPORT |      DSTIP        |
    +----+----+----+----+----+----+----+----+
       1    1      2              4

Only VN and CD of the reply carry meaning for a CONNECT; DSTPORT and DSTIP
are read and discarded.
"""

import enum
import struct
from dataclasses import dataclass
from typing import Final

from socks4_client.core.exceptions import ProtocolVersionError, ProxyConnectionRefusedError

# SOCKS protocol constants
SOCKS_VERSION: Final = 4
CONNECT_CMD: Final = 1
REPLY_VERSION: Final = 0

# Frame sizes
REQUEST_HEADER_SIZE: Final = 8
REPLY_SIZE: Final = 8
REPLY_HEADER_SIZE: Final = 2
REPLY_TRAILER_SIZE: Final = REPLY_SIZE - REPLY_HEADER_SIZE

MAX_PORT: Final = 0xFFFF

_REQUEST_HEADER = struct.Struct("!BBH4s")
_REPLY_HEADER = struct.Struct("!BB")


class ReplyCode(enum.IntEnum):
    """CD values a SOCKS4 proxy sends back."""

    GRANTED = 90
    REJECTED = 91
    NO_IDENTD = 92
    IDENTD_MISMATCH = 93

    @property
    def reason(self) -> str:
        return _REPLY_REASONS[self]


_REPLY_REASONS: Final = {
    ReplyCode.GRANTED: "request granted",
    ReplyCode.REJECTED: "request rejected or failed",
    ReplyCode.NO_IDENTD: "request rejected because the proxy cannot connect to identd on the client",
    ReplyCode.IDENTD_MISMATCH: "request rejected because the client program and identd report different user-ids",
}


def describe_reply_code(code: int) -> str:
    """Return a human readable meaning for a reply code, known or not."""
    try:
        return ReplyCode(code).reason
    except ValueError:
        return "unknown reply code"


def encode_username(username: str | bytes | None) -> bytes:
    """Turn a user-id into the bytes placed in the USERID field.

    ``bytes`` are passed through untouched; ``str`` is UTF-8 encoded.

    Raises:
        ValueError: If the user-id contains a NUL byte, which would end the
            field early on the proxy side
    """
    if username is None:
        return b""
    data = username.encode("utf-8") if isinstance(username, str) else bytes(username)
    if b"\x00" in data:
        msg = "SOCKS4 user-id must not contain NUL bytes"
        raise ValueError(msg)
    return data


def validate_port(port: int) -> int:
    """Check that ``port`` fits the two-byte DSTPORT field."""
    if not 0 <= port <= MAX_PORT:
        msg = f"port must be in range 0-{MAX_PORT}, got {port}"
        raise ValueError(msg)
    return port


@dataclass(frozen=True)
class ConnectRequest:
    """A CONNECT request ready to be serialized.

    Attributes:
        address: Packed 4-byte IPv4 address of the target
        port: Target port
        userid: USERID field contents, without the terminating NUL
    """

    address: bytes
    port: int
    userid: bytes = b""

    def __post_init__(self) -> None:
        if len(self.address) != 4:
            msg = f"DSTIP must be 4 bytes, got {len(self.address)}"
            raise ValueError(msg)
        validate_port(self.port)
        if b"\x00" in self.userid:
            msg = "SOCKS4 user-id must not contain NUL bytes"
            raise ValueError(msg)

    def to_bytes(self) -> bytes:
        """Serialize to the wire format, terminating NUL included."""
        header = _REQUEST_HEADER.pack(SOCKS_VERSION, CONNECT_CMD, self.port, self.address)
        return header + self.userid + b"\x00"

    @classmethod
    def from_bytes(cls, data: bytes) -> "ConnectRequest":
        """Parse a request frame, as a proxy would."""
        if len(data) < REQUEST_HEADER_SIZE + 1 or data[-1] != 0:
            msg = "truncated SOCKS4 request"
            raise ValueError(msg)
        version, command, port, address = _REQUEST_HEADER.unpack_from(data)
        if version != SOCKS_VERSION or command != CONNECT_CMD:
            msg = f"not a SOCKS4 CONNECT request (VN={version}, CD={command})"
            raise ValueError(msg)
        return cls(address=address, port=port, userid=data[REQUEST_HEADER_SIZE:-1])


def check_reply_header(header: bytes) -> None:
    """Validate the VN and CD bytes of a reply.

    Raises:
        ProtocolVersionError: If VN is not 0
        ProxyConnectionRefusedError: If CD is not 90
    """
    version, code = _REPLY_HEADER.unpack(header)
    if version != REPLY_VERSION:
        raise ProtocolVersionError(version)
    if code != ReplyCode.GRANTED:
        raise ProxyConnectionRefusedError(code, describe_reply_code(code))


def build_reply(code: int = ReplyCode.GRANTED, port: int = 0, address: bytes = b"\x00" * 4) -> bytes:
    """Serialize a reply frame, as a proxy would."""
    return _REPLY_HEADER.pack(REPLY_VERSION, code) + struct.pack("!H4s", port, address)
