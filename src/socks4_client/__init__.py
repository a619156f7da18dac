"""SOCKS4 client: CONNECT handshake and proxied socket factory."""

import pathlib
import tomllib

from socks4_client.core.exceptions import (
    DNSResolutionError,
    ProtocolVersionError,
    ProxyConnectionRefusedError,
    ProxyError,
    ProxyIOError,
    ProxyUnreachableError,
    StreamClosedError,
)
from socks4_client.core.lib import HandshakeConfig, Socks4Handshake, Socks4SocketFactory
from socks4_client.core.network import ProxyEndpoint


def get_version() -> str:
    """Read version from pyproject.toml."""
    current_dir = pathlib.Path(__file__).parent
    for parent in [current_dir, *current_dir.parents]:
        pyproject_path = parent / "pyproject.toml"
        if pyproject_path.exists():
            with pyproject_path.open("rb") as f:
                pyproject_data = tomllib.load(f)
            if pyproject_data.get("project", {}).get("name") == "socks4-client":
                return pyproject_data["project"]["version"]

    # Fallback version if file not found
    return "0.0.0"


__version__ = get_version()

__all__ = [
    "DNSResolutionError",
    "HandshakeConfig",
    "ProtocolVersionError",
    "ProxyConnectionRefusedError",
    "ProxyEndpoint",
    "ProxyError",
    "ProxyIOError",
    "ProxyUnreachableError",
    "Socks4Handshake",
    "Socks4SocketFactory",
    "StreamClosedError",
    "__version__",
]
