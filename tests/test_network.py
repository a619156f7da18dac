"""Endpoint and configuration tests."""

import pytest

from socks4_client.core.config import HandshakeConfig
from socks4_client.core.network import DEFAULT_PROXY_PORT, ProxyEndpoint


def test_from_url_full():
    proxy = ProxyEndpoint.from_url("socks4://alice@10.0.0.1:3128")

    assert proxy == ProxyEndpoint("10.0.0.1", 3128, "alice")
    assert str(proxy) == "socks4://alice@10.0.0.1:3128"


def test_from_url_defaults():
    proxy = ProxyEndpoint.from_url("SOCKS4://proxy.local")

    assert proxy.port == DEFAULT_PROXY_PORT
    assert proxy.username is None


def test_from_url_decodes_username():
    assert ProxyEndpoint.from_url("socks4://j%C3%BCrgen@h:1").username == "jürgen"


@pytest.mark.parametrize("url", ["socks5://h:1080", "http://h", "socks4://:1080", "socks4://h:99999"])
def test_from_url_rejects(url):
    with pytest.raises(ValueError):
        ProxyEndpoint.from_url(url)


def test_endpoint_is_immutable():
    proxy = ProxyEndpoint("h", 1080)
    with pytest.raises(AttributeError):
        proxy.port = 1  # type: ignore[misc]


def test_config_defaults():
    config = HandshakeConfig()

    assert config.timeout is None
    assert config.tcp_nodelay is True
    assert config.strict_drain is False
    assert config.with_timeout(3).timeout == 3


def test_config_rejects_non_positive_timeout():
    with pytest.raises(ValueError):
        HandshakeConfig(timeout=0)
