"""Wire format tests."""

import pytest

from socks4_client.core.exceptions import ProtocolVersionError, ProxyConnectionRefusedError
from socks4_client.core.protocol import (
    ConnectRequest,
    ReplyCode,
    build_reply,
    check_reply_header,
    describe_reply_code,
    encode_username,
)


@pytest.mark.parametrize(
    ("userid", "port"),
    [(b"", 0), (b"bob", 80), (b"\xc3\xa9l\xc3\xa8ve", 65535), (b"x" * 255, 1080)],
)
def test_request_length_and_fields(userid, port):
    request = ConnectRequest(address=b"\x7f\x00\x00\x01", port=port, userid=userid)
    frame = request.to_bytes()

    assert len(frame) == 8 + len(userid) + 1
    assert frame[:2] == b"\x04\x01"
    assert int.from_bytes(frame[2:4], "big") == port
    assert frame[4:8] == b"\x7f\x00\x00\x01"
    assert frame[-1] == 0
    assert ConnectRequest.from_bytes(frame) == request


def test_request_rejects_bad_address():
    with pytest.raises(ValueError):
        ConnectRequest(address=b"\x00" * 16, port=80)


def test_from_bytes_rejects_truncated_frame():
    with pytest.raises(ValueError):
        ConnectRequest.from_bytes(b"\x04\x01\x00\x50\x7f\x00\x00\x01")


def test_from_bytes_rejects_other_versions():
    with pytest.raises(ValueError):
        ConnectRequest.from_bytes(b"\x05\x01\x00\x50\x7f\x00\x00\x01\x00")


def test_encode_username():
    assert encode_username(None) == b""
    assert encode_username("") == b""
    assert encode_username("élève") == "élève".encode()
    assert encode_username(b"\xff\xfe") == b"\xff\xfe"
    with pytest.raises(ValueError):
        encode_username("a\x00")


def test_granted_header_passes():
    check_reply_header(b"\x00\x5a")


def test_version_checked_before_code():
    with pytest.raises(ProtocolVersionError) as exc_info:
        check_reply_header(b"\x04\x5b")
    assert exc_info.value.observed == 4


def test_unknown_code_is_refused():
    with pytest.raises(ProxyConnectionRefusedError) as exc_info:
        check_reply_header(b"\x00\x07")
    assert exc_info.value.code == 7
    assert exc_info.value.reason == "unknown reply code"


def test_reply_codes():
    assert describe_reply_code(91) == ReplyCode.REJECTED.reason
    assert build_reply(ReplyCode.REJECTED, 80, b"\x01\x02\x03\x04") == b"\x00\x5b\x00\x50\x01\x02\x03\x04"
