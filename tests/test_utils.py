import base64

import pytest

from common.utils import (
    bytes_to_data_uri,
    data_uri_to_bytes,
    is_data_uri,
    parse_data_uri,
)


def test_parse_data_uri():
    mime_type, data = parse_data_uri("data:image/jpeg;base64,QUJD")
    assert mime_type == "image/jpeg"
    assert data == "QUJD"


def test_data_uri_to_bytes_decodes_payload():
    mime_type, raw = data_uri_to_bytes("data:video/mp4;base64," + base64.b64encode(b"frames").decode())
    assert mime_type == "video/mp4"
    assert raw == b"frames"


def test_bytes_to_data_uri():
    assert bytes_to_data_uri(b"ABC", "image/png") == "data:image/png;base64,QUJD"


@pytest.mark.parametrize(
    "value",
    [
        "",
        "QUJD",
        "data:image/png,QUJD",
        "data:image/png;base64,",
        "data:;base64,QUJD",
        "https://example.com/a.png",
    ],
)
def test_malformed_data_uris(value):
    assert not is_data_uri(value)
    with pytest.raises(ValueError):
        parse_data_uri(value)


def test_invalid_base64_payload():
    with pytest.raises(ValueError, match="not valid base64"):
        data_uri_to_bytes("data:image/png;base64,@@@@")


def test_is_data_uri_rejects_non_strings():
    assert not is_data_uri(None)
    assert not is_data_uri(b"data:image/png;base64,QUJD")


def test_is_data_uri_rejects_bad_base64():
    assert is_data_uri("data:image/png;base64,QUJD")
    assert not is_data_uri("data:image/png;base64,@@@@")
    assert not is_data_uri("data:image/png;base64,QUJ")
