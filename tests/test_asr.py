import base64
import email.utils
import json
import urllib.error
from datetime import datetime, timedelta, timezone
from unittest import mock

import pytest

from voicechat.asr import (
    PARA_URL,
    AsrClient,
    AsrError,
    base64_encode,
    build_asr_request,
    build_string_to_sign,
    format_http_date,
    generate_nonce,
    generate_signature,
    parse_asr_response,
)


class _FakeResponse:
    def __init__(self, body, status=200):
        self._body = body
        self.status = status

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def read(self):
        return self._body


@pytest.mark.parametrize("data", [b"", b"a", b"ab", b"abc", bytes(range(256))])
def test_base64_round_trip(data):
    encoded = base64_encode(data)
    assert base64.b64decode(encoded) == data
    assert len(encoded) == (len(data) + 2) // 3 * 4


def test_base64_padding():
    assert base64_encode(b"a").endswith("==")
    assert not base64_encode(b"abc").endswith("=")


def test_nonce_shape_and_randomness():
    nonces = {generate_nonce() for _ in range(20)}
    assert all(len(n) == 16 and n.isalnum() for n in nonces)
    assert len(nonces) > 1


def test_signature_known_vector():
    expected = base64.b64encode(
        bytes.fromhex("de7c9b85b8b78aa6bc8a7a36f70a90701c9db4d9")
    ).decode()
    assert (
        generate_signature("The quick brown fox jumps over the lazy dog", "key")
        == expected
    )


def test_signature_depends_on_secret():
    assert generate_signature("text", "secret") != generate_signature("text", "other")
    assert len(base64.b64decode(generate_signature("text", "secret"))) == 20


def test_string_to_sign_layout():
    text = build_string_to_sign("DATE", "abc")
    lines = text.split("\n")
    assert lines[0] == "POST"
    assert lines[1] == "/parafomr-v2"
    assert lines[2] == "DATE"
    assert lines[3] == "application/json"
    assert lines[4] == "x-acs-signature-method:HmacSHA1"
    assert lines[5] == "x-acs-signature-nonce:abc"


def test_format_http_date_value():
    moment = datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert format_http_date(moment) == "Mon, 01 Jan 2024 00:00:00 GMT"


def test_format_http_date_round_trip_and_conversion():
    moment = datetime(2023, 6, 15, 20, 30, 5, tzinfo=timezone(timedelta(hours=8)))
    text = format_http_date(moment)
    assert text.endswith(" GMT")
    assert email.utils.parsedate_to_datetime(text) == moment
    naive = datetime(2023, 6, 15, 12, 30, 5)
    assert format_http_date(naive) == text


def test_build_asr_request():
    body = build_asr_request(b"\x01\x02\x03")
    assert json.loads(body) == {"app": {}, "audio": base64_encode(b"\x01\x02\x03")}
    assert " " not in body


def test_parse_asr_response_ok():
    assert parse_asr_response('{"output": {"text": "hello"}}') == "hello"


@pytest.mark.parametrize(
    "body, fragment",
    [
        ("not json", "JSON parse error"),
        ("[]", "'output'"),
        ('{"output": "x"}', "'output'"),
        ('{"output": {}}', "'text'"),
        ('{"output": {"text": 3}}', "'text'"),
    ],
)
def test_parse_asr_response_errors(body, fragment):
    with pytest.raises(AsrError, match=fragment):
        parse_asr_response(body)


def test_build_headers():
    client = AsrClient(access_key_id="placeholder", access_key_secret="secret")
    headers = client.build_headers("DATE", "nonce")
    signature = generate_signature(build_string_to_sign("DATE", "nonce"), "secret")
    assert headers == {
        "Authorization": f"acs placeholder:{signature}",
        "Content-Type": "application/json",
        "Date": "DATE",
    }


def test_recognize_success():
    captured = []

    def fake_urlopen(request, timeout=None):
        captured.append(request)
        return _FakeResponse(b'{"output": {"text": "hi"}}')

    client = AsrClient(access_key_id="placeholder", access_key_secret="secret")
    with mock.patch("urllib.request.urlopen", side_effect=fake_urlopen):
        assert client.recognize(b"abc") == "hi"
    request = captured[0]
    assert request.full_url == PARA_URL
    assert request.get_method() == "POST"
    assert json.loads(request.data)["audio"] == base64_encode(b"abc")
    assert request.get_header("Authorization").startswith("acs placeholder:")


def test_recognize_bad_status():
    with mock.patch(
        "urllib.request.urlopen", return_value=_FakeResponse(b"{}", status=204)
    ):
        with pytest.raises(AsrError, match="204"):
            AsrClient().recognize(b"x")


def test_recognize_http_error():
    error = urllib.error.HTTPError(PARA_URL, 403, "Forbidden", {}, None)
    with mock.patch("urllib.request.urlopen", side_effect=error):
        with pytest.raises(AsrError, match="403"):
            AsrClient().recognize(b"x")


def test_recognize_network_error():
    with mock.patch(
        "urllib.request.urlopen", side_effect=urllib.error.URLError("down")
    ):
        with pytest.raises(AsrError, match="request failed"):
            AsrClient().recognize(b"x")