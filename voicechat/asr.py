"""Speech recognition client for the Paraformer HTTP API."""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import secrets
import string
import urllib.error
import urllib.request
from datetime import datetime, timezone
from email.utils import format_datetime

PARA_URL = "https://nls-gateway.cn-shanghai.aliyuncs.com/api/predict/paraformer-v2"
SIGN_PATH = "/parafomr-v2"
CONTENT_TYPE = "application/json"
NONCE_LENGTH = 16
_NONCE_ALPHABET = string.ascii_letters + string.digits


class AsrError(Exception):
    """Raised when a recognition request fails or its reply is unusable."""


def base64_encode(data: bytes) -> str:
    """Return the standard padded Base64 text of ``data``."""
    return base64.b64encode(bytes(data)).decode("ascii")


def generate_nonce() -> str:
    """Return a random 16-character alphanumeric nonce."""
    return "".join(secrets.choice(_NONCE_ALPHABET) for _ in range(NONCE_LENGTH))


def generate_signature(string_to_sign: str, secret: str) -> str:
    """Sign ``string_to_sign`` with HMAC-SHA1 and return it Base64 encoded."""
    digest = hmac.new(
        secret.encode("utf-8"), string_to_sign.encode("utf-8"), hashlib.sha1
    ).digest()
    return base64_encode(digest)


def build_string_to_sign(date_str: str, nonce: str) -> str:
    """Build the canonical text that the request signature covers."""
    return "\n".join(
        [
            "POST",
            SIGN_PATH,
            date_str,
            CONTENT_TYPE,
            "x-acs-signature-method:HmacSHA1",
            f"x-acs-signature-nonce:{nonce}",
        ]
    )


def format_http_date(moment: datetime | None = None) -> str:
    """Format ``moment`` (default: now) as an HTTP date in GMT.

    Naive datetimes are taken to be in UTC.
    """
    if moment is None:
        moment = datetime.now(timezone.utc)
    elif moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    else:
        moment = moment.astimezone(timezone.utc)
    return format_datetime(moment, usegmt=True)


def build_asr_request(audio: bytes) -> str:
    """Return the compact JSON body carrying ``audio`` as Base64."""
    return json.dumps(
        {"app": {}, "audio": base64_encode(audio)}, separators=(",", ":")
    )


def parse_asr_response(body: str | bytes) -> str:
    """Extract ``output.text`` from a recognition reply."""
    try:
        root = json.loads(body)
    except ValueError as exc:
        raise AsrError("JSON parse error") from exc
    output = root.get("output") if isinstance(root, dict) else None
    if not isinstance(output, dict):
        raise AsrError("Invalid response format: missing 'output' field")
    text = output.get("text")
    if not isinstance(text, str):
        raise AsrError("Invalid response format: missing 'text' field")
    return text


class AsrClient:
    """Sends recorded audio to the recognition service."""

    def __init__(
        self,
        endpoint: str = PARA_URL,
        access_key_id: str = "",
        access_key_secret: str = "",
        timeout: float = 30.0,
    ) -> None:
        self.endpoint = endpoint
        self.access_key_id = access_key_id
        self.access_key_secret = access_key_secret
        self.timeout = timeout

    def build_headers(self, date_str: str, nonce: str) -> dict[str, str]:
        """Return the signed request headers for the given date and nonce."""
        signature = generate_signature(
            build_string_to_sign(date_str, nonce), self.access_key_secret
        )
        return {
            "Authorization": f"acs {self.access_key_id}:{signature}",
            "Content-Type": CONTENT_TYPE,
            "Date": date_str,
        }

    def recognize(self, audio: bytes) -> str:
        """Recognise ``audio`` and return the transcribed text."""
        body = build_asr_request(audio).encode("utf-8")
        headers = self.build_headers(format_http_date(), generate_nonce())
        request = urllib.request.Request(
            self.endpoint, data=body, headers=headers, method="POST"
        )
        try:
            with urllib.request.urlopen(request, timeout=self.timeout) as response:
                status = response.status
                payload = response.read()
        except urllib.error.HTTPError as exc:
            raise AsrError(f"HTTP status: {exc.code}") from exc
        except (urllib.error.URLError, OSError) as exc:
            raise AsrError(f"HTTP request failed: {exc}") from exc
        if status != 200:
            raise AsrError(f"HTTP status: {status}")
        return parse_asr_response(payload)