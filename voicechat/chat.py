"""Chat completion client for the DeepSeek API."""

from __future__ import annotations

import json
import urllib.error
import urllib.request
from collections.abc import Iterable
from dataclasses import dataclass

DEEPSEEK_API_ENDPOINT = "https://api.deepseek.com/v1/chat/completions"
DEEPSEEK_MODEL = "deepseek-chat"
MAX_TOKENS = 512
TEMPERATURE = 0.7


class ChatError(Exception):
    """Raised when a chat request fails or the API reports an error."""


@dataclass(frozen=True)
class ChatMessage:
    """One turn of a conversation: ``system``, ``user`` or ``assistant``."""

    role: str
    content: str


def build_deepseek_request(
    messages: Iterable[ChatMessage], model: str = DEEPSEEK_MODEL
) -> str:
    """Return the compact JSON body for a chat completion request."""
    return json.dumps(
        {
            "model": model,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
            "max_tokens": MAX_TOKENS,
            "temperature": TEMPERATURE,
            "stream": False,
        },
        separators=(",", ":"),
        ensure_ascii=False,
    )


def parse_deepseek_response(response: str | bytes) -> str | None:
    """Return the first choice's reply text, or None when there are no choices."""
    try:
        root = json.loads(response)
    except ValueError as exc:
        raise ChatError("Failed to parse JSON response") from exc
    if not isinstance(root, dict):
        return None
    if "error" in root:
        error = root["error"]
        message = error.get("message") if isinstance(error, dict) else error
        raise ChatError(f"API Error: {message}")
    choices = root.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    try:
        content = choices[0]["message"]["content"]
    except (KeyError, TypeError) as exc:
        raise ChatError("Malformed choice in response") from exc
    if not isinstance(content, str):
        raise ChatError("Malformed choice in response")
    return content


class DeepSeekClient:
    """Sends conversations to the chat completion endpoint."""

    def __init__(
        self,
        api_key: str = "",
        endpoint: str = DEEPSEEK_API_ENDPOINT,
        model: str = DEEPSEEK_MODEL,
        timeout: float = 60.0,
    ) -> None:
        self.api_key = api_key
        self.endpoint = endpoint
        self.model = model
        self.timeout = timeout

    def build_headers(self) -> dict[str, str]:
        """Return the request headers, including the bearer credential."""
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    def chat(self, messages: Iterable[ChatMessage]) -> str | None:
        """Send ``messages`` and return the assistant's reply."""
        body = build_deepseek_request(messages, self.model).encode("utf-8")
        request = urllib.request.Request(
            self.endpoint, data=body, headers=self.build_headers(), method="POST"
        )
        try:
            with urllib.request.urlopen(request, timeout=self.timeout) as response:
                payload = response.read()
        except urllib.error.HTTPError as exc:
            error_body = exc.read() or b""
            try:
                parse_deepseek_response(error_body)
            except ChatError as api_error:
                if "API Error" in str(api_error):
                    raise api_error from exc
            raise ChatError(f"HTTP status: {exc.code}") from exc
        except (urllib.error.URLError, OSError) as exc:
            raise ChatError(f"HTTP request failed: {exc}") from exc
        return parse_deepseek_response(payload)