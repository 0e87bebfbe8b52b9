# voicechat

Turn a short voice recording into a chat reply. Recorded audio is sent to a
Paraformer speech-recognition endpoint. The recognised text then goes to the
DeepSeek chat-completions API as a single user message, and the assistant's
reply is returned. Only the Python standard library is used.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
voicechat [--asr-endpoint URL] [--chat-endpoint URL] [--model NAME] AUDIO
```

`AUDIO` is a file of raw 16 kHz, 16-bit mono PCM, or `-` to read it from
standard input. The command sends it for recognition, prints
`语音识别结果: <text>`, then sends the text to the chat model and prints
`AI回复: <reply>` if the model gave one.

Options:

- `--asr-endpoint` – recognition URL (default: the Paraformer endpoint).
- `--chat-endpoint` – chat-completions URL (default: the DeepSeek endpoint).
- `--model` – chat model name (default: `deepseek-chat`).

Credentials are taken only from the environment:

- `ALIYUN_ACCESS_KEY_ID` and `ALIYUN_ACCESS_KEY_SECRET` for recognition;
- `DEEPSEEK_API_KEY` for chat.

Missing variables are sent as empty strings. On a recognition or chat failure
the error is written to standard error and the command exits with status 1;
otherwise it exits with 0.

## Library use

```python
from voicechat.asr import AsrClient
from voicechat.chat import DeepSeekClient
from voicechat.cli import run_pipeline

asr = AsrClient(
    endpoint="https://asr.example.com/api/predict/paraformer-v2",
    access_key_id="demo-id",
    access_key_secret="secret",
    timeout=30,
)
chat = DeepSeekClient(
    api_key="placeholder",
    endpoint="https://chat.example.com/v1/chat/completions",
    model="deepseek-chat",
    timeout=60,
)

with open("speech.pcm", "rb") as fh:
    text, reply = run_pipeline(fh.read(), asr, chat)
print(text)
print(reply)  # None when the model returned no choices
```

`run_pipeline(audio, asr_client, chat_client)` returns a tuple of the
recognised text and the model's reply.

### `voicechat.asr`

- `AsrClient(endpoint, access_key_id, access_key_secret, timeout)`.
  `recognize(audio)` posts the audio and returns `output.text` from the reply.
  `build_headers(date_str, nonce)` returns the `Authorization`,
  `Content-Type` and `Date` headers, where `Authorization` is
  `acs <access_key_id>:<signature>`.
- `build_asr_request(audio)` – compact JSON body `{"app":{},"audio":"<base64>"}`.
- `parse_asr_response(body)` – returns `output.text`, or raises `AsrError`.
- `build_string_to_sign(date_str, nonce)` – the newline-joined text the
  signature covers.
- `generate_signature(string_to_sign, secret)` – Base64 of the HMAC-SHA1 digest.
- `generate_nonce()` – a random 16-character alphanumeric string.
- `format_http_date(moment=None)` – an HTTP date in GMT; naive datetimes are
  taken as UTC.
- `base64_encode(data)` – standard padded Base64 text.

### `voicechat.chat`

- `ChatMessage(role, content)` – one conversation turn (frozen dataclass).
- `DeepSeekClient(api_key, endpoint, model, timeout)`. `chat(messages)` posts
  the conversation and returns the first choice's content, or `None` if there
  are no choices. `build_headers()` returns the JSON content type and
  `Bearer <api_key>` authorization.
- `build_deepseek_request(messages, model)` – compact JSON body with
  `max_tokens` 512, `temperature` 0.7 and `stream` false.
- `parse_deepseek_response(response)` – returns the first choice's content or
  `None`; an `error` object in the reply raises `ChatError("API Error: ...")`.

Failures (network errors, non-200 statuses, malformed replies) raise
`voicechat.asr.AsrError` or `voicechat.chat.ChatError`.

## What it does not do

voicechat does not record audio: it has no microphone capture and no
push-to-talk loop, so recordings must be made elsewhere and handed over as a
file or on standard input. It also does not forward replies to any other
device; the reply is only printed or returned. Each run is a single
one-message exchange with no conversation history.