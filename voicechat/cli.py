"""Command line: transcribe recorded audio and ask the chat model about it."""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Sequence

from voicechat.asr import PARA_URL, AsrClient, AsrError
from voicechat.chat import (
    DEEPSEEK_API_ENDPOINT,
    DEEPSEEK_MODEL,
    ChatError,
    ChatMessage,
    DeepSeekClient,
)


def run_pipeline(
    audio: bytes, asr_client: AsrClient, chat_client: DeepSeekClient
) -> tuple[str, str | None]:
    """Recognise ``audio`` and send the text to the chat model.

    Returns the recognised text and the model's reply (None if it gave none).
    """
    text = asr_client.recognize(audio)
    reply = chat_client.chat([ChatMessage("user", text)])
    return text, reply


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="voicechat",
        description="Transcribe 16 kHz 16-bit mono PCM audio and chat about it.",
    )
    parser.add_argument("audio", help="raw PCM audio file, or - for stdin")
    parser.add_argument("--asr-endpoint", default=PARA_URL)
    parser.add_argument("--chat-endpoint", default=DEEPSEEK_API_ENDPOINT)
    parser.add_argument("--model", default=DEEPSEEK_MODEL)
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command; credentials come from the environment."""
    args = _parse_args(argv)
    if args.audio == "-":
        audio = sys.stdin.buffer.read()
    else:
        with open(args.audio, "rb") as handle:
            audio = handle.read()

    asr_client = AsrClient(
        endpoint=args.asr_endpoint,
        access_key_id=os.environ.get("ALIYUN_ACCESS_KEY_ID", ""),
        access_key_secret=os.environ.get("ALIYUN_ACCESS_KEY_SECRET", ""),
    )
    chat_client = DeepSeekClient(
        api_key=os.environ.get("DEEPSEEK_API_KEY", ""),
        endpoint=args.chat_endpoint,
        model=args.model,
    )

    try:
        text = asr_client.recognize(audio)
    except AsrError as exc:
        print(f"语音识别失败: {exc}", file=sys.stderr)
        return 1
    print(f"语音识别结果: {text}")

    try:
        reply = chat_client.chat([ChatMessage("user", text)])
    except ChatError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    if reply is not None:
        print(f"AI回复: {reply}")
    return 0


if __name__ == "__main__":
    sys.exit(main())