"""Speech recognition of recorded audio followed by a chat-model reply."""

__version__ = "0.1.0"
__all__ = ["asr", "chat", "cli"]