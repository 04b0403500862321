"""External service clients for StyleMorph."""

from .gemini_client import GeminiTryOnClient
from .payload_codec import encode, decode

__all__ = [
    "GeminiTryOnClient",
    "encode",
    "decode",
]
