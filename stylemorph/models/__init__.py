"""Data models for StyleMorph try-on."""

from .image import ImageAsset, SUPPORTED_MIME_TYPES
from .outfit import OutfitSpec
from .generation import GenerationRequest, GenerationOutcome
from .session import TryOnSession, LastOutfitError

__all__ = [
    "ImageAsset",
    "SUPPORTED_MIME_TYPES",
    "OutfitSpec",
    "GenerationRequest",
    "GenerationOutcome",
    "TryOnSession",
    "LastOutfitError",
]
