"""Uploaded image models."""

import base64
import binascii
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ImageMimeType = Literal["image/png", "image/jpeg", "image/webp"]

SUPPORTED_MIME_TYPES: tuple[str, ...] = ("image/png", "image/jpeg", "image/webp")

_SUFFIX_MIME_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".webp": "image/webp",
}


def sniff_mime_type(data: bytes, suffix: str | None = None) -> str | None:
    """Detect the image format from magic bytes, falling back to the file suffix."""
    if data[:3] == b'\xff\xd8\xff':
        return "image/jpeg"
    if data[:8] == b'\x89PNG\r\n\x1a\n':
        return "image/png"
    if data[:4] == b'RIFF' and data[8:12] == b'WEBP':
        return "image/webp"
    if suffix:
        return _SUFFIX_MIME_TYPES.get(suffix.lower())
    return None


class ImageAsset(BaseModel):
    """Decoded image supplied by the user (subject photo or garment)."""

    model_config = ConfigDict(frozen=True)

    raw_bytes: bytes = Field(repr=False)
    mime_type: ImageMimeType
    source_reference: str | None = Field(
        default=None, description="Opaque handle to the originating file, e.g. its name"
    )

    @property
    def base64_data(self) -> str:
        """Raw base64 payload without the data URL prefix."""
        return base64.b64encode(self.raw_bytes).decode("ascii")

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.base64_data}"

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        source_reference: str | None = None,
        mime_type: str | None = None,
    ) -> "ImageAsset":
        """Build an asset from raw bytes, sniffing the mime type if not given."""
        if mime_type is None:
            suffix = Path(source_reference).suffix if source_reference else None
            mime_type = sniff_mime_type(data, suffix)
        if mime_type not in SUPPORTED_MIME_TYPES:
            raise ValueError(
                f"Unsupported image type {mime_type!r}; expected one of {', '.join(SUPPORTED_MIME_TYPES)}"
            )
        return cls(raw_bytes=data, mime_type=mime_type, source_reference=source_reference)

    @classmethod
    def from_path(cls, path: Path) -> "ImageAsset":
        return cls.from_bytes(path.read_bytes(), source_reference=str(path))

    @classmethod
    def from_data_url(cls, data: str, source_reference: str | None = None) -> "ImageAsset":
        """Decode a ``data:<mime>;base64,<payload>`` string (or bare base64).

        The declared mime type wins over sniffing when the prefix is present.
        """
        mime_type = None
        if data.startswith("data:"):
            header, encoded = data.split(",", 1)
            mime_type = header[len("data:"):].split(";", 1)[0] or None
        else:
            encoded = data

        try:
            raw_bytes = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"Invalid base64 image data: {e}") from e

        return cls.from_bytes(raw_bytes, source_reference=source_reference, mime_type=mime_type)
