# Test fixtures and configuration
import pytest
import sys
from pathlib import Path

from google.genai import types

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from stylemorph.models import GenerationOutcome, GenerationRequest, ImageAsset, OutfitSpec


MINIMAL_PNG = bytes([
    0x89, 0x50, 0x4E, 0x47, 0x0D, 0x0A, 0x1A, 0x0A,  # PNG signature
    0x00, 0x00, 0x00, 0x0D, 0x49, 0x48, 0x44, 0x52,  # IHDR chunk
    0x00, 0x00, 0x00, 0x01, 0x00, 0x00, 0x00, 0x01,  # 1x1 dimensions
    0x08, 0x02, 0x00, 0x00, 0x00, 0x90, 0x77, 0x53,
    0xDE, 0x00, 0x00, 0x00, 0x0C, 0x49, 0x44, 0x41,  # IDAT chunk
    0x54, 0x08, 0xD7, 0x63, 0xF8, 0xCF, 0xC0, 0x00,
    0x00, 0x00, 0x03, 0x00, 0x01, 0x00, 0x05, 0xFE,
    0xD4, 0xAA, 0x00, 0x00, 0x00, 0x00, 0x49, 0x45,  # IEND chunk
    0x4E, 0x44, 0xAE, 0x42, 0x60, 0x82
])

MINIMAL_JPEG = b'\xff\xd8\xff\xe0' + b'\x00' * 16


def make_response(*parts: types.Part) -> types.GenerateContentResponse:
    """Build a Gemini response with a single candidate holding ``parts``."""
    return types.GenerateContentResponse(
        candidates=[types.Candidate(content=types.Content(role="model", parts=list(parts)))]
    )


def image_part(data: bytes, mime_type: str = "image/png") -> types.Part:
    return types.Part(inline_data=types.Blob(data=data, mime_type=mime_type))


class FakeGenerator:
    """Records requests and answers from a per-outfit script.

    Script values may be an outcome, an exception to raise, or None for a
    default successful image outcome.
    """

    def __init__(self, script: dict | None = None):
        self.script = script or {}
        self.requests: list[GenerationRequest] = []

    async def generate(self, request: GenerationRequest) -> GenerationOutcome:
        self.requests.append(request)
        action = self.script.get(request.outfit_identity)
        if isinstance(action, BaseException):
            raise action
        if isinstance(action, GenerationOutcome):
            return action
        return GenerationOutcome(
            outfit_identity=request.outfit_identity,
            rendered_image="data:image/png;base64,aW1n",
        )


@pytest.fixture
def minimal_png_bytes():
    """Minimal valid PNG image bytes."""
    return MINIMAL_PNG


@pytest.fixture
def user_photo():
    return ImageAsset(raw_bytes=MINIMAL_PNG, mime_type="image/png", source_reference="me.png")


@pytest.fixture
def garment_images():
    """Three distinguishable garment assets."""
    return [
        ImageAsset(raw_bytes=MINIMAL_PNG + b"shirt", mime_type="image/png", source_reference="shirt.png"),
        ImageAsset(raw_bytes=MINIMAL_JPEG + b"jeans", mime_type="image/jpeg", source_reference="jeans.jpg"),
        ImageAsset(raw_bytes=MINIMAL_PNG + b"boots", mime_type="image/png", source_reference="boots.png"),
    ]


@pytest.fixture
def outfits(garment_images):
    """Three outfits, the middle one empty."""
    return [
        OutfitSpec(identity="1", garment_assets=garment_images[:2]),
        OutfitSpec(identity="2"),
        OutfitSpec(identity="3", free_text_instructions="a navy linen suit"),
    ]


@pytest.fixture
def temp_image_file(tmp_path, minimal_png_bytes):
    """Create a temporary PNG file."""
    img_path = tmp_path / "test_image.png"
    img_path.write_bytes(minimal_png_bytes)
    return img_path
