"""Generation request and outcome models."""

import base64

from pydantic import BaseModel, ConfigDict, Field

from .image import ImageAsset


class GenerationRequest(BaseModel):
    """One outfit's try-on request, built fresh for every batch."""

    model_config = ConfigDict(frozen=True)

    outfit_identity: str
    user_photo: ImageAsset
    garment_assets: tuple[ImageAsset, ...] = ()
    free_text_instructions: str = ""


class GenerationOutcome(BaseModel):
    """Terminal result of generating one outfit's render."""

    model_config = ConfigDict(frozen=True)

    outfit_identity: str
    rendered_image: str | None = Field(default=None, repr=False, description="data URI")
    narrative_text: str | None = None
    failure_reason: str | None = None

    @classmethod
    def failure(cls, outfit_identity: str, reason: str) -> "GenerationOutcome":
        return cls(outfit_identity=outfit_identity, failure_reason=reason)

    @property
    def succeeded(self) -> bool:
        return self.failure_reason is None and (
            self.rendered_image is not None or self.narrative_text is not None
        )

    @property
    def download_filename(self) -> str:
        return f"stylemorph-outfit-{self.outfit_identity}.png"

    def image_bytes(self) -> bytes | None:
        """Decode the rendered data URI back into raw bytes."""
        if self.rendered_image is None:
            return None
        _, encoded = self.rendered_image.split(",", 1)
        return base64.b64decode(encoded)
