"""Outfit specification models."""

from pydantic import BaseModel, Field

from .image import ImageAsset


class OutfitSpec(BaseModel):
    """A user-defined outfit: garment images plus free-text styling notes.

    Garment order is significant; it determines the "clothing item #N"
    numbering sent to the generation service.
    """

    identity: str = Field(frozen=True)
    garment_assets: list[ImageAsset] = Field(default_factory=list)
    free_text_instructions: str = ""

    @property
    def is_empty(self) -> bool:
        """Empty outfits have no garments and only whitespace for instructions."""
        return not self.garment_assets and not self.free_text_instructions.strip()

    def add_garment(self, asset: ImageAsset) -> None:
        self.garment_assets.append(asset)

    def remove_garment(self, index: int) -> ImageAsset:
        """Remove and return the garment at ``index``."""
        if not 0 <= index < len(self.garment_assets):
            raise IndexError(
                f"Outfit {self.identity} has no garment at index {index}"
            )
        return self.garment_assets.pop(index)
