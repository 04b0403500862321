"""Session state for a multi-outfit try-on run."""

from pydantic import BaseModel, Field, PrivateAttr, field_validator

from .generation import GenerationOutcome
from .image import ImageAsset
from .outfit import OutfitSpec


class LastOutfitError(ValueError):
    """Raised when removing the only remaining outfit."""


class TryOnSession(BaseModel):
    """Complete state for a try-on session.

    A session always holds at least one outfit. Outfit identities come from a
    counter and are never handed out twice, even after removal.
    """

    # Inputs
    user_photo: ImageAsset | None = None
    outfits: list[OutfitSpec] = Field(default_factory=list)

    # Results of the most recent batch
    results: list[GenerationOutcome] = Field(default_factory=list)

    # Status
    in_flight: bool = False
    last_error: str | None = None

    _last_identity: int = PrivateAttr(default=0)

    @field_validator("outfits")
    @classmethod
    def _unique_identities(cls, outfits: list[OutfitSpec]) -> list[OutfitSpec]:
        seen = set()
        for outfit in outfits:
            if outfit.identity in seen:
                raise ValueError(f"Duplicate outfit identity: {outfit.identity}")
            seen.add(outfit.identity)
        return outfits

    def model_post_init(self, __context) -> None:
        numeric = [int(o.identity) for o in self.outfits if o.identity.isdigit()]
        self._last_identity = max(numeric, default=0)
        if not self.outfits:
            self.add_outfit()

    def add_outfit(self) -> OutfitSpec:
        """Append a new empty outfit and return it."""
        self._last_identity += 1
        outfit = OutfitSpec(identity=str(self._last_identity))
        self.outfits.append(outfit)
        return outfit

    def get_outfit(self, identity: str) -> OutfitSpec:
        for outfit in self.outfits:
            if outfit.identity == identity:
                return outfit
        raise KeyError(f"Unknown outfit: {identity}")

    def remove_outfit(self, identity: str) -> None:
        """Remove an outfit and any results generated for it."""
        outfit = self.get_outfit(identity)
        if len(self.outfits) <= 1:
            raise LastOutfitError("At least one outfit must remain in the session")
        self.outfits.remove(outfit)
        self.results = [r for r in self.results if r.outfit_identity != identity]

    def add_garment(self, identity: str, asset: ImageAsset) -> None:
        self.get_outfit(identity).add_garment(asset)

    def remove_garment(self, identity: str, index: int) -> ImageAsset:
        return self.get_outfit(identity).remove_garment(index)

    def set_instructions(self, identity: str, text: str) -> None:
        self.get_outfit(identity).free_text_instructions = text

    def set_user_photo(self, asset: ImageAsset | None) -> None:
        self.user_photo = asset
