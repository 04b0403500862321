"""FastAPI server for StyleMorph multi-outfit try-on.

Receives requests from the web client with:
- user_photo: Base64 data URL of the user's photo
- outfits: list of outfits, each with garment photos (data URLs) and instructions
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from stylemorph import __version__
from stylemorph.config import configure_logging, load_config
from stylemorph.models import GenerationOutcome, ImageAsset, OutfitSpec
from stylemorph.pipeline import OutfitOrchestrator
from stylemorph.services import GeminiTryOnClient


# Initialize orchestrator (will be done on first request)
_orchestrator: OutfitOrchestrator | None = None


def get_orchestrator() -> OutfitOrchestrator:
    """Get or create the orchestrator instance."""
    global _orchestrator
    if _orchestrator is None:
        config = load_config()  # Loads from .env automatically via pydantic-settings
        _orchestrator = OutfitOrchestrator(GeminiTryOnClient(config.gemini))
    return _orchestrator


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging on startup, release the Gemini client on shutdown."""
    global _orchestrator
    configure_logging(load_config().log_level)
    yield
    if _orchestrator is not None:
        await _orchestrator.generator.close()
        _orchestrator = None


app = FastAPI(
    title="StyleMorph API",
    description="Multi-outfit virtual try-on using Gemini",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class OutfitPayload(BaseModel):
    """One outfit in a try-on request."""
    garment_photos: list[str] = Field(default_factory=list)  # Base64 data URLs
    instructions: str = ""


class TryOnRequest(BaseModel):
    """Request body for a try-on batch."""
    user_photo: str | None = None  # Base64 data URL
    outfits: list[OutfitPayload] = Field(min_length=1)


class OutfitResult(BaseModel):
    """Per-outfit result."""
    outfit_id: str
    image_base64: str | None = None  # data URI
    text: str | None = None
    error: str | None = None
    filename: str | None = None

    @classmethod
    def from_outcome(cls, outcome: GenerationOutcome) -> "OutfitResult":
        return cls(
            outfit_id=outcome.outfit_identity,
            image_base64=outcome.rendered_image,
            text=outcome.narrative_text,
            error=outcome.failure_reason,
            filename=outcome.download_filename if outcome.rendered_image else None,
        )


class TryOnResponse(BaseModel):
    """Response with one result per generated outfit."""
    success: bool
    outcomes: list[OutfitResult] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)
    error: str | None = None


def _decode_image(data: str, source_reference: str) -> ImageAsset:
    try:
        return ImageAsset.from_data_url(data, source_reference=source_reference)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=f"{source_reference}: {e}")


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "StyleMorph API", "version": __version__}


@app.get("/health")
async def health():
    """Detailed health check."""
    configured = load_config().gemini.is_configured

    return {
        "status": "ok" if configured else "degraded",
        "gemini": "configured" if configured else "missing_api_key",
    }


@app.post("/api/tryon", response_model=TryOnResponse)
async def generate_tryon(request: TryOnRequest):
    """Generate one try-on image per non-empty outfit.

    Outfit ids are the 1-based position of each outfit in the request.
    """
    user_photo = _decode_image(request.user_photo, "user_photo") if request.user_photo else None

    outfits = []
    for position, payload in enumerate(request.outfits, start=1):
        outfits.append(
            OutfitSpec(
                identity=str(position),
                garment_assets=[
                    _decode_image(photo, f"outfits[{position}].garment_photos[{i}]")
                    for i, photo in enumerate(payload.garment_photos, start=1)
                ],
                free_text_instructions=payload.instructions,
            )
        )

    result = await get_orchestrator().run_batch(user_photo, outfits)

    return TryOnResponse(
        success=result.error is None,
        outcomes=[OutfitResult.from_outcome(o) for o in result.outcomes],
        skipped=result.skipped,
        error=result.error,
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
