"""Request/response codec for the Gemini try-on call.

The part order is part of the contract with the model: every image is
immediately followed by the text label that names it, and the garment
numbering in those labels is what the instruction text refers to.
"""

import base64

from google.genai import types

from ..models import GenerationOutcome, GenerationRequest


USER_PHOTO_LABEL = "This is the user's photo."

GARMENT_LABEL_TEMPLATE = "This is clothing item #{index} for the outfit."

TRYON_INSTRUCTIONS = """Act as a professional fashion stylist and photo editor.
Task: Generate a photorealistic image of the person from the first image wearing the outfit composed of the clothing items provided.

Instructions:
- Replace the current clothing of the person with the target clothing items.
- YOU MUST USE ALL PROVIDED CLOTHING ITEMS. Combine them into a complete cohesive outfit.
- Keep the person's face, pose, body shape, and the background exactly as they are in the first image.
- Ensure the lighting and shadows on the new clothing match the original scene.
- High fidelity and realistic fabric texture are required."""

ADDITIONAL_INSTRUCTIONS_TEMPLATE = "\nAdditional Instructions: {instructions}"

VISUAL_DETAILS_SUFFIX = (
    "\nUse the visual details from the clothing images provided to apply "
    "the textures, colors, and cuts to the person."
)

# Rendered images are always declared as PNG, whatever the service sent.
IMAGE_DATA_URI_PREFIX = "data:image/png;base64,"

EMPTY_RESPONSE_MESSAGE = "No content generated."
DECODE_FAILURE_MESSAGE = "Failed to read the generation response"


def build_prompt(request: GenerationRequest) -> str:
    """Build the instruction block sent after all image parts."""
    prompt = TRYON_INSTRUCTIONS

    if request.free_text_instructions:
        prompt += ADDITIONAL_INSTRUCTIONS_TEMPLATE.format(
            instructions=request.free_text_instructions
        )

    if request.garment_assets:
        prompt += VISUAL_DETAILS_SUFFIX

    return prompt


def encode(request: GenerationRequest) -> list[types.Part]:
    """Build the ordered multimodal parts for one try-on request."""
    photo = request.user_photo
    parts = [
        types.Part.from_bytes(data=photo.raw_bytes, mime_type=photo.mime_type),
        types.Part.from_text(text=USER_PHOTO_LABEL),
    ]

    for index, garment in enumerate(request.garment_assets, start=1):
        parts.append(types.Part.from_bytes(data=garment.raw_bytes, mime_type=garment.mime_type))
        parts.append(types.Part.from_text(text=GARMENT_LABEL_TEMPLATE.format(index=index)))

    parts.append(types.Part.from_text(text=build_prompt(request)))
    return parts


def _response_parts(response: types.GenerateContentResponse) -> list[types.Part]:
    if not response.candidates:
        return []
    content = response.candidates[0].content
    if content is None or not content.parts:
        return []
    return list(content.parts)


def decode(response: types.GenerateContentResponse, outfit_identity: str) -> GenerationOutcome:
    """Normalize a service response into an outcome. Never raises.

    Later image or text parts overwrite earlier ones. A part carrying inline
    data is always treated as the image, even when its payload is empty, in
    which case it contributes nothing. A response with neither image nor text
    becomes a failure outcome.
    """
    rendered_image = None
    narrative_text = None

    try:
        for part in _response_parts(response):
            if part.inline_data is not None:
                if part.inline_data.data:
                    encoded = base64.b64encode(part.inline_data.data).decode("ascii")
                    rendered_image = IMAGE_DATA_URI_PREFIX + encoded
            elif part.text:
                narrative_text = part.text
    except Exception as e:
        return GenerationOutcome.failure(outfit_identity, str(e) or DECODE_FAILURE_MESSAGE)

    if rendered_image is None and narrative_text is None:
        return GenerationOutcome.failure(outfit_identity, EMPTY_RESPONSE_MESSAGE)

    return GenerationOutcome(
        outfit_identity=outfit_identity,
        rendered_image=rendered_image,
        narrative_text=narrative_text,
    )
