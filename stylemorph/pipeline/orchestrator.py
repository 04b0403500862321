"""Multi-outfit try-on orchestrator."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Protocol, Sequence

from ..models import (
    GenerationOutcome,
    GenerationRequest,
    ImageAsset,
    OutfitSpec,
    TryOnSession,
)

logger = logging.getLogger(__name__)

MISSING_PHOTO_MESSAGE = "Please upload a photo of yourself."
NO_CONTENT_MESSAGE = "Please provide garment images or descriptions for at least one outfit."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred while generating images."
UNIT_FAILURE_MESSAGE = "Failed to generate image"


class BatchValidationError(ValueError):
    """The batch cannot be dispatched; nothing was sent to the service."""


class BatchInProgressError(RuntimeError):
    """A batch is already running for this session."""


class TryOnGenerator(Protocol):
    async def generate(self, request: GenerationRequest) -> GenerationOutcome: ...


@dataclass
class BatchPlan:
    """Dispatchable requests plus the identities of outfits skipped as empty."""
    requests: list[GenerationRequest]
    skipped: list[str] = field(default_factory=list)


@dataclass
class BatchResult:
    """Outcome of one batch run.

    ``error`` is set only for batch-level failures, in which case
    ``outcomes`` is empty. Per-outfit failures live in the outcomes.
    """
    outcomes: list[GenerationOutcome] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def succeeded(self) -> list[GenerationOutcome]:
        return [o for o in self.outcomes if o.succeeded]

    @property
    def failed(self) -> list[GenerationOutcome]:
        return [o for o in self.outcomes if not o.succeeded]


class OutfitOrchestrator:
    """Fans out one generation call per non-empty outfit and joins them all.

    Flow:
    1. Validate the batch (subject photo, at least one non-empty outfit)
    2. Plan: filter empty outfits, build one request per remaining outfit
    3. Dispatch every request concurrently, settle-all join
    """

    def __init__(self, generator: TryOnGenerator):
        self.generator = generator

    def validate(self, user_photo: ImageAsset | None, outfits: Sequence[OutfitSpec]) -> None:
        """Raise ``BatchValidationError`` if the batch must not be dispatched."""
        if user_photo is None:
            raise BatchValidationError(MISSING_PHOTO_MESSAGE)
        if all(outfit.is_empty for outfit in outfits):
            raise BatchValidationError(NO_CONTENT_MESSAGE)

    def plan(self, user_photo: ImageAsset, outfits: Sequence[OutfitSpec]) -> BatchPlan:
        """Split outfits into dispatchable requests and skipped empties."""
        plan = BatchPlan(requests=[])
        for outfit in outfits:
            if outfit.is_empty:
                plan.skipped.append(outfit.identity)
                continue
            plan.requests.append(
                GenerationRequest(
                    outfit_identity=outfit.identity,
                    user_photo=user_photo,
                    garment_assets=tuple(outfit.garment_assets),
                    free_text_instructions=outfit.free_text_instructions,
                )
            )
        return plan

    async def dispatch(self, requests: Sequence[GenerationRequest]) -> list[GenerationOutcome]:
        """Run every request concurrently and wait for all of them.

        A unit that raises despite the generator's own error boundary is
        turned into a failure outcome for that outfit; siblings keep running.
        """
        tasks = [asyncio.ensure_future(self.generator.generate(r)) for r in requests]
        settled = await asyncio.gather(*tasks, return_exceptions=True)

        outcomes = []
        for request, result in zip(requests, settled):
            if isinstance(result, BaseException):
                logger.error(f"Outfit {request.outfit_identity} raised past its boundary: {result!r}")
                result = GenerationOutcome.failure(
                    request.outfit_identity, str(result) or UNIT_FAILURE_MESSAGE
                )
            outcomes.append(result)
        return outcomes

    async def run_batch(
        self,
        user_photo: ImageAsset | None,
        outfits: Sequence[OutfitSpec],
    ) -> BatchResult:
        """Validate, plan and dispatch one batch.

        Returns:
            BatchResult with one outcome per non-empty outfit, or a single
            batch-level error and no outcomes
        """
        try:
            self.validate(user_photo, outfits)
        except BatchValidationError as e:
            logger.warning(f"Batch rejected: {e}")
            return BatchResult(error=str(e))

        plan = self.plan(user_photo, outfits)
        if plan.skipped:
            logger.warning(f"Skipping empty outfits: {', '.join(plan.skipped)}")
        logger.info(f"Dispatching {len(plan.requests)} try-on requests")

        try:
            outcomes = await self.dispatch(plan.requests)
        except Exception as e:
            logger.exception("Batch join failed")
            return BatchResult(skipped=plan.skipped, error=str(e) or UNEXPECTED_ERROR_MESSAGE)

        result = BatchResult(outcomes=outcomes, skipped=plan.skipped)
        logger.info(
            f"Batch complete: {len(result.succeeded)} succeeded, {len(result.failed)} failed"
        )
        return result

    async def run_session(self, session: TryOnSession) -> BatchResult:
        """Run a batch over a session's outfits and store the results on it."""
        if session.in_flight:
            raise BatchInProgressError("A try-on batch is already running for this session")

        try:
            self.validate(session.user_photo, session.outfits)
        except BatchValidationError as e:
            session.last_error = str(e)
            return BatchResult(error=str(e))

        session.in_flight = True
        session.last_error = None
        session.results = []

        try:
            result = await self.run_batch(session.user_photo, list(session.outfits))
            session.results = list(result.outcomes)
            session.last_error = result.error
        finally:
            session.in_flight = False

        return result
