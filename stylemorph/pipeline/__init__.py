"""Batch orchestration for StyleMorph."""

from .orchestrator import (
    OutfitOrchestrator,
    BatchPlan,
    BatchResult,
    BatchValidationError,
    BatchInProgressError,
)

__all__ = [
    "OutfitOrchestrator",
    "BatchPlan",
    "BatchResult",
    "BatchValidationError",
    "BatchInProgressError",
]
