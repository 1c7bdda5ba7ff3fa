"""Pydantic contracts shared by the job intake services."""

from models.schemas.client_context import ClientContext
from models.schemas.enrichment_patch import EnrichmentPatch
from models.schemas.intake_briefing import ExtractedIntakeData, IntakeExtractionResult
from models.schemas.job_draft import JobDraft
from models.schemas.partial_profile import PartialProfile

__all__ = [
    "ClientContext",
    "EnrichmentPatch",
    "ExtractedIntakeData",
    "IntakeExtractionResult",
    "JobDraft",
    "PartialProfile",
]
