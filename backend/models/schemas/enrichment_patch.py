"""Enrichment Augmenter output: inferred company/context metadata."""

from pydantic import BaseModel

from models.schemas.job_draft import HiringUrgency

COMPANY_SIZE_BANDS = ("1-50", "51-200", "201-500", "501-1000", "1000+")


class EnrichmentPatch(BaseModel):
    industry: str | None = None
    company_size_band: str | None = None  # one of COMPANY_SIZE_BANDS
    funding_stage: str | None = None
    tech_environment: list[str] = []
    hiring_urgency: HiringUrgency | None = None
    normalized_skills: list[str] = []
