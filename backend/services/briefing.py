"""Intake-briefing extraction: free-text hiring narrative -> intake data."""

import logging

from config import settings
from models.schemas.intake_briefing import ExtractedIntakeData, IntakeExtractionResult
from models.schemas.job_draft import JobDraft
from services import gemini_client, prompt_builder
from services.errors import ExtractionFailure
from services.reconciler import is_empty

logger = logging.getLogger(__name__)

MIN_BRIEFING_CHARS = 20

# Narrative coverage fields behind the briefing completeness figure
BRIEFING_COMPLETENESS_FIELDS = (
    "team_size",
    "team_avg_age",
    "core_hours",
    "company_culture",
    "vacancy_reason",
    "hiring_urgency",
    "must_have_criteria",
    "decision_makers",
    "daily_routine",
    "career_path",
)


def briefing_completeness(data: ExtractedIntakeData) -> tuple[int, int]:
    """Return (completeness percent, fields found) for an extraction."""
    found = sum(1 for f in BRIEFING_COMPLETENESS_FIELDS if not is_empty(getattr(data, f)))
    return round(found / len(BRIEFING_COMPLETENESS_FIELDS) * 100), found


def _existing_context(draft: JobDraft | None) -> dict | None:
    if draft is None:
        return None
    known = draft.model_dump(exclude_defaults=True)
    return known or None


async def extract_briefing(briefing_text: str, draft: JobDraft | None = None) -> IntakeExtractionResult:
    """Extract intake data from a briefing. Raises ExtractionFailure when nothing came back."""
    if len(briefing_text.strip()) < MIN_BRIEFING_CHARS:
        raise ExtractionFailure("Briefing text too short. Please provide more details.")

    prompt = prompt_builder.build_briefing_prompt(briefing_text, _existing_context(draft))
    raw = await gemini_client.generate_json(prompt, timeout=settings.briefing_timeout_seconds)
    if raw is None:
        raise ExtractionFailure("Failed to extract intake data. Please try again.")

    data = ExtractedIntakeData.model_validate(raw)
    completeness, found = briefing_completeness(data)
    logger.info("Briefing extraction found %d/%d narrative fields", found, len(BRIEFING_COMPLETENESS_FIELDS))

    return IntakeExtractionResult(
        extracted_data=data,
        completeness=completeness,
        fields_found=found,
        total_fields=len(BRIEFING_COMPLETENESS_FIELDS),
    )
