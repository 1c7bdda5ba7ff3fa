"""Intake-briefing extraction contracts."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class ExtractedIntakeData(BaseModel):
    """Structured facts pulled from a free-text hiring briefing.

    Kept loosely typed like PartialProfile: the LLM may answer "12" or 12.
    """

    model_config = ConfigDict(extra="ignore")

    team_size: Any = None
    team_avg_age: Any = None
    core_hours: Any = None
    overtime_policy: Any = None
    remote_days: Any = None
    company_culture: Any = None
    career_path: Any = None
    vacancy_reason: Any = None
    hiring_deadline_weeks: Any = None
    candidates_in_pipeline: Any = None
    decision_makers: Any = None
    daily_routine: Any = None
    must_have_criteria: Any = None
    nice_to_have_criteria: Any = None
    hiring_urgency: Any = None  # standard | urgent | hot
    reports_to: Any = None
    salary_min: Any = None
    salary_max: Any = None


class IntakeExtractionResult(BaseModel):
    """Briefing extraction plus its narrative completeness.

    ``completeness`` measures how much of the briefing narrative was
    covered. It is a different metric from the draft completeness score.
    """
    extracted_data: ExtractedIntakeData = ExtractedIntakeData()
    completeness: int = 0
    fields_found: int = 0
    total_fields: int = 0
