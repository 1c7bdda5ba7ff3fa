"""Source adapter output: one loosely-typed shape shared by every import path."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class PartialProfile(BaseModel):
    """A partial job profile as handed to the reconciler.

    Values are kept as delivered (strings, numbers, lists, comma-joined
    strings); coercion into JobDraft types happens during reconciliation.
    Any field may be absent.
    """

    model_config = ConfigDict(extra="ignore")

    title: Any = None
    company_name: Any = None
    description: Any = None
    requirements: Any = None
    location: Any = None
    remote_type: Any = None
    employment_type: Any = None
    experience_level: Any = None
    salary_min: Any = None
    salary_max: Any = None
    skills: Any = None
    must_haves: Any = None
    nice_to_haves: Any = None
    benefits: Any = None

    industry: Any = None
    company_size_band: Any = None
    funding_stage: Any = None
    tech_environment: Any = None
    hiring_urgency: Any = None
    normalized_skills: Any = None

    team_size: Any = None
    vacancy_reason: Any = None
    candidates_in_pipeline: Any = None
    decision_makers_count: Any = None
    remote_days: Any = None
    company_culture: Any = None
    career_path: Any = None
    reports_to: Any = None
    core_hours: Any = None
    daily_routine: Any = None
    hiring_deadline_weeks: Any = None
