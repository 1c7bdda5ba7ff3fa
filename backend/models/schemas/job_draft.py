"""Canonical in-progress job posting and its field catalog.

Field groups decide how a value may be replaced during reconciliation:
    PRIMARY_FIELDS     a non-empty import value replaces the current one
    ENRICHMENT_FIELDS  same as primary for imports; enrichment only fills gaps
    INTAKE_FIELDS      fill-only: a populated value is never replaced by a merge
"""

from typing import Literal

from pydantic import BaseModel

RemoteType = Literal["onsite", "hybrid", "remote"]
EmploymentType = Literal["full-time", "part-time", "contract", "freelance"]
ExperienceLevel = Literal["junior", "mid", "senior", "lead"]
HiringUrgency = Literal["standard", "urgent", "ASAP"]

DEFAULT_HIRING_URGENCY = "standard"


class JobDraft(BaseModel):
    """Unpersisted job posting assembled from imports, enrichment and briefings."""

    # Required for publish
    title: str | None = None
    company_name: str | None = None
    salary_min: int | None = None
    salary_max: int | None = None

    # Descriptive
    description: str | None = None
    requirements: str | None = None
    location: str | None = None
    remote_type: RemoteType | None = None
    employment_type: EmploymentType | None = None
    experience_level: ExperienceLevel | None = None
    skills: list[str] = []
    must_haves: list[str] = []
    nice_to_haves: list[str] = []
    benefits: list[str] = []

    # Enrichment
    industry: str | None = None
    company_size_band: str | None = None
    funding_stage: str | None = None
    tech_environment: list[str] = []
    hiring_urgency: HiringUrgency = DEFAULT_HIRING_URGENCY
    normalized_skills: list[str] = []

    # Intake narrative
    team_size: int | None = None
    vacancy_reason: str | None = None
    candidates_in_pipeline: int | None = None
    decision_makers_count: int | None = None
    remote_days: int | None = None
    company_culture: str | None = None
    career_path: str | None = None
    reports_to: str | None = None
    core_hours: str | None = None
    daily_routine: str | None = None
    hiring_deadline_weeks: int | None = None


PRIMARY_FIELDS: tuple[str, ...] = (
    "title",
    "company_name",
    "description",
    "requirements",
    "location",
    "remote_type",
    "employment_type",
    "experience_level",
    "salary_min",
    "salary_max",
    "skills",
    "must_haves",
    "nice_to_haves",
    "benefits",
)

ENRICHMENT_FIELDS: tuple[str, ...] = (
    "industry",
    "company_size_band",
    "funding_stage",
    "tech_environment",
    "hiring_urgency",
    "normalized_skills",
)

INTAKE_FIELDS: tuple[str, ...] = (
    "team_size",
    "vacancy_reason",
    "candidates_in_pipeline",
    "decision_makers_count",
    "remote_days",
    "company_culture",
    "career_path",
    "reports_to",
    "core_hours",
    "daily_routine",
    "hiring_deadline_weeks",
)

ALL_FIELDS: tuple[str, ...] = PRIMARY_FIELDS + ENRICHMENT_FIELDS + INTAKE_FIELDS

# The 24 fields behind "N fields auto-filled" and the completeness score.
# hiring_urgency always holds a value, so it is not counted.
CANONICAL_FIELDS: tuple[str, ...] = (
    "title",
    "company_name",
    "description",
    "requirements",
    "location",
    "remote_type",
    "employment_type",
    "experience_level",
    "salary_min",
    "salary_max",
    "skills",
    "must_haves",
    "nice_to_haves",
    "industry",
    "company_size_band",
    "funding_stage",
    "tech_environment",
    "team_size",
    "vacancy_reason",
    "candidates_in_pipeline",
    "decision_makers_count",
    "remote_days",
    "company_culture",
    "career_path",
)

LIST_FIELDS = frozenset({
    "skills", "must_haves", "nice_to_haves", "benefits",
    "tech_environment", "normalized_skills",
})

INT_FIELDS = frozenset({
    "salary_min", "salary_max", "team_size", "candidates_in_pipeline",
    "decision_makers_count", "remote_days", "hiring_deadline_weeks",
})

ENUM_FIELDS = frozenset({"remote_type", "employment_type", "experience_level", "hiring_urgency"})

# Fields whose "unset" value is a default rather than None
FIELD_DEFAULTS: dict[str, str] = {"hiring_urgency": DEFAULT_HIRING_URGENCY}
