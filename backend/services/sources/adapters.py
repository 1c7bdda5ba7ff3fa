"""Per-source adapters onto the shared PartialProfile shape.

The URL and text paths share one extraction schema; the document path and
the intake briefing each use their own keys and are mapped explicitly here
so the reconciler never has to know where a profile came from.
"""

import re
from typing import Any

from models.schemas.enrichment_patch import COMPANY_SIZE_BANDS
from models.schemas.intake_briefing import ExtractedIntakeData
from models.schemas.partial_profile import PartialProfile
from services.reconciler import is_empty, normalize_list, parse_int

_PLACEHOLDER_COMPANIES = frozenset({"unknown", "unbekannt", "n/a", "na", "none", "-"})

_TEAM_SIZE_RE = re.compile(
    r"(\d+)\s*(?:-|\s)?\s*(?:person|people|member|engineer|developer|köpfig)",
    re.IGNORECASE,
)

# Shared job-parse schema keys that map 1:1 onto PartialProfile
_JOB_PARSE_DIRECT = (
    "title", "description", "requirements", "location", "remote_type",
    "employment_type", "experience_level", "salary_min", "salary_max",
    "skills", "must_haves", "nice_to_haves", "team_size", "reports_to",
    "core_hours", "remote_days", "daily_routine", "company_culture",
    "career_path", "hiring_urgency", "vacancy_reason", "hiring_deadline_weeks",
    "industry",
)


def _clean_company(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    name = value.strip()
    if name.lower() in _PLACEHOLDER_COMPANIES:
        return None
    return name or None


def _size_band(value: Any) -> str | None:
    if isinstance(value, str) and value.strip() in COMPANY_SIZE_BANDS:
        return value.strip()
    return None


def _level_from_years(years: Any) -> str | None:
    """Map minimum years of experience onto an experience level."""
    value = parse_int(years)
    if value is None:
        return None
    if value < 2:
        return "junior"
    if value < 5:
        return "mid"
    if value < 8:
        return "senior"
    return "lead"


def _adapt_job_parse(raw: dict) -> PartialProfile:
    data = {key: raw.get(key) for key in _JOB_PARSE_DIRECT}
    data["company_name"] = _clean_company(raw.get("company_name"))
    data["benefits"] = raw.get("benefits_extracted")
    data["company_size_band"] = _size_band(raw.get("company_size_estimate"))
    return PartialProfile(**data)


def adapt_from_url_parse(raw: dict) -> PartialProfile:
    return _adapt_job_parse(raw)


def adapt_from_text_parse(raw: dict) -> PartialProfile:
    return _adapt_job_parse(raw)


def adapt_from_pdf_parse(raw: dict) -> PartialProfile:
    """Map the document-parse shape (company, technical_skills, ...) onto PartialProfile."""
    requirements = normalize_list(raw.get("requirements"))

    team_size = None
    team_info = raw.get("team_info")
    if isinstance(team_info, str):
        m = _TEAM_SIZE_RE.search(team_info)
        if m:
            team_size = m.group(1)

    return PartialProfile(
        title=raw.get("title"),
        company_name=_clean_company(raw.get("company")),
        description=raw.get("description"),
        requirements="\n".join(requirements) or None,
        location=raw.get("location"),
        remote_type=raw.get("remote_policy"),
        employment_type=raw.get("employment_type"),
        experience_level=raw.get("seniority_level") or _level_from_years(raw.get("experience_years_min")),
        salary_min=raw.get("salary_min"),
        salary_max=raw.get("salary_max"),
        skills=raw.get("technical_skills"),
        must_haves=requirements,
        nice_to_haves=raw.get("nice_to_have"),
        benefits=raw.get("benefits"),
        company_culture=raw.get("company_culture"),
        industry=raw.get("industry"),
        team_size=team_size,
    )


def adapt_from_briefing(extracted: ExtractedIntakeData) -> PartialProfile:
    """Map briefing extraction keys onto PartialProfile."""
    decision_makers = extracted.decision_makers
    if isinstance(decision_makers, (list, tuple)):
        decision_makers_count = len(normalize_list(decision_makers)) or None
    else:
        decision_makers_count = decision_makers

    return PartialProfile(
        team_size=extracted.team_size,
        core_hours=extracted.core_hours,
        remote_days=extracted.remote_days,
        company_culture=extracted.company_culture,
        career_path=extracted.career_path,
        vacancy_reason=extracted.vacancy_reason,
        hiring_deadline_weeks=extracted.hiring_deadline_weeks,
        candidates_in_pipeline=extracted.candidates_in_pipeline,
        decision_makers_count=decision_makers_count,
        daily_routine=extracted.daily_routine,
        must_haves=extracted.must_have_criteria,
        nice_to_haves=extracted.nice_to_have_criteria,
        hiring_urgency=extracted.hiring_urgency,
        reports_to=extracted.reports_to,
        salary_min=extracted.salary_min,
        salary_max=extracted.salary_max,
    )


def has_usable_data(profile: PartialProfile) -> bool:
    """An import is usable if it yields a title, a company or a description."""
    return any(
        not is_empty(v) for v in (profile.title, profile.company_name, profile.description)
    )
