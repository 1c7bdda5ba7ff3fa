"""Completeness Scorer and the quick-questions gate.

The score is a weighted share of populated canonical fields, so adding a
value can only raise it and clearing one can only lower it.
"""

from models.schemas.job_draft import JobDraft
from services.reconciler import is_unset

# Weights sum to 100; every canonical field has one.
FIELD_WEIGHTS: dict[str, int] = {
    "title": 10,
    "company_name": 10,
    "description": 9,
    "requirements": 5,
    "location": 5,
    "remote_type": 3,
    "employment_type": 3,
    "experience_level": 3,
    "salary_min": 6,
    "salary_max": 6,
    "skills": 6,
    "must_haves": 4,
    "nice_to_haves": 2,
    "industry": 3,
    "company_size_band": 2,
    "funding_stage": 2,
    "tech_environment": 2,
    "team_size": 3,
    "vacancy_reason": 3,
    "candidates_in_pipeline": 2,
    "decision_makers_count": 2,
    "remote_days": 3,
    "company_culture": 3,
    "career_path": 3,
}

_TOTAL_WEIGHT = sum(FIELD_WEIGHTS.values())

QUICK_QUESTIONS: list[dict] = [
    {
        "field": "vacancy_reason",
        "question": "Why is this position open?",
        "type": "radio",
        "options": [
            {"value": "growth", "label": "Growth"},
            {"value": "succession", "label": "Succession"},
            {"value": "new_position", "label": "Newly created"},
            {"value": "restructuring", "label": "Restructuring"},
        ],
    },
    {
        "field": "hiring_urgency",
        "question": "How urgent is the hire?",
        "type": "radio",
        "options": [
            {"value": "standard", "label": "Standard (8+ weeks)"},
            {"value": "urgent", "label": "Urgent (4-8 weeks)"},
            {"value": "ASAP", "label": "ASAP (<4 weeks)"},
        ],
    },
    {
        "field": "decision_makers_count",
        "question": "How many people make the final decision?",
        "type": "radio",
        "options": [
            {"value": "1", "label": "Only me"},
            {"value": "2", "label": "HR + hiring manager"},
            {"value": "3+", "label": "Management + team"},
        ],
    },
    {
        "field": "candidates_in_pipeline",
        "question": "Candidates currently in the process?",
        "type": "radio",
        "options": [
            {"value": "0", "label": "None"},
            {"value": "1-3", "label": "1-3"},
            {"value": "4+", "label": "4 or more"},
        ],
    },
    {
        "field": "team_size",
        "question": "Size of the direct team?",
        "type": "number",
        "placeholder": "e.g. 8",
    },
    {
        "field": "remote_days",
        "question": "Remote days per week?",
        "type": "radio",
        "options": [
            {"value": "0", "label": "No remote"},
            {"value": "1-2", "label": "1-2 days"},
            {"value": "3-4", "label": "3-4 days"},
            {"value": "5", "label": "Fully remote"},
        ],
    },
]

QUICK_QUESTION_FIELDS: tuple[str, ...] = tuple(q["field"] for q in QUICK_QUESTIONS)


def score(draft: JobDraft) -> int:
    """Intake completeness, 0-100."""
    filled = sum(w for f, w in FIELD_WEIGHTS.items() if not is_unset(f, getattr(draft, f)))
    return round(100 * filled / _TOTAL_WEIGHT)


def missing_fields(draft: JobDraft) -> list[str]:
    """Quick-question fields that are empty or still at their default, in question order."""
    return [f for f in QUICK_QUESTION_FIELDS if is_unset(f, getattr(draft, f))]


def quick_questions(draft: JobDraft) -> list[dict]:
    missing = set(missing_fields(draft))
    return [q for q in QUICK_QUESTIONS if q["field"] in missing]
