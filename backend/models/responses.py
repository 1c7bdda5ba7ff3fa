from typing import Any

from pydantic import BaseModel

from models.schemas.job_draft import JobDraft


class QuickQuestionOption(BaseModel):
    value: str
    label: str


class QuickQuestion(BaseModel):
    field: str
    question: str
    type: str
    options: list[QuickQuestionOption] = []
    placeholder: str | None = None


class IntakeSnapshot(BaseModel):
    session_id: str
    state: str
    version: int = 0
    draft: JobDraft = JobDraft()
    filled_field_count: int = 0
    completeness_score: int = 0
    missing_fields: list[str] = []
    quick_questions: list[QuickQuestion] = []
    # Narrative coverage reported by the briefing extraction, separate from completeness_score
    briefing_completeness: int | None = None
    briefing_fields_found: int | None = None
    briefing_total_fields: int | None = None
    enrichment_status: str = "idle"
    last_error: dict[str, Any] | None = None


class SaveResponse(BaseModel):
    job_id: str
    status: str
