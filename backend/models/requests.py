from typing import Any

from pydantic import BaseModel, Field, field_validator

from services.publish_gate import SaveMode


class ImportUrlRequest(BaseModel):
    url: str = Field(..., max_length=2000, description="Job posting URL")

    @field_validator("url")
    @classmethod
    def _http_url(cls, value: str) -> str:
        value = value.strip()
        if not value.lower().startswith(("http://", "https://")):
            raise ValueError("Only http(s) URLs can be imported")
        return value


class ImportTextRequest(BaseModel):
    text: str = Field(..., min_length=20, max_length=50000, description="Pasted job description")


class BriefingRequest(BaseModel):
    briefing_text: str = Field(..., min_length=20, max_length=20000, description="Free-text hiring briefing")


class AnswersRequest(BaseModel):
    answers: dict[str, Any] = Field(..., description="Quick-question field -> answer value")


class DraftEditRequest(BaseModel):
    changes: dict[str, Any] = Field(..., description="Draft field -> value typed by the user")


class SaveRequest(BaseModel):
    mode: SaveMode = "draft"
