"""Tests for intake-briefing extraction."""

from unittest.mock import AsyncMock, patch

import pytest

from models.schemas.intake_briefing import ExtractedIntakeData
from models.schemas.job_draft import JobDraft
from models.schemas.partial_profile import PartialProfile
from services.briefing import BRIEFING_COMPLETENESS_FIELDS, briefing_completeness, extract_briefing
from services.errors import ExtractionFailure
from services.reconciler import reconcile
from services.sources.adapters import adapt_from_briefing

BRIEFING = (
    "We need a senior backend developer for our team of 8 people. The old lead left, "
    "so this is a succession hire. Our CTO and HR decide. Core hours 10-16."
)

EXTRACTION = {
    "team_size": "8",
    "core_hours": "10:00-16:00",
    "vacancy_reason": "succession",
    "decision_makers": ["CTO", "HR"],
    "hiring_urgency": "hot",
    "must_have_criteria": ["Python", "PostgreSQL"],
    "nice_to_have_criteria": "Kubernetes, Terraform",
}


class TestBriefingCompleteness:
    def test_counts_narrative_fields(self):
        data = ExtractedIntakeData(team_size=5, company_culture="Flat", decision_makers=["CTO"])
        assert briefing_completeness(data) == (30, 3)

    def test_empty_values_not_counted(self):
        data = ExtractedIntakeData(team_size=None, company_culture="", decision_makers=[])
        assert briefing_completeness(data) == (0, 0)

    def test_ten_fields(self):
        assert len(BRIEFING_COMPLETENESS_FIELDS) == 10


class TestExtractBriefing:
    @pytest.mark.asyncio
    async def test_short_text_rejected(self):
        with pytest.raises(ExtractionFailure):
            await extract_briefing("too short")

    @pytest.mark.asyncio
    async def test_no_result_raises(self):
        with patch("services.gemini_client.generate_json", AsyncMock(return_value=None)):
            with pytest.raises(ExtractionFailure):
                await extract_briefing(BRIEFING)

    @pytest.mark.asyncio
    async def test_extracts_and_scores(self):
        llm = AsyncMock(return_value=EXTRACTION)
        with patch("services.gemini_client.generate_json", llm):
            result = await extract_briefing(BRIEFING, JobDraft(title="Backend Developer"))

        assert result.extracted_data.vacancy_reason == "succession"
        assert result.fields_found == 6
        assert result.total_fields == 10
        assert result.completeness == 60
        prompt = llm.await_args.args[0]
        assert "Backend Developer" in prompt


class TestBriefingMerge:
    def test_adapter_maps_keys(self):
        profile = adapt_from_briefing(ExtractedIntakeData.model_validate(EXTRACTION))
        assert profile.decision_makers_count == 2
        assert profile.must_haves == ["Python", "PostgreSQL"]
        assert profile.nice_to_haves == "Kubernetes, Terraform"

    def test_additive_merge_keeps_existing(self):
        current = JobDraft(team_size=5, must_haves=["Python"], hiring_urgency="standard")
        profile = adapt_from_briefing(ExtractedIntakeData.model_validate(EXTRACTION))
        draft, _ = reconcile(current, profile, additive=True)
        assert draft.team_size == 5
        assert draft.must_haves == ["Python", "PostgreSQL"]
        assert draft.nice_to_haves == ["Kubernetes", "Terraform"]
        assert draft.hiring_urgency == "ASAP"
        assert draft.decision_makers_count == 2

    def test_two_briefings_in_either_order(self):
        first = PartialProfile(team_size=5, company_culture="Flat hierarchy")
        second = PartialProfile(team_size=7, remote_days=2, vacancy_reason="growth")
        a, _ = reconcile(reconcile(JobDraft(), first, additive=True)[0], second, additive=True)
        b, _ = reconcile(reconcile(JobDraft(), second, additive=True)[0], first, additive=True)
        populated = lambda d: {k for k, v in d.model_dump().items() if v not in (None, [], "standard")}  # noqa: E731
        assert populated(a) == populated(b)
