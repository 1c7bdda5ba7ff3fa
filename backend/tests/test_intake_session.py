"""Tests for the intake session state machine."""

import asyncio
from unittest.mock import patch

import pytest

from config import settings
from models.schemas.client_context import ClientContext
from models.schemas.enrichment_patch import EnrichmentPatch
from models.schemas.intake_briefing import ExtractedIntakeData, IntakeExtractionResult
from models.schemas.partial_profile import PartialProfile
from services.errors import (
    EnrichmentFailure,
    ExtractionFailure,
    InvalidTransition,
    PersistenceFailure,
    ValidationFailure,
)
from services.intake_session import IntakeSession

CONTEXT = ClientContext(client_id="client-1")

PROFILE = PartialProfile(
    title="Backend Engineer",
    company_name="Acme",
    salary_min="60000",
    salary_max="80000",
    skills="Python, Go",
)


class FakeParser:
    def __init__(self, profile=None, error=None):
        self.profile = profile
        self.error = error
        self.payloads = []

    async def parse(self, payload):
        self.payloads.append(payload)
        if self.error:
            raise self.error
        return self.profile


class ControlledEnricher:
    """Enricher whose results are released by the test."""

    def __init__(self):
        self.calls = []
        self._gates = []

    async def __call__(self, draft):
        gate = asyncio.get_running_loop().create_future()
        self.calls.append(draft)
        self._gates.append(gate)
        return await gate

    async def resolve(self, index, patch):
        while len(self._gates) <= index:
            await asyncio.sleep(0)
        self._gates[index].set_result(patch)


class FakeVerification:
    def __init__(self, allowed=True):
        self.allowed = allowed

    async def can_publish_jobs(self, client_id):
        return self.allowed


class FakeRepository:
    def __init__(self, error=None):
        self.error = error
        self.inserted = []

    async def insert_job(self, context, draft, status, completeness_score):
        if self.error:
            raise self.error
        self.inserted.append((context, draft, status, completeness_score))
        return "job-1"


async def _no_enrichment(draft):
    return None


async def _settle():
    for _ in range(10):
        await asyncio.sleep(0)


def _session(parsers=None, enricher=_no_enrichment, briefing_extractor=None):
    parsers = parsers or {"text": FakeParser(PROFILE)}
    kwargs = {"parser_getter": parsers.__getitem__, "enricher": enricher}
    if briefing_extractor is not None:
        kwargs["briefing_extractor"] = briefing_extractor
    return IntakeSession("client-1", **kwargs)


class TestImport:
    @pytest.mark.asyncio
    async def test_success_moves_to_review(self):
        session = _session()
        await session.import_source("text", "pasted posting")
        assert session.state == "review"
        assert session.version == 1
        assert session.draft.title == "Backend Engineer"
        assert session.draft.skills == ["Python", "Go"]
        assert session.filled_field_count == 5
        assert {"title", "company_name", "skills"} <= session.confirmed

    @pytest.mark.asyncio
    async def test_failure_returns_to_selection_without_mutation(self):
        error = ExtractionFailure("No job details could be extracted.")
        session = _session({"url": FakeParser(error=error)})
        with pytest.raises(ExtractionFailure):
            await session.import_source("url", "https://jobs.example.com/1")
        assert session.state == "selection"
        assert session.version == 0
        assert session.draft.title is None
        assert session.last_error["error"] == "extraction_failure"
        assert session.last_error["retryable"] is True

    @pytest.mark.asyncio
    async def test_second_import_requires_restart(self):
        session = _session()
        await session.import_source("text", "pasted posting")
        with pytest.raises(InvalidTransition):
            await session.import_source("text", "another posting")

    @pytest.mark.asyncio
    async def test_restart_clears_draft(self):
        session = _session()
        await session.import_source("text", "pasted posting")
        session.restart()
        assert session.state == "selection"
        assert session.version == 2
        assert session.draft.title is None
        assert session.confirmed == set()
        assert session.filled_field_count == 0


class TestEnrichment:
    @pytest.mark.asyncio
    async def test_applied_in_background(self):
        enricher = ControlledEnricher()
        session = _session(enricher=enricher)
        await session.import_source("text", "pasted posting")
        assert session.enrichment_status == "pending"
        assert session.state == "review"

        await enricher.resolve(0, EnrichmentPatch(industry="FinTech", hiring_urgency="urgent"))
        await session.wait_for_enrichment()
        assert session.enrichment_status == "applied"
        assert session.draft.industry == "FinTech"
        assert session.draft.hiring_urgency == "urgent"
        assert session.filled_field_count == 6

    @pytest.mark.asyncio
    async def test_stale_result_is_dropped(self):
        enricher = ControlledEnricher()
        parser = FakeParser(PROFILE)
        session = _session({"text": parser}, enricher=enricher)

        await session.import_source("text", "first posting")
        first_task = session._enrichment_task
        session.restart()
        parser.profile = PartialProfile(title="Data Engineer", company_name="Beta")
        await session.import_source("text", "second posting")
        assert session.version == 3

        await enricher.resolve(0, EnrichmentPatch(industry="FinTech", company_size_band="1-50"))
        await first_task
        assert session.draft.industry is None
        assert session.draft.company_size_band is None
        assert session.enrichment_status == "pending"

        await enricher.resolve(1, EnrichmentPatch(industry="Media"))
        await session.wait_for_enrichment()
        assert session.draft.industry == "Media"
        assert session.draft.title == "Data Engineer"

    @pytest.mark.asyncio
    async def test_at_most_one_per_version(self):
        enricher = ControlledEnricher()
        session = _session(enricher=enricher)
        await session.import_source("text", "pasted posting")
        session.edit_fields({"location": "Berlin"})
        await _settle()
        assert len(enricher.calls) == 1
        await enricher.resolve(0, None)
        await session.wait_for_enrichment()

    @pytest.mark.asyncio
    async def test_waits_for_title_and_company(self):
        enricher = ControlledEnricher()
        session = _session({"text": FakeParser(PartialProfile(title="Backend Engineer"))}, enricher=enricher)
        await session.import_source("text", "pasted posting")
        await _settle()
        assert enricher.calls == []
        assert session.enrichment_status == "idle"

        session.edit_fields({"company_name": "Acme"})
        await _settle()
        assert len(enricher.calls) == 1
        await enricher.resolve(0, None)
        await session.wait_for_enrichment()

    @pytest.mark.asyncio
    async def test_failure_is_silent(self):
        async def failing(draft):
            raise EnrichmentFailure("service down")

        session = _session(enricher=failing)
        await session.import_source("text", "pasted posting")
        await session.wait_for_enrichment()
        assert session.enrichment_status == "failed"
        assert session.state == "review"
        assert session.last_error is None

    @pytest.mark.asyncio
    async def test_timeout_counts_as_failure(self):
        async def slow(draft):
            await asyncio.sleep(1)
            return EnrichmentPatch(industry="FinTech")

        session = _session(enricher=slow)
        with patch.object(settings, "enrichment_timeout_seconds", 0.01):
            await session.import_source("text", "pasted posting")
            before = session.draft
            await session.wait_for_enrichment()
        assert session.enrichment_status == "failed"
        assert session.draft == before
        assert session.draft.industry is None
        assert session.state == "review"

    @pytest.mark.asyncio
    async def test_close_cancels_pending_enrichment(self):
        enricher = ControlledEnricher()
        session = _session(enricher=enricher)
        await session.import_source("text", "pasted posting")
        await _settle()
        task = session._enrichment_task
        assert not task.done()

        session.close()
        with pytest.raises(asyncio.CancelledError):
            await task
        assert task.cancelled()
        assert session.draft.industry is None

    @pytest.mark.asyncio
    async def test_confirmed_fields_not_overwritten(self):
        enricher = ControlledEnricher()
        session = _session(enricher=enricher)
        await session.import_source("text", "pasted posting")
        session.edit_fields({"funding_stage": ""})

        await enricher.resolve(0, EnrichmentPatch(funding_stage="Seed", industry="FinTech"))
        await session.wait_for_enrichment()
        assert session.draft.funding_stage is None
        assert session.draft.industry == "FinTech"


class TestBriefingAndAnswers:
    @pytest.mark.asyncio
    async def test_briefing_merges_additively(self):
        async def extractor(text, draft):
            data = ExtractedIntakeData(team_size=8, vacancy_reason="growth", decision_makers=["CTO", "HR"])
            return IntakeExtractionResult(extracted_data=data, completeness=30, fields_found=3, total_fields=10)

        session = _session(briefing_extractor=extractor)
        await session.import_source("text", "pasted posting")
        session.edit_fields({"team_size": 5})
        await session.apply_briefing("Team of eight, growth hire, CTO and HR decide.")

        snapshot = session.snapshot()
        assert session.draft.team_size == 5
        assert session.draft.vacancy_reason == "growth"
        assert session.draft.decision_makers_count == 2
        assert snapshot["briefing_completeness"] == 30
        assert snapshot["briefing_fields_found"] == 3
        assert snapshot["briefing_completeness"] != snapshot["completeness_score"]

    @pytest.mark.asyncio
    async def test_briefing_failure_leaves_draft(self):
        async def extractor(text, draft):
            raise ExtractionFailure("Failed to extract intake data.")

        session = _session(briefing_extractor=extractor)
        await session.import_source("text", "pasted posting")
        before = session.draft
        with pytest.raises(ExtractionFailure):
            await session.apply_briefing("Team of eight, growth hire, CTO and HR decide.")
        assert session.draft == before
        assert session.state == "review"

    @pytest.mark.asyncio
    async def test_briefing_requires_review(self):
        session = _session()
        with pytest.raises(InvalidTransition):
            await session.apply_briefing("Team of eight, growth hire, CTO and HR decide.")

    @pytest.mark.asyncio
    async def test_answers_go_through_additive_merge(self):
        session = _session()
        await session.import_source("text", "pasted posting")
        assert "candidates_in_pipeline" in session.snapshot()["missing_fields"]

        session.answer_questions({"candidates_in_pipeline": "1-3", "hiring_urgency": "ASAP", "remote_days": "0"})
        snapshot = session.snapshot()
        assert session.draft.candidates_in_pipeline == 1
        assert session.draft.hiring_urgency == "ASAP"
        assert session.draft.remote_days == 0
        assert snapshot["missing_fields"] == ["vacancy_reason", "decision_makers_count", "team_size"]
        assert "hiring_urgency" in session.confirmed

    @pytest.mark.asyncio
    async def test_answers_reject_other_fields(self):
        session = _session()
        await session.import_source("text", "pasted posting")
        with pytest.raises(ValidationFailure):
            session.answer_questions({"title": "CEO"})


class TestSave:
    @pytest.mark.asyncio
    async def test_save_draft(self):
        repository = FakeRepository()
        session = _session()
        await session.import_source("text", "pasted posting")
        job_id = await session.save("draft", CONTEXT, FakeVerification(allowed=False), repository)
        assert job_id == "job-1"
        context, draft, status, completeness_score = repository.inserted[0]
        assert status == "draft"
        assert draft.title == "Backend Engineer"
        assert completeness_score == session.snapshot()["completeness_score"]

    @pytest.mark.asyncio
    async def test_validation_failure_stays_in_review(self):
        session = _session()
        await session.import_source("text", "pasted posting")
        with pytest.raises(ValidationFailure) as exc:
            await session.save("pending_approval", CONTEXT, FakeVerification(allowed=False), FakeRepository())
        assert exc.value.field == "verification"
        assert session.state == "review"
        assert session.last_error["field"] == "verification"

    @pytest.mark.asyncio
    async def test_persistence_failure_keeps_draft(self):
        session = _session()
        await session.import_source("text", "pasted posting")
        repository = FakeRepository(error=PersistenceFailure("database unavailable"))
        with pytest.raises(PersistenceFailure):
            await session.save("pending_approval", CONTEXT, FakeVerification(), repository)
        assert session.state == "review"
        assert session.draft.title == "Backend Engineer"
        assert session.last_error["retryable"] is True

        job_id = await session.save("pending_approval", CONTEXT, FakeVerification(), FakeRepository())
        assert job_id == "job-1"

    @pytest.mark.asyncio
    async def test_cannot_save_before_import(self):
        session = _session()
        with pytest.raises(InvalidTransition):
            await session.save("draft", CONTEXT, FakeVerification(), FakeRepository())
