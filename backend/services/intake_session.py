"""Intake session: one JobDraft moving through selection -> importing -> review -> submitting.

The session owns the draft and is its only writer. Background enrichment is
tagged with the draft version it was requested against; a result that comes
back after a restart or a new import is dropped.
"""

import asyncio
import logging
import uuid
from typing import Any, Awaitable, Callable, Literal

from config import settings
from models.schemas.client_context import ClientContext
from models.schemas.enrichment_patch import EnrichmentPatch
from models.schemas.intake_briefing import IntakeExtractionResult
from models.schemas.job_draft import JobDraft
from models.schemas.partial_profile import PartialProfile
from services import completeness
from services.briefing import extract_briefing
from services.enrichment import apply_enrichment, enrich
from services.errors import ExtractionFailure, IntakeError, InvalidTransition, ValidationFailure
from services.publish_gate import SaveMode, VerificationChecker, check_save
from services.reconciler import (
    apply_user_edits,
    count_filled,
    is_empty,
    populated_fields,
    reconcile,
)
from services.sources.adapters import adapt_from_briefing
from services.sources.base import BaseSourceParser
from services.sources.registry import get_parser

logger = logging.getLogger(__name__)

SessionState = Literal["selection", "importing", "review", "submitting"]
EnrichmentStatus = Literal["idle", "pending", "applied", "failed"]

Enricher = Callable[[JobDraft], Awaitable[EnrichmentPatch | None]]
BriefingExtractor = Callable[[str, JobDraft], Awaitable[IntakeExtractionResult]]


class IntakeSession:
    def __init__(
        self,
        client_id: str,
        parser_getter: Callable[[str], BaseSourceParser] = get_parser,
        enricher: Enricher = enrich,
        briefing_extractor: BriefingExtractor = extract_briefing,
    ) -> None:
        self.session_id = uuid.uuid4().hex
        self.client_id = client_id
        self.state: SessionState = "selection"
        self.version = 0
        self.draft = JobDraft()
        self.filled_field_count = 0
        self.briefing: IntakeExtractionResult | None = None
        self.enrichment_status: EnrichmentStatus = "idle"
        self.last_error: dict | None = None
        self.job_id: str | None = None

        # Fields set by a primary import, a quick answer or a user edit
        self.confirmed: set[str] = set()

        self._get_parser = parser_getter
        self._enricher = enricher
        self._briefing_extractor = briefing_extractor
        self._enrichment_task: asyncio.Task | None = None
        self._background: set[asyncio.Task] = set()
        self._enriched_version: int | None = None

    def _require(self, *states: SessionState) -> None:
        if self.state not in states:
            raise InvalidTransition(
                f"Cannot do this while the session is in '{self.state}'."
            )

    # ------------------------------------------------------------------
    # Primary import
    # ------------------------------------------------------------------

    async def import_source(self, source: str, payload: Any) -> None:
        """selection -> importing -> review, or back to selection on failure."""
        self._require("selection")
        self.state = "importing"
        self.last_error = None
        logger.info("Session %s importing from %s", self.session_id, source)

        try:
            profile = await self._get_parser(source).parse(payload)
        except ExtractionFailure as e:
            self.state = "selection"
            self.last_error = e.to_dict()
            logger.warning("Session %s import from %s failed: %s", self.session_id, source, e.message)
            raise
        except Exception:
            self.state = "selection"
            raise

        self.version += 1
        self.draft, self.filled_field_count = reconcile(self.draft, profile)
        self.confirmed.update(populated_fields(profile))
        self.state = "review"
        logger.info(
            "Session %s in review (version %d, %d fields auto-filled)",
            self.session_id,
            self.version,
            self.filled_field_count,
        )
        self._schedule_enrichment()

    def restart(self) -> None:
        """Throw the draft away and go back to source selection."""
        self._require("selection", "review")
        self.version += 1
        self.state = "selection"
        self.draft = JobDraft()
        self.confirmed.clear()
        self.filled_field_count = 0
        self.briefing = None
        self.enrichment_status = "idle"
        self.last_error = None
        logger.info("Session %s restarted (version %d)", self.session_id, self.version)

    # ------------------------------------------------------------------
    # Enrichment
    # ------------------------------------------------------------------

    def _schedule_enrichment(self) -> None:
        if is_empty(self.draft.title) or is_empty(self.draft.company_name):
            return
        if self._enriched_version == self.version:
            return
        self._enriched_version = self.version
        self.enrichment_status = "pending"
        self._enrichment_task = asyncio.create_task(
            self._run_enrichment(self.version, self.draft)
        )
        self._background.add(self._enrichment_task)
        self._enrichment_task.add_done_callback(self._background.discard)

    async def _run_enrichment(self, version: int, draft: JobDraft) -> None:
        try:
            patch = await asyncio.wait_for(
                self._enricher(draft),
                timeout=settings.enrichment_timeout_seconds,
            )
        except Exception as e:
            logger.warning("Enrichment for session %s failed: %r", self.session_id, e)
            if version == self.version:
                self.enrichment_status = "failed"
            return

        if version != self.version:
            logger.debug(
                "Dropping stale enrichment for session %s (version %d, now %d)",
                self.session_id,
                version,
                self.version,
            )
            return

        if patch is not None:
            self.draft, applied = apply_enrichment(self.draft, patch, self.confirmed)
            self.filled_field_count = count_filled(self.draft)
            logger.info("Session %s enrichment applied: %s", self.session_id, applied)
        self.enrichment_status = "applied"

    async def wait_for_enrichment(self) -> None:
        if self._enrichment_task is not None:
            await self._enrichment_task

    def close(self) -> None:
        """Cancel outstanding background work. The session is not used afterwards."""
        for task in list(self._background):
            task.cancel()
        self._background.clear()

    # ------------------------------------------------------------------
    # Additive augmentation and user edits
    # ------------------------------------------------------------------

    async def apply_briefing(self, briefing_text: str) -> None:
        self._require("review")
        version = self.version
        try:
            result = await self._briefing_extractor(briefing_text, self.draft)
        except ExtractionFailure as e:
            self.last_error = e.to_dict()
            raise

        if version != self.version:
            logger.debug("Dropping stale briefing for session %s", self.session_id)
            return

        self.draft, self.filled_field_count = reconcile(
            self.draft, adapt_from_briefing(result.extracted_data), additive=True
        )
        self.briefing = result
        self.last_error = None
        self._schedule_enrichment()

    def answer_questions(self, answers: dict[str, Any]) -> None:
        self._require("review")
        for field in answers:
            if field not in completeness.QUICK_QUESTION_FIELDS:
                raise ValidationFailure(field, f"'{field}' is not a quick question.")

        profile = PartialProfile(**answers)
        self.draft, self.filled_field_count = reconcile(self.draft, profile, additive=True)
        self.confirmed.update(populated_fields(profile))

    def edit_fields(self, changes: dict[str, Any]) -> list[str]:
        self._require("review")
        self.draft, changed = apply_user_edits(self.draft, changes)
        self.confirmed.update(changed)
        self.filled_field_count = count_filled(self.draft)
        self._schedule_enrichment()
        return changed

    # ------------------------------------------------------------------
    # Save
    # ------------------------------------------------------------------

    async def save(
        self,
        mode: SaveMode,
        context: ClientContext,
        verification: VerificationChecker,
        repository,
    ) -> str:
        """review -> submitting -> persisted. Any failure returns to review."""
        self._require("review")
        self.state = "submitting"
        try:
            await check_save(self.draft, mode, context, verification)
            job_id = await repository.insert_job(
                context, self.draft, mode, completeness.score(self.draft)
            )
        except IntakeError as e:
            self.state = "review"
            self.last_error = e.to_dict()
            raise
        except Exception:
            self.state = "review"
            raise

        self.job_id = job_id
        logger.info("Session %s saved job %s as %s", self.session_id, job_id, mode)
        return job_id

    def snapshot(self) -> dict:
        briefing = self.briefing
        return {
            "session_id": self.session_id,
            "state": self.state,
            "version": self.version,
            "draft": self.draft.model_dump(),
            "filled_field_count": self.filled_field_count,
            "completeness_score": completeness.score(self.draft),
            "missing_fields": completeness.missing_fields(self.draft),
            "quick_questions": completeness.quick_questions(self.draft),
            "briefing_completeness": briefing.completeness if briefing else None,
            "briefing_fields_found": briefing.fields_found if briefing else None,
            "briefing_total_fields": briefing.total_fields if briefing else None,
            "enrichment_status": self.enrichment_status,
            "last_error": self.last_error,
        }
