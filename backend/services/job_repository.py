"""Persistence collaborator: one insert per saved draft."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from models.orm import JobRecord
from models.schemas.client_context import ClientContext
from models.schemas.job_draft import INTAKE_FIELDS, JobDraft
from services.errors import PersistenceFailure

logger = logging.getLogger(__name__)

# Draft fields stored as top-level columns; intake fields go into intake_data
_COLUMN_FIELDS = (
    "title", "company_name", "description", "requirements", "location",
    "remote_type", "employment_type", "experience_level", "salary_min",
    "salary_max", "skills", "must_haves", "nice_to_haves", "benefits",
    "industry", "company_size_band", "funding_stage", "tech_environment",
    "hiring_urgency",
)


def to_record(
    context: ClientContext,
    draft: JobDraft,
    status: str,
    completeness_score: int,
) -> JobRecord:
    """Flatten a draft into the canonical jobs row."""
    data = draft.model_dump()
    return JobRecord(
        client_id=context.client_id,
        status=status,
        intake_completeness=completeness_score,
        intake_data={f: data[f] for f in INTAKE_FIELDS if data[f] is not None},
        **{f: data[f] for f in _COLUMN_FIELDS},
    )


class JobRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def insert_job(
        self,
        context: ClientContext,
        draft: JobDraft,
        status: str,
        completeness_score: int,
    ) -> str:
        """Insert the job and return its id. Raises PersistenceFailure."""
        record = to_record(context, draft, status, completeness_score)
        try:
            self.session.add(record)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Failed to insert job for client %s: %s", context.client_id, e)
            raise PersistenceFailure("Failed to save the job. Please try again.") from e

        logger.info("Saved job %s as %s for client %s", record.id, status, context.client_id)
        return record.id
