"""Draft/Publish gate: decides whether a draft may be saved in a given mode."""

from typing import Literal, Protocol

from models.schemas.client_context import ClientContext
from models.schemas.job_draft import JobDraft
from services.errors import ValidationFailure
from services.reconciler import is_empty

SaveMode = Literal["draft", "pending_approval"]


class VerificationChecker(Protocol):
    async def can_publish_jobs(self, client_id: str) -> bool: ...


def validate_for_save(draft: JobDraft, mode: SaveMode) -> None:
    """Raise ValidationFailure naming the first failing constraint."""
    if is_empty(draft.title):
        raise ValidationFailure("title", "A job title is required.")
    if is_empty(draft.company_name):
        raise ValidationFailure("company_name", "A company name is required.")

    if mode == "draft":
        return

    if draft.salary_min is None:
        raise ValidationFailure("salary_min", "A minimum salary is required to submit for approval.")
    if draft.salary_max is None:
        raise ValidationFailure("salary_max", "A maximum salary is required to submit for approval.")
    if draft.salary_min >= draft.salary_max:
        raise ValidationFailure("salary_range", "The minimum salary must be lower than the maximum salary.")


async def check_publish_permission(context: ClientContext, verification: VerificationChecker) -> None:
    if not await verification.can_publish_jobs(context.client_id):
        raise ValidationFailure(
            "verification",
            "Complete your account verification (terms and contract) before submitting jobs for approval.",
        )


async def check_save(
    draft: JobDraft,
    mode: SaveMode,
    context: ClientContext,
    verification: VerificationChecker,
) -> None:
    validate_for_save(draft, mode)
    if mode == "pending_approval":
        await check_publish_permission(context, verification)
