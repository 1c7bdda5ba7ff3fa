"""Verification-status collaborator (read-only)."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from models.orm import ClientVerification

logger = logging.getLogger(__name__)


class VerificationService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def can_publish_jobs(self, client_id: str) -> bool:
        """True iff the client accepted the terms and signed the contract."""
        try:
            result = await self.session.execute(
                select(ClientVerification).where(ClientVerification.client_id == client_id)
            )
        except SQLAlchemyError as e:
            logger.error("Verification lookup failed for %s: %s", client_id, e)
            return False

        verification = result.scalar_one_or_none()
        if verification is None:
            return False
        return bool(verification.terms_accepted and verification.contract_signed)
