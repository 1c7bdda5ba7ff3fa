"""Shared dependencies for API routes."""

from fastapi import Depends, Header, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_db
from models.schemas.client_context import ClientContext
from services.job_repository import JobRepository
from services.verification import VerificationService


def get_client_context(x_client_id: str | None = Header(default=None)) -> ClientContext:
    if not x_client_id or not x_client_id.strip():
        raise HTTPException(status_code=401, detail="Missing X-Client-Id header")
    return ClientContext(client_id=x_client_id.strip())


def get_job_repository(db: AsyncSession = Depends(get_db)) -> JobRepository:
    return JobRepository(db)


def get_verification_service(db: AsyncSession = Depends(get_db)) -> VerificationService:
    return VerificationService(db)
