"""
SQLAlchemy tables behind the persistence and verification collaborators.

Job rows are written once, at save time, from a reconciled JobDraft:
    status: draft | pending_approval
"""

import uuid

from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String, Text
from sqlalchemy.sql import func

from database import Base


class JobRecord(Base):
    """
    Persisted job posting.

    Attributes:
        id: UUID primary key
        client_id: owning client account (indexed)
        salary_min/max: yearly salary range (nullable for drafts)
        skills, must_haves, nice_to_haves, benefits, tech_environment: JSON lists
        intake_data: JSON object with narrative intake fields
        intake_completeness: completeness score snapshot at submit time (0-100)
        status: draft | pending_approval (indexed)
    """

    __tablename__ = "jobs"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    client_id = Column(String(255), nullable=False, index=True)
    title = Column(String(500), nullable=False)
    company_name = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    requirements = Column(Text, nullable=True)
    location = Column(String(500), nullable=True)
    remote_type = Column(String(20), nullable=True)
    employment_type = Column(String(20), nullable=True)
    experience_level = Column(String(20), nullable=True)
    salary_min = Column(Integer, nullable=True)
    salary_max = Column(Integer, nullable=True)
    skills = Column(JSON, nullable=False, default=list)
    must_haves = Column(JSON, nullable=False, default=list)
    nice_to_haves = Column(JSON, nullable=False, default=list)
    benefits = Column(JSON, nullable=False, default=list)
    industry = Column(String(100), nullable=True)
    company_size_band = Column(String(20), nullable=True)
    funding_stage = Column(String(50), nullable=True)
    tech_environment = Column(JSON, nullable=False, default=list)
    hiring_urgency = Column(String(20), nullable=False, default="standard")
    intake_data = Column(JSON, nullable=False, default=dict)
    intake_completeness = Column(Integer, nullable=False, default=0)
    status = Column(String(20), nullable=False, default="draft", index=True)
    created_at = Column(DateTime, server_default=func.now())


class ClientVerification(Base):
    """Account verification state; both flags are needed to publish jobs."""

    __tablename__ = "client_verifications"

    client_id = Column(String(255), primary_key=True)
    terms_accepted = Column(Boolean, nullable=False, default=False)
    contract_signed = Column(Boolean, nullable=False, default=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
