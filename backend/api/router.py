import logging

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_client_context, get_job_repository, get_verification_service
from config import settings
from models.requests import (
    AnswersRequest,
    BriefingRequest,
    DraftEditRequest,
    ImportTextRequest,
    ImportUrlRequest,
    SaveRequest,
)
from models.responses import IntakeSnapshot, SaveResponse
from models.schemas.client_context import ClientContext
from services import session_store
from services.errors import (
    ExtractionFailure,
    IntakeError,
    InvalidTransition,
    PersistenceFailure,
    ValidationFailure,
)
from services.intake_session import IntakeSession
from services.job_repository import JobRepository
from services.pdf_parser import SUPPORTED_EXTENSIONS
from services.sources.file_source import UploadedDocument
from services.verification import VerificationService

logger = logging.getLogger(__name__)

router = APIRouter()
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)

_STATUS_CODES: dict[type[IntakeError], int] = {
    ExtractionFailure: 502,
    ValidationFailure: 422,
    PersistenceFailure: 503,
    InvalidTransition: 409,
}


def _http_error(error: IntakeError) -> HTTPException:
    for exc_type, status_code in _STATUS_CODES.items():
        if isinstance(error, exc_type):
            return HTTPException(status_code=status_code, detail=error.to_dict())
    return HTTPException(status_code=500, detail=error.to_dict())


def _get_session(session_id: str, context: ClientContext) -> IntakeSession:
    try:
        return session_store.get_session(session_id, context.client_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Intake session not found")


def _snapshot(session: IntakeSession) -> IntakeSnapshot:
    return IntakeSnapshot(**session.snapshot())


@router.get("/health")
async def health():
    return {
        "status": "ok",
        "gemini_configured": bool(settings.gemini_api_key),
    }


@router.post("/intake/sessions", response_model=IntakeSnapshot, status_code=201)
async def create_session(context: ClientContext = Depends(get_client_context)):
    return _snapshot(session_store.create_session(context.client_id))


@router.get("/intake/sessions/{session_id}", response_model=IntakeSnapshot)
async def get_session(session_id: str, context: ClientContext = Depends(get_client_context)):
    return _snapshot(_get_session(session_id, context))


async def _import(session: IntakeSession, source: str, payload) -> IntakeSnapshot:
    try:
        await session.import_source(source, payload)
    except IntakeError as e:
        raise _http_error(e)
    return _snapshot(session)


@router.post("/intake/sessions/{session_id}/import/url", response_model=IntakeSnapshot)
@limiter.limit(settings.import_rate_limit)
async def import_url(
    request: Request,
    session_id: str,
    body: ImportUrlRequest,
    context: ClientContext = Depends(get_client_context),
):
    return await _import(_get_session(session_id, context), "url", body.url)


@router.post("/intake/sessions/{session_id}/import/text", response_model=IntakeSnapshot)
@limiter.limit(settings.import_rate_limit)
async def import_text(
    request: Request,
    session_id: str,
    body: ImportTextRequest,
    context: ClientContext = Depends(get_client_context),
):
    return await _import(_get_session(session_id, context), "text", body.text)


@router.post("/intake/sessions/{session_id}/import/file", response_model=IntakeSnapshot)
@limiter.limit(settings.import_rate_limit)
async def import_file(
    request: Request,
    session_id: str,
    job_file: UploadFile = File(...),
    context: ClientContext = Depends(get_client_context),
):
    session = _get_session(session_id, context)

    # Validate file type
    filename = job_file.filename or ""
    if not filename.lower().endswith(SUPPORTED_EXTENSIONS):
        raise HTTPException(status_code=400, detail="Only PDF and DOCX files are accepted")

    # Read and validate size
    content = await job_file.read()
    max_bytes = settings.max_upload_size_mb * 1024 * 1024
    if len(content) > max_bytes:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Max size: {settings.max_upload_size_mb}MB",
        )

    return await _import(session, "file", UploadedDocument(filename=filename, content=content))


@router.post("/intake/sessions/{session_id}/briefing", response_model=IntakeSnapshot)
@limiter.limit(settings.import_rate_limit)
async def submit_briefing(
    request: Request,
    session_id: str,
    body: BriefingRequest,
    context: ClientContext = Depends(get_client_context),
):
    session = _get_session(session_id, context)
    try:
        await session.apply_briefing(body.briefing_text)
    except IntakeError as e:
        raise _http_error(e)
    return _snapshot(session)


@router.post("/intake/sessions/{session_id}/answers", response_model=IntakeSnapshot)
async def answer_questions(
    session_id: str,
    body: AnswersRequest,
    context: ClientContext = Depends(get_client_context),
):
    session = _get_session(session_id, context)
    try:
        session.answer_questions(body.answers)
    except IntakeError as e:
        raise _http_error(e)
    return _snapshot(session)


@router.patch("/intake/sessions/{session_id}/draft", response_model=IntakeSnapshot)
async def edit_draft(
    session_id: str,
    body: DraftEditRequest,
    context: ClientContext = Depends(get_client_context),
):
    session = _get_session(session_id, context)
    try:
        session.edit_fields(body.changes)
    except IntakeError as e:
        raise _http_error(e)
    return _snapshot(session)


@router.post("/intake/sessions/{session_id}/restart", response_model=IntakeSnapshot)
async def restart(session_id: str, context: ClientContext = Depends(get_client_context)):
    session = _get_session(session_id, context)
    try:
        session.restart()
    except IntakeError as e:
        raise _http_error(e)
    return _snapshot(session)


@router.post("/intake/sessions/{session_id}/save", response_model=SaveResponse)
async def save(
    session_id: str,
    body: SaveRequest,
    context: ClientContext = Depends(get_client_context),
    repository: JobRepository = Depends(get_job_repository),
    verification: VerificationService = Depends(get_verification_service),
):
    session = _get_session(session_id, context)
    try:
        job_id = await session.save(body.mode, context, verification, repository)
    except IntakeError as e:
        raise _http_error(e)

    session_store.discard(session_id)
    return SaveResponse(job_id=job_id, status=body.mode)
