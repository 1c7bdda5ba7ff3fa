import logging
from dataclasses import dataclass

from config import settings
from models.schemas.partial_profile import PartialProfile
from services import gemini_client, pdf_parser, prompt_builder
from services.errors import ExtractionFailure
from services.sources.adapters import adapt_from_pdf_parse
from services.sources.base import BaseSourceParser

logger = logging.getLogger(__name__)


@dataclass
class UploadedDocument:
    filename: str
    content: bytes


class FileSourceParser(BaseSourceParser):
    """PDF/DOCX job description upload."""

    source_name = "file"

    async def extract(self, payload: UploadedDocument) -> dict | None:
        try:
            text = pdf_parser.extract_document_text(payload.filename, payload.content)
        except Exception as e:
            logger.warning("Could not read %s: %s", payload.filename, e)
            raise ExtractionFailure("Could not read the uploaded document.") from e

        if not text.strip():
            raise ExtractionFailure("No text could be extracted from the document.")

        prompt = prompt_builder.build_document_parse_prompt(text)
        return await gemini_client.generate_json(
            prompt, timeout=settings.extraction_timeout_seconds
        )

    def adapt(self, raw: dict) -> PartialProfile:
        return adapt_from_pdf_parse(raw)
