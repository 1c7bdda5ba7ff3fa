from config import settings
from models.schemas.partial_profile import PartialProfile
from services import gemini_client, prompt_builder
from services.sources.adapters import adapt_from_text_parse
from services.sources.base import BaseSourceParser


class TextSourceParser(BaseSourceParser):
    source_name = "text"

    async def extract(self, payload: str) -> dict | None:
        prompt = prompt_builder.build_job_parse_prompt(payload.strip())
        return await gemini_client.generate_json(
            prompt, timeout=settings.extraction_timeout_seconds
        )

    def adapt(self, raw: dict) -> PartialProfile:
        return adapt_from_text_parse(raw)
