import logging

from config import settings
from models.schemas.partial_profile import PartialProfile
from services import gemini_client, page_fetcher, prompt_builder
from services.sources.adapters import adapt_from_url_parse
from services.sources.base import BaseSourceParser

logger = logging.getLogger(__name__)


class UrlSourceParser(BaseSourceParser):
    source_name = "url"

    async def extract(self, payload: str) -> dict | None:
        content = await page_fetcher.fetch_page_text(payload)
        if not content:
            # Let the LLM work from the URL itself (slugs often carry title/company)
            logger.info("Falling back to URL-only analysis for %s", payload)
            content = f"Job posting URL: {payload}"

        prompt = prompt_builder.build_job_parse_prompt(content)
        return await gemini_client.generate_json(
            prompt, timeout=settings.extraction_timeout_seconds
        )

    def adapt(self, raw: dict) -> PartialProfile:
        return adapt_from_url_parse(raw)
