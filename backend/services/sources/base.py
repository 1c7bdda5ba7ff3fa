"""Abstract base class for all job source parsers."""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any

from config import settings
from models.schemas.partial_profile import PartialProfile
from services.errors import ExtractionFailure
from services.reconciler import populated_fields
from services.sources.adapters import has_usable_data

logger = logging.getLogger(__name__)


class BaseSourceParser(ABC):
    """Base class for job posting extraction sources.

    Subclasses must implement:
        - source_name: identifier used in the registry
        - extract(payload): call the extraction service, return its raw dict
        - adapt(raw): map the raw dict onto PartialProfile
    """

    source_name: str = ""

    @abstractmethod
    async def extract(self, payload: Any) -> dict | None:
        """Run extraction. Returns None when the service yields nothing."""

    @abstractmethod
    def adapt(self, raw: dict) -> PartialProfile:
        """Map this source's raw output onto the shared profile shape."""

    async def parse(self, payload: Any) -> PartialProfile:
        """Extract and adapt, raising ExtractionFailure on any unusable outcome."""
        try:
            raw = await asyncio.wait_for(
                self.extract(payload),
                timeout=settings.extraction_timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning("%s extraction timed out", self.source_name)
            raise ExtractionFailure("Import timed out. Please try again.") from None

        if not raw:
            raise ExtractionFailure("No job details could be extracted. Please try again.")

        profile = self.adapt(raw)
        if not has_usable_data(profile):
            raise ExtractionFailure("The source did not contain a recognizable job posting.")

        logger.info(
            "%s import extracted %d fields",
            self.source_name,
            len(populated_fields(profile)),
        )
        return profile
