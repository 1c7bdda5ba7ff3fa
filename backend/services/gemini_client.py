"""Google Gemini API wrapper with error handling."""

import asyncio
import json
import logging

from google import genai
from google.genai import types

from config import settings

logger = logging.getLogger(__name__)

_client: genai.Client | None = None


def get_client() -> genai.Client | None:
    global _client
    if not settings.gemini_api_key:
        logger.warning("No GEMINI_API_KEY set - Gemini features disabled")
        return None
    if _client is None:
        _client = genai.Client(api_key=settings.gemini_api_key)
    return _client


def _strip_code_fences(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else text[3:]
        if text.endswith("```"):
            text = text[:-3]
        text = text.strip()
    return text


async def generate_json(
    prompt: str,
    timeout: float | None = None,
    temperature: float = 0.2,
) -> dict | None:
    """Send a prompt to Gemini and parse the JSON response.

    Returns None when Gemini is not configured, the call fails, times out,
    or the answer is not a JSON object.
    """
    client = get_client()
    if client is None:
        return None

    try:
        response = await asyncio.wait_for(
            client.aio.models.generate_content(
                model=settings.gemini_model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    temperature=temperature,
                    max_output_tokens=4096,
                    response_mime_type="application/json",
                ),
            ),
            timeout=timeout,
        )

        data = json.loads(_strip_code_fences(response.text or ""))
        if not isinstance(data, dict):
            logger.error("Gemini returned JSON of type %s, expected object", type(data).__name__)
            return None
        return data

    except asyncio.TimeoutError:
        logger.warning("Gemini call timed out after %ss", timeout)
        return None
    except json.JSONDecodeError as e:
        logger.error("Failed to parse Gemini response as JSON: %s", e)
        return None
    except Exception as e:
        logger.error("Gemini API error: %s", e)
        return None
