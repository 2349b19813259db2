"""Google Gemini API wrapper with error classification."""

import json
import logging

from google import genai
from google.genai import types

from config import settings
from services.errors import LLMError, to_optimizer_error

logger = logging.getLogger(__name__)

_client: genai.Client | None = None


def is_configured() -> bool:
    return bool(settings.gemini_api_key)


def get_client() -> genai.Client | None:
    global _client
    if not settings.gemini_api_key:
        logger.warning("No GEMINI_API_KEY set - suggestion generation disabled")
        return None
    if _client is None:
        _client = genai.Client(api_key=settings.gemini_api_key)
    return _client


def parse_json_response(text: str) -> dict:
    """Parse a model reply as a JSON object, tolerating markdown code fences."""
    text = (text or "").strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else text[3:]
        if text.endswith("```"):
            text = text[:-3]
        text = text.strip()

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error("Failed to parse Gemini response as JSON: %s", e)
        raise LLMError("Failed to parse LLM response") from e
    if not isinstance(data, dict):
        logger.error("Gemini response is JSON but not an object: %s", type(data).__name__)
        raise LLMError("LLM response is not a JSON object")
    return data


async def generate_json(prompt: str, *, temperature: float | None = None) -> dict:
    """Send a prompt to Gemini and return the parsed JSON object.

    Raises an OptimizerError subclass (LLM_ERROR, RATE_LIMITED or
    LLM_TIMEOUT) instead of returning partial data.
    """
    client = get_client()
    if client is None:
        raise LLMError("LLM is not configured")

    try:
        response = await client.aio.models.generate_content(
            model=settings.gemini_model,
            contents=prompt,
            config=types.GenerateContentConfig(
                temperature=settings.llm_temperature if temperature is None else temperature,
                max_output_tokens=settings.llm_max_output_tokens,
            ),
        )
    except Exception as e:
        error = to_optimizer_error(e)
        logger.error("Gemini API error (%s): %s", error.code.value, e)
        raise error from e

    return parse_json_response(response.text)
