import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from openai import OpenAI

from .errors import ConfigurationError
from .settings import gemini_api_base, gemini_api_key, gemini_model


logger = logging.getLogger(__name__)


def _llm_client_ok() -> bool:
    return bool(gemini_api_key())


def warn_if_unconfigured() -> bool:
    """Log a warning when no API key is set. Startup continues either way."""
    if _llm_client_ok():
        return True
    logger.warning("GEMINI_API_KEY environment variable is not set. Gemini API calls will fail.")
    return False


@dataclass
class GenerationResponse:
    text: str
    raw: Any = None


class GeminiClient:
    """Gemini through its OpenAI-compatible endpoint, JSON mode with a response schema."""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None, base_url: Optional[str] = None):
        self.api_key = api_key or gemini_api_key()
        self.model = model or gemini_model()
        self.base_url = base_url or gemini_api_base()
        self._client = None

    def _get_client(self) -> OpenAI:
        if not self.api_key:
            raise ConfigurationError("Gemini belum dikonfigurasi: isi GEMINI_API_KEY di config.py atau variabel lingkungan.")
        if self._client is None:
            self._client = OpenAI(api_key=self.api_key, base_url=self.base_url)
        return self._client

    def generate_content(self, prompt: str, response_schema: Dict[str, Any]) -> GenerationResponse:
        client = self._get_client()
        resp = client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            response_format={
                "type": "json_schema",
                "json_schema": {"name": "itinerary", "schema": response_schema},
            },
        )
        content = resp.choices[0].message.content or ""
        logger.debug("Gemini returned %d characters", len(content))
        return GenerationResponse(text=content, raw=resp)
