"""Google Gemini text generation with a deterministic offline fallback.

Every outbound AI call in the backend goes through a ``TextGenerator``.
``get_generator()`` picks the implementation once, from the configured
credential: ``GeminiTextGenerator`` when a usable API key is present,
``FallbackTextGenerator`` otherwise. Neither implementation raises from
``generate``.
"""

import logging
import re
from abc import ABC, abstractmethod

from google import genai
from google.genai import types

from config import settings

logger = logging.getLogger(__name__)

# Returned for prompts that ask for a list, so parsing downstream yields []
EMPTY_LIST_MARKER = "[]"

_PLACEHOLDER_KEY_FRAGMENT = "your_actual_key"
_STRUCTURED_HINTS = ("json", "array")
_INPUT_BLOCK_RE = re.compile(r"^---\s*$\n(.*?)\n^---\s*$", re.MULTILINE | re.DOTALL)
_WHITESPACE_RE = re.compile(r"\s+")


def has_usable_key(api_key: str | None = None) -> bool:
    """True when the key is set and is not the .env.example placeholder."""
    key = settings.gemini_api_key if api_key is None else api_key
    return bool(key) and _PLACEHOLDER_KEY_FRAGMENT not in key


def expects_structured(prompt: str) -> bool:
    """Whether the prompt's instructions ask for JSON / list output.

    Text inside ``---`` input blocks is ignored so user content mentioning
    JSON cannot flip the mode.
    """
    lowered = _INPUT_BLOCK_RE.sub("", prompt).lower()
    return any(hint in lowered for hint in _STRUCTURED_HINTS)


def fallback_text(prompt: str) -> str:
    """Deterministic stand-in for a model reply.

    Structured prompts get the empty list marker. Free-text prompts get the
    first ``---`` delimited input block (or the whole prompt) back with
    whitespace collapsed and the first letter capitalized.
    """
    if expects_structured(prompt):
        return EMPTY_LIST_MARKER
    block = _INPUT_BLOCK_RE.search(prompt)
    text = block.group(1) if block else prompt
    text = _WHITESPACE_RE.sub(" ", text).strip()
    return text[:1].upper() + text[1:]


class TextGenerator(ABC):
    """Prompt in, raw text out."""

    live: bool = False

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """Return the reply text. Must not raise."""


class FallbackTextGenerator(TextGenerator):
    live = False

    async def generate(self, prompt: str) -> str:
        return fallback_text(prompt)


class GeminiTextGenerator(TextGenerator):
    """Single attempt per call; any failure returns ``fallback_text(prompt)``."""

    live = True

    def __init__(
        self,
        client: genai.Client,
        model: str | None = None,
        temperature: float | None = None,
        max_output_tokens: int | None = None,
    ) -> None:
        self._client = client
        self._model = model or settings.gemini_model
        self._config = types.GenerateContentConfig(
            temperature=settings.gemini_temperature if temperature is None else temperature,
            max_output_tokens=max_output_tokens or settings.gemini_max_output_tokens,
        )

    async def generate(self, prompt: str) -> str:
        try:
            response = await self._client.aio.models.generate_content(
                model=self._model,
                contents=prompt,
                config=self._config,
            )
            text = response.text
        except Exception as e:
            logger.error("Gemini API error: %s", e)
            return fallback_text(prompt)

        if not isinstance(text, str) or not text.strip():
            logger.error("Gemini returned an empty or malformed response")
            return fallback_text(prompt)
        return text.strip()


_generator: TextGenerator | None = None


def build_generator(api_key: str | None = None) -> TextGenerator:
    key = settings.gemini_api_key if api_key is None else api_key
    if not has_usable_key(key):
        logger.warning("No usable GEMINI_API_KEY set - using offline fallback generator")
        return FallbackTextGenerator()
    logger.info("Gemini text generation enabled (model=%s)", settings.gemini_model)
    return GeminiTextGenerator(genai.Client(api_key=key))


def get_generator() -> TextGenerator:
    global _generator
    if _generator is None:
        _generator = build_generator()
    return _generator


def reset_generator() -> None:
    """Drop the cached generator so the next call re-reads settings."""
    global _generator
    _generator = None
