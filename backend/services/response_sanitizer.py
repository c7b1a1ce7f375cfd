"""Turn raw model text into structured data, degrading to an empty result."""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from models.schemas.job_match import JobMatchCandidate

logger = logging.getLogger(__name__)

_CODE_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)
_LEADING_NOISE_RE = re.compile(r"^[^{\[]+")
_TRAILING_NOISE_RE = re.compile(r"[^}\]]+$")

_EXCERPT_CHARS = 200

# json.loads pairs valid surrogate escapes; any left over cannot be encoded as UTF-8
_LONE_SURROGATE_RE = re.compile(r"[\ud800-\udfff]")


def drop_lone_surrogates(text: str) -> str:
    return _LONE_SURROGATE_RE.sub("", text)


def _drop_surrogates_deep(value: Any) -> Any:
    if isinstance(value, str):
        return drop_lone_surrogates(value)
    if isinstance(value, list):
        return [_drop_surrogates_deep(item) for item in value]
    if isinstance(value, dict):
        return {drop_lone_surrogates(k): _drop_surrogates_deep(v) for k, v in value.items()}
    return value


def strip_code_fences(text: str) -> str:
    """Remove markdown code fence markers (```json / ```) anywhere in the text."""
    return drop_lone_surrogates(_CODE_FENCE_RE.sub("", text)).strip()


def clean_structured_text(text: str) -> str:
    """Strip fences and any prose before the first ``{``/``[`` or after the last ``}``/``]``."""
    cleaned = strip_code_fences(text)
    cleaned = _LEADING_NOISE_RE.sub("", cleaned)
    cleaned = _TRAILING_NOISE_RE.sub("", cleaned)
    return cleaned.strip()


@dataclass(frozen=True)
class ParseResult:
    """Outcome of a structured parse: ``ok`` with a value, or empty."""

    ok: bool
    value: Any = None


EMPTY = ParseResult(ok=False)


def parse_json(text: str) -> ParseResult:
    """Strictly parse cleaned model text as JSON. Never raises."""
    if not isinstance(text, str):
        return EMPTY
    cleaned = clean_structured_text(text)
    if not cleaned:
        return EMPTY
    try:
        return ParseResult(ok=True, value=_drop_surrogates_deep(json.loads(cleaned)))
    except (ValueError, RecursionError) as e:
        logger.warning("AI parsing error (%s). Raw output was: %.*s", e, _EXCERPT_CHARS, text)
        return EMPTY


@dataclass(frozen=True)
class MatchParseResult:
    ok: bool
    matches: tuple[JobMatchCandidate, ...] = ()


def parse_job_matches(text: str) -> MatchParseResult:
    """Parse model text into job match records.

    The payload must be a JSON array of objects. Anything else (an object,
    a scalar, an array holding non-objects) is treated as unusable and
    yields an empty result rather than a partial one.
    """
    parsed = parse_json(text)
    if not parsed.ok or not isinstance(parsed.value, list):
        return MatchParseResult(ok=False)
    if not all(isinstance(item, dict) for item in parsed.value):
        logger.warning("AI returned a list with non-object entries; discarding")
        return MatchParseResult(ok=False)
    try:
        matches = tuple(JobMatchCandidate.model_validate(item) for item in parsed.value)
    except (ValidationError, TypeError) as e:
        logger.warning("AI job records failed validation: %s", e)
        return MatchParseResult(ok=False)
    return MatchParseResult(ok=True, matches=matches)


def parse_structured(text: str) -> list[JobMatchCandidate]:
    """Total wrapper: a list of match records, or ``[]``."""
    return list(parse_job_matches(text).matches)
