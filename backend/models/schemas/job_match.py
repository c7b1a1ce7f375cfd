"""AI search output: one candidate job per record, as returned by the model."""

import math
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

_NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")


def _coerce_text(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


class JobMatchCandidate(BaseModel):
    """A job suggested by the career mentor prompt.

    Every field may be absent in the model output. Field types are coerced
    leniently (a string "85%" becomes 85, a non-list ``missingSkills`` becomes
    an empty list) and keys the prompt never asked for are kept as-is so the
    record can be handed back to the client unchanged.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    title: str | None = None
    company: str | None = None
    match_percentage: int | float | None = None  # 0-100, fractions kept
    location: str | None = None
    reason: str | None = None
    missing_skills: list[str] = []
    insight: str | None = None

    @field_validator("title", "company", "location", "reason", "insight", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str | None:
        return _coerce_text(value)

    @field_validator("match_percentage", mode="before")
    @classmethod
    def _percentage(cls, value: Any) -> int | float | None:
        if isinstance(value, bool) or value is None:
            return None
        if isinstance(value, str):
            found = _NUMBER_RE.search(value)
            if not found:
                return None
            value = float(found.group())
        if not isinstance(value, (int, float)) or not math.isfinite(value):
            return None
        clamped = min(100, max(0, value))
        return int(clamped) if float(clamped).is_integer() else clamped

    @field_validator("missing_skills", mode="before")
    @classmethod
    def _skills(cls, value: Any) -> list[str]:
        if isinstance(value, str):
            value = value.split(",")
        if not isinstance(value, (list, tuple)):
            return []
        return [s.strip() for s in value if isinstance(s, str) and s.strip()]

    def to_payload(self) -> dict[str, Any]:
        """Serialize with the camelCase keys the client reads.

        Only keys present in the model output are emitted, explicit nulls included.
        """
        payload = self.model_dump(by_alias=True, exclude_unset=True)
        payload.update(self.model_extra or {})
        return payload
