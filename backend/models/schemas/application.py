"""Tracked job applications and their status pipeline."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

ApplicationStatus = Literal["to_apply", "applied", "interviewing", "hired"]

# Board columns, left to right
STATUS_ORDER: tuple[str, ...] = ("to_apply", "applied", "interviewing", "hired")


class Application(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    id: str
    user_id: str
    job_id: str
    title: str
    company: str
    location: str | None = None
    status: ApplicationStatus = "to_apply"
    notes: str | None = None
    cover_letter: str | None = None
    applied_date: datetime | None = None
    created_at: datetime
    updated_at: datetime
