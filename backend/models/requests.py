from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)


class OptimizeTextRequest(CamelModel):
    content: str = Field(..., min_length=1, max_length=10000, description="Text to rewrite")
    type: Literal["summary", "achievement", "experience"] = "summary"


class CoverLetterRequest(CamelModel):
    job_id: str = Field(..., min_length=1, description="Job id of a tracked application")
    job_description: str = Field("", max_length=10000)


class JobMatchAnalysisRequest(CamelModel):
    user_skills: list[str] = []
    job_requirements: list[str] = []
    job_description: str = Field("", max_length=10000)


class CvProfileRequest(CamelModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    phone: str | None = None
    location: str | None = None
    linkedin_url: str | None = None
    portfolio_url: str | None = None
    summary: str | None = None


class ApplicationCreateRequest(CamelModel):
    job_id: str | int | None = None
    title: str = Field(..., min_length=1)
    company: str = Field(..., min_length=1)
    location: str | None = None


class ApplicationUpdateRequest(CamelModel):
    status: str | None = None
    notes: str | None = None
    cover_letter: str | None = None
