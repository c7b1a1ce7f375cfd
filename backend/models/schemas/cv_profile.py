"""CV profile as seen by the job search: personal info plus the skill list."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Skill(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    id: str
    name: str
    category: str | None = None
    proficiency: int = 3  # 1-5


class CvProfile(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    id: str
    user_id: str
    first_name: str
    last_name: str
    email: str
    phone: str | None = None
    location: str | None = None
    linkedin_url: str | None = None
    portfolio_url: str | None = None
    summary: str | None = None
    skills: list[Skill] = []
    created_at: datetime
    updated_at: datetime

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def skill_names(self) -> list[str]:
        """Normalized skill names: trimmed, lower-cased, first occurrence kept."""
        seen: list[str] = []
        for skill in self.skills:
            name = skill.name.strip().lower()
            if name and name not in seen:
                seen.append(name)
        return seen
