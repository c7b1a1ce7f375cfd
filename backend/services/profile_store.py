"""CV profile storage (in-memory), one profile per user."""

import logging
from datetime import datetime, timezone
from uuid import uuid4

from models.schemas.cv_profile import CvProfile, Skill

logger = logging.getLogger(__name__)


class InMemoryProfileStore:
    """One profile per user, keyed by user id."""

    def __init__(self) -> None:
        self._profiles: dict[str, CvProfile] = {}

    async def get_profile(self, user_id: str) -> CvProfile | None:
        return self._profiles.get(user_id)

    async def upsert_profile(self, user_id: str, data: dict) -> CvProfile:
        now = datetime.now(timezone.utc)
        existing = self._profiles.get(user_id)
        if existing is None:
            profile = CvProfile(id=uuid4().hex, user_id=user_id, created_at=now, updated_at=now, **data)
            logger.info("Created CV profile for user %s", user_id)
        else:
            profile = existing.model_copy(update={**data, "updated_at": now})
        self._profiles[user_id] = profile
        return profile

    async def replace_skills(self, user_id: str, names: list[str]) -> list[Skill] | None:
        """Replace the skill list. Blank names are dropped. None if the user has no profile."""
        profile = self._profiles.get(user_id)
        if profile is None:
            return None
        skills = [Skill(id=uuid4().hex, name=name.strip()) for name in names if name and name.strip()]
        self._profiles[user_id] = profile.model_copy(
            update={"skills": skills, "updated_at": datetime.now(timezone.utc)}
        )
        return skills


_store: InMemoryProfileStore | None = None


def get_store() -> InMemoryProfileStore:
    global _store
    if _store is None:
        _store = InMemoryProfileStore()
    return _store
