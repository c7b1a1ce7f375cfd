"""Job search flow: profile skills -> job matches -> skill gap notifications.

Pipeline:
1. Load the caller's CV profile (missing profile is a precondition failure)
2. Synthesize matches from the AI mentor prompt (AI failures give [])
3. Derive and store skill gap notifications (store failures are logged only)
4. Return the matches exactly as synthesized
"""

import logging

from models.schemas.job_match import JobMatchCandidate
from services import job_matcher, skill_gap
from services.gemini_client import TextGenerator
from services.notification_store import NotificationStore
from services.profile_store import InMemoryProfileStore

logger = logging.getLogger(__name__)


class ProfileNotFoundError(Exception):
    """The user has no CV profile to search with."""


async def search_jobs(
    user_id: str,
    query: str | None,
    profiles: InMemoryProfileStore,
    notifications: NotificationStore,
    generator: TextGenerator,
) -> list[JobMatchCandidate]:
    profile = await profiles.get_profile(user_id)
    if profile is None:
        raise ProfileNotFoundError(user_id)

    user_skills = profile.skill_names()
    query = job_matcher.normalize_query(query)
    matches = await job_matcher.synthesize(user_id, query, user_skills, generator)

    try:
        await skill_gap.aggregate(user_id, query, matches, user_skills, notifications)
    except Exception:
        # Notification faults never fail a search whose matches are computed
        logger.exception("Skill gap aggregation failed for user %s", user_id)

    return matches
