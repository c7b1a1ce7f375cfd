"""Skill gap notifications derived from one search's job matches.

Two kinds, both of type ``skill_gap``:

1. Per-job insight: a match scoring above INSIGHT_MATCH_THRESHOLD that carries
   a mentorship insight.
2. Market demand alert: a missing skill (not already on the user's profile)
   that shows up in at least DEMAND_ALERT_MIN_OCCURRENCES matches.

The tally is rebuilt on every call; nothing is read back from the store and
repeated alerts across searches are expected.
"""

import asyncio
import logging
from collections import Counter

from models.schemas.job_match import JobMatchCandidate
from models.schemas.notification import NewNotification, Notification
from services.notification_store import NotificationStore

logger = logging.getLogger(__name__)

# Tunable policy, not load-bearing
INSIGHT_MATCH_THRESHOLD = 70
DEMAND_ALERT_MIN_OCCURRENCES = 2

INSIGHT_TITLE = "AI Insight: {title}"
DEMAND_TITLE = "Market Demand Alert"
DEMAND_MESSAGE = (
    'Multiple current results for "{query}" ({count} of {total}) require {skill}. '
    "We recommend updating your CV with this skill to improve global visibility."
)


def tally_missing_skills(
    matches: list[JobMatchCandidate],
    user_skills: list[str],
) -> Counter:
    """Count, per lower-cased skill, how many matches list it as missing.

    Skills the user already has never count, and a skill repeated within one
    match counts once for that match.
    """
    owned = {s.strip().lower() for s in user_skills}
    tally: Counter = Counter()
    for match in matches:
        missing = {s.strip().lower() for s in match.missing_skills} - owned
        missing.discard("")
        tally.update(missing)
    return tally


def build_insight_notifications(
    user_id: str,
    matches: list[JobMatchCandidate],
) -> list[NewNotification]:
    drafts = []
    for match in matches:
        if match.match_percentage is None or match.match_percentage <= INSIGHT_MATCH_THRESHOLD:
            continue
        if not match.insight or not match.insight.strip():
            continue
        drafts.append(
            NewNotification(
                user_id=user_id,
                type="skill_gap",
                title=INSIGHT_TITLE.format(title=match.title or "Untitled role"),
                message=match.insight,
            )
        )
    return drafts


def build_demand_notifications(
    user_id: str,
    query: str,
    tally: Counter,
    total_matches: int,
) -> list[NewNotification]:
    return [
        NewNotification(
            user_id=user_id,
            type="skill_gap",
            title=DEMAND_TITLE,
            message=DEMAND_MESSAGE.format(
                count=count, total=total_matches, query=query, skill=skill.upper()
            ),
        )
        for skill, count in tally.items()
        if count >= DEMAND_ALERT_MIN_OCCURRENCES
    ]


async def aggregate(
    user_id: str,
    query: str,
    matches: list[JobMatchCandidate],
    user_skills: list[str],
    store: NotificationStore,
) -> list[Notification]:
    """Write this search's skill gap notifications; return the ones stored.

    All writes are issued together and awaited together. A failed write is
    logged and skipped; it never fails the caller.
    """
    tally = tally_missing_skills(matches, user_skills)
    drafts = build_insight_notifications(user_id, matches) + build_demand_notifications(
        user_id, query, tally, len(matches)
    )
    if not drafts:
        return []

    results = await asyncio.gather(
        *(store.create(draft) for draft in drafts), return_exceptions=True
    )

    created: list[Notification] = []
    for draft, result in zip(drafts, results):
        if isinstance(result, BaseException):
            logger.error("Failed to store notification %r for user %s: %s", draft.title, user_id, result)
        else:
            created.append(result)

    logger.info(
        "Skill gap pass for user %s: %d/%d notifications stored (%d demand skills tallied)",
        user_id,
        len(created),
        len(drafts),
        len(tally),
    )
    return created
