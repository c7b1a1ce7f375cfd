"""Job match synthesis: mentor prompt -> text generator -> sanitized match records."""

import logging

from models.schemas.job_match import JobMatchCandidate
from services import prompt_builder, response_sanitizer
from services.gemini_client import TextGenerator, get_generator

logger = logging.getLogger(__name__)

# Tunable policy, not load-bearing
SEARCH_RESULT_COUNT = 5
DEFAULT_SEARCH_QUERY = "Remote Opportunities"


def normalize_query(query: str | None) -> str:
    return (query or "").strip() or DEFAULT_SEARCH_QUERY


async def synthesize(
    user_id: str,
    query: str | None,
    skills: list[str],
    generator: TextGenerator | None = None,
) -> list[JobMatchCandidate]:
    """Ask the mentor prompt for up to SEARCH_RESULT_COUNT jobs.

    AI-side failures (no credential, remote error, unparseable reply) all
    come back as an empty list. Order is the model's order.
    """
    generator = generator or get_generator()
    prompt = prompt_builder.build_job_search_prompt(
        normalize_query(query), skills, count=SEARCH_RESULT_COUNT
    )

    try:
        raw = await generator.generate(prompt)
    except Exception as e:
        logger.error("Text generator raised for user %s: %s", user_id, e)
        return []

    result = response_sanitizer.parse_job_matches(raw)
    if not result.ok:
        logger.warning("No usable job matches for user %s (live=%s)", user_id, generator.live)
        return []

    matches = list(result.matches[:SEARCH_RESULT_COUNT])
    logger.info("Synthesized %d job matches for user %s", len(matches), user_id)
    return matches
