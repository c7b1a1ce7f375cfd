"""CV and application helpers backed by the text generator.

Each helper has a deterministic result when the generator is in fallback
mode or the live call degraded, so callers never see an AI error.
"""

import logging
import math

from models.responses import JobMatchAnalysis
from services import prompt_builder, response_sanitizer
from services.gemini_client import TextGenerator, fallback_text, get_generator

logger = logging.getLogger(__name__)

COVER_LETTER_SKILLS = 3


async def optimize_text(
    content: str,
    kind: str = "summary",
    generator: TextGenerator | None = None,
) -> str:
    """Rewrite a CV summary, achievement or experience entry."""
    generator = generator or get_generator()
    prompt = prompt_builder.build_optimize_prompt(content, kind)
    reply = response_sanitizer.strip_code_fences(await generator.generate(prompt))
    return reply or content.strip()


def cover_letter_template(
    job_title: str,
    company: str,
    candidate_name: str,
    skills: list[str],
) -> str:
    skills_text = ", ".join(skills[:COVER_LETTER_SKILLS]) or "my field"
    return (
        f"Dear Hiring Manager,\n\n"
        f"I am interested in the {job_title} role at {company}. "
        f"My skills in {skills_text} make me a great fit.\n\n"
        f"Best,\n{candidate_name}"
    )


async def generate_cover_letter(
    job_title: str,
    company: str,
    job_description: str,
    candidate_name: str,
    candidate_summary: str,
    skills: list[str],
    generator: TextGenerator | None = None,
) -> str:
    generator = generator or get_generator()
    if not generator.live:
        return cover_letter_template(job_title, company, candidate_name, skills)

    prompt = prompt_builder.build_cover_letter_prompt(
        job_title, company, job_description, candidate_name, candidate_summary, skills
    )
    reply = response_sanitizer.drop_lone_surrogates(await generator.generate(prompt)).strip()
    if not reply or reply == fallback_text(prompt):
        logger.warning("Cover letter generation degraded, using template")
        return cover_letter_template(job_title, company, candidate_name, skills)
    return reply


def basic_match(user_skills: list[str], job_requirements: list[str]) -> JobMatchAnalysis:
    """Case-insensitive set comparison; percentage of requirements covered."""
    owned = {s.strip().lower() for s in user_skills if s.strip()}
    required = [r.strip() for r in job_requirements if r.strip()]
    matched = [r for r in required if r.lower() in owned]
    missing = [r for r in required if r.lower() not in owned]
    percentage = round(len(matched) / len(required) * 100) if required else 0
    return JobMatchAnalysis(
        match_percentage=percentage,
        matched_skills=matched,
        missing_skills=missing,
    )


async def analyze_job_match(
    user_skills: list[str],
    job_requirements: list[str],
    job_description: str,
    generator: TextGenerator | None = None,
) -> JobMatchAnalysis:
    """AI compatibility estimate; fields the model leaves out keep the basic match values."""
    baseline = basic_match(user_skills, job_requirements)
    generator = generator or get_generator()
    if not generator.live:
        return baseline

    prompt = prompt_builder.build_match_analysis_prompt(user_skills, job_requirements, job_description)
    parsed = response_sanitizer.parse_json(await generator.generate(prompt))
    if not parsed.ok or not isinstance(parsed.value, dict):
        return baseline

    data = parsed.value
    percentage = data.get("matchPercentage")
    if (
        isinstance(percentage, bool)
        or not isinstance(percentage, (int, float))
        or not math.isfinite(percentage)
    ):
        percentage = baseline.match_percentage
    matched = data.get("matchedSkills")
    missing = data.get("missingSkills")
    return JobMatchAnalysis(
        match_percentage=min(100, max(0, round(percentage))),
        matched_skills=_string_list(matched) if matched else baseline.matched_skills,
        missing_skills=_string_list(missing) if missing else baseline.missing_skills,
    )


def _string_list(value) -> list[str]:
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, str)]
