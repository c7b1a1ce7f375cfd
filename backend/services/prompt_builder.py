"""All prompt templates for Gemini API calls.

User-supplied text is placed between ``---`` lines so the offline fallback
generator can echo it back.
"""


def build_job_search_prompt(query: str, skills: list[str], count: int = 5) -> str:
    """Career-mentor search: ``count`` roles with match data and one mentorship insight each."""
    skills_csv = ", ".join(skills) or "General"

    return f"""Act as a Global AI Career Mentor. Find {count} real-world roles for: "{query}".
User's Current Skills: {skills_csv}.

For each job, provide:
1. title, company, matchPercentage (integer 0-100), location, reason (one line on why the role fits).
2. missingSkills: A list of requirements the user doesn't have.
3. insight: A single professional sentence explaining WHY mastering one of the missing skills is essential for this specific career path (e.g., "Mastering Kubernetes will bridge the gap between your DevOps interest and high-scale backend engineering").

Return ONLY a JSON array of exactly {count} objects (no markdown, no code fences):
[{{"title": "...", "company": "...", "matchPercentage": 95, "location": "...", "reason": "...", "missingSkills": [], "insight": "..."}}]"""


_OPTIMIZE_INSTRUCTIONS = {
    "summary": "Act as a career coach. Rewrite this professional summary so it is concise and compelling. Return only the summary.",
    "achievement": "Act as a career coach. Transform this duty into a quantified achievement that starts with a strong action verb. Return only the achievement.",
    "experience": "Rewrite this work experience description for a CV. Return only the description.",
}


def build_optimize_prompt(text: str, kind: str = "summary") -> str:
    instructions = _OPTIMIZE_INSTRUCTIONS.get(kind, _OPTIMIZE_INSTRUCTIONS["achievement"])
    return f"""{instructions}

TEXT:
---
{text}
---"""


def build_cover_letter_prompt(
    job_title: str,
    company: str,
    job_description: str,
    candidate_name: str,
    candidate_summary: str,
    skills: list[str],
) -> str:
    return f"""Write a professional cover letter for {candidate_name} applying for {job_title} at {company}.
Keep it under 350 words, address it to the hiring manager and sign it with the candidate's name.

CANDIDATE SUMMARY:
---
{candidate_summary or "Not provided"}
---

CANDIDATE SKILLS:
---
{", ".join(skills) or "Not provided"}
---

ROLE DESCRIPTION:
---
{job_description or "Not provided"}
---

Return only the letter text."""


def build_match_analysis_prompt(
    user_skills: list[str],
    job_requirements: list[str],
    job_description: str,
) -> str:
    return f"""Analyze compatibility between a candidate and a job.
Candidate skills: {", ".join(user_skills) or "None listed"}.
Requirements: {", ".join(job_requirements) or "None listed"}.

JOB DESCRIPTION:
---
{job_description or "Not provided"}
---

Respond ONLY with JSON: {{"matchPercentage": <integer 0-100>, "matchedSkills": [], "missingSkills": []}}"""
