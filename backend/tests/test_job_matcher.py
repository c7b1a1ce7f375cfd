"""Tests for job match synthesis."""

import json

import pytest

from conftest import ScriptedGenerator
from services.gemini_client import FallbackTextGenerator, TextGenerator
from services.job_matcher import (
    DEFAULT_SEARCH_QUERY,
    SEARCH_RESULT_COUNT,
    normalize_query,
    synthesize,
)


def jobs(n):
    return [
        {"title": f"Role {i}", "company": f"Co {i}", "matchPercentage": 60 + i, "missingSkills": []}
        for i in range(n)
    ]


class RaisingGenerator(TextGenerator):
    live = True

    async def generate(self, prompt: str) -> str:
        raise RuntimeError("contract broken")


class TestPrompt:
    @pytest.mark.asyncio
    async def test_prompt_carries_query_skills_and_count(self):
        gen = ScriptedGenerator()
        await synthesize("u", "data engineer", ["python", "sql"], gen)

        [prompt] = gen.prompts
        assert '"data engineer"' in prompt
        assert "python, sql" in prompt
        assert f"Find {SEARCH_RESULT_COUNT} real-world roles" in prompt
        for field in ("matchPercentage", "missingSkills", "insight"):
            assert field in prompt

    @pytest.mark.asyncio
    async def test_no_skills_reads_general(self):
        gen = ScriptedGenerator()
        await synthesize("u", "anything", [], gen)
        assert "User's Current Skills: General." in gen.prompts[0]

    @pytest.mark.asyncio
    async def test_blank_query_uses_default(self):
        gen = ScriptedGenerator()
        await synthesize("u", "   ", ["go"], gen)
        assert f'"{DEFAULT_SEARCH_QUERY}"' in gen.prompts[0]

    def test_normalize_query(self):
        assert normalize_query(None) == DEFAULT_SEARCH_QUERY
        assert normalize_query("") == DEFAULT_SEARCH_QUERY
        assert normalize_query("  sre ") == "sre"


class TestSynthesize:
    @pytest.mark.asyncio
    async def test_keeps_model_order(self):
        gen = ScriptedGenerator(json.dumps(jobs(3)))
        matches = await synthesize("u", "q", [], gen)
        assert [m.title for m in matches] == ["Role 0", "Role 1", "Role 2"]

    @pytest.mark.asyncio
    async def test_caps_at_result_count(self):
        gen = ScriptedGenerator(json.dumps(jobs(SEARCH_RESULT_COUNT + 3)))
        matches = await synthesize("u", "q", [], gen)
        assert len(matches) == SEARCH_RESULT_COUNT

    @pytest.mark.asyncio
    @pytest.mark.parametrize("reply", ["", "I cannot help with that.", '{"title": "x"}', "[1, 2]"])
    async def test_unusable_reply_is_empty(self, reply):
        assert await synthesize("u", "q", [], ScriptedGenerator(reply)) == []

    @pytest.mark.asyncio
    async def test_fallback_generator_is_empty(self):
        assert await synthesize("u", "q", ["python"], FallbackTextGenerator()) == []

    @pytest.mark.asyncio
    async def test_raising_generator_is_empty(self):
        assert await synthesize("u", "q", [], RaisingGenerator()) == []
