from pydantic import BaseModel

from models.requests import CamelModel


class HealthResponse(BaseModel):
    status: str = "ok"
    gemini_configured: bool = False


class SuccessResponse(BaseModel):
    success: bool = True


class OptimizedTextResponse(CamelModel):
    optimized_text: str = ""


class CoverLetterResponse(CamelModel):
    cover_letter: str = ""


class JobMatchAnalysis(CamelModel):
    match_percentage: int = 0
    matched_skills: list[str] = []
    missing_skills: list[str] = []
