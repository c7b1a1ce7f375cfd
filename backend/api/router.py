import logging

from fastapi import APIRouter, Body, Depends, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import (
    get_application_store,
    get_current_user_id,
    get_notification_store,
    get_optional_user_id,
    get_profile_store,
    get_text_generator,
)
from api.errors import ApiError
from config import settings
from models.requests import (
    ApplicationCreateRequest,
    ApplicationUpdateRequest,
    CoverLetterRequest,
    CvProfileRequest,
    JobMatchAnalysisRequest,
    OptimizeTextRequest,
)
from models.responses import (
    CoverLetterResponse,
    HealthResponse,
    JobMatchAnalysis,
    OptimizedTextResponse,
    SuccessResponse,
)
from models.schemas import Application, CvProfile, Notification, Skill
from services import career_assistant, gemini_client, job_search
from services.application_store import (
    ApplicationNotFoundError,
    InMemoryApplicationStore,
    InvalidStatusError,
)
from services.gemini_client import TextGenerator
from services.notification_store import NotificationStore
from services.profile_store import InMemoryProfileStore

logger = logging.getLogger(__name__)

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


@router.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(status="ok", gemini_configured=gemini_client.has_usable_key())


# --- Job search ---


@router.get("/api/jobs/search")
@limiter.limit(settings.search_rate_limit)
async def search_jobs(
    request: Request,
    q: str = "",
    user_id: str = Depends(get_current_user_id),
    profiles: InMemoryProfileStore = Depends(get_profile_store),
    notifications: NotificationStore = Depends(get_notification_store),
    generator: TextGenerator = Depends(get_text_generator),
):
    try:
        matches = await job_search.search_jobs(user_id, q, profiles, notifications, generator)
    except job_search.ProfileNotFoundError:
        raise ApiError(400, "Complete your profile first")
    except Exception:
        logger.exception("AI search failed for user %s", user_id)
        raise ApiError(500, "Search failed")
    return [match.to_payload() for match in matches]


# --- Notifications ---


@router.get("/api/notifications", response_model=list[Notification])
async def list_notifications(
    user_id: str = Depends(get_current_user_id),
    notifications: NotificationStore = Depends(get_notification_store),
):
    return await notifications.list_by_user(user_id)


@router.post("/api/notifications/{notification_id}/read", response_model=SuccessResponse)
async def mark_notification_read(
    notification_id: str,
    user_id: str = Depends(get_current_user_id),
    notifications: NotificationStore = Depends(get_notification_store),
):
    if not await notifications.mark_read(notification_id, user_id):
        raise ApiError(404, "Notification not found")
    return SuccessResponse()


# --- AI tools ---


@router.post("/api/ai/optimize", response_model=OptimizedTextResponse)
@limiter.limit(settings.ai_rate_limit)
async def optimize(
    request: Request,
    body: OptimizeTextRequest,
    user_id: str = Depends(get_current_user_id),
    generator: TextGenerator = Depends(get_text_generator),
):
    text = await career_assistant.optimize_text(body.content, body.type, generator)
    return OptimizedTextResponse(optimized_text=text)


@router.post("/api/ai/cover-letter", response_model=CoverLetterResponse)
@limiter.limit(settings.ai_rate_limit)
async def cover_letter(
    request: Request,
    body: CoverLetterRequest,
    user_id: str = Depends(get_current_user_id),
    profiles: InMemoryProfileStore = Depends(get_profile_store),
    applications: InMemoryApplicationStore = Depends(get_application_store),
    generator: TextGenerator = Depends(get_text_generator),
):
    try:
        application = await applications.find_by_job(user_id, body.job_id)
    except ApplicationNotFoundError:
        raise ApiError(404, "Application not found")

    profile = await profiles.get_profile(user_id)
    if profile is None:
        raise ApiError(400, "Complete your profile first")

    letter = await career_assistant.generate_cover_letter(
        job_title=application.title,
        company=application.company,
        job_description=body.job_description,
        candidate_name=profile.full_name,
        candidate_summary=profile.summary or "",
        skills=[s.name for s in profile.skills],
        generator=generator,
    )
    await applications.update(user_id, application.id, {"cover_letter": letter})
    return CoverLetterResponse(cover_letter=letter)


@router.post("/api/ai/analyze-match", response_model=JobMatchAnalysis)
@limiter.limit(settings.ai_rate_limit)
async def analyze_match(
    request: Request,
    body: JobMatchAnalysisRequest,
    user_id: str = Depends(get_current_user_id),
    generator: TextGenerator = Depends(get_text_generator),
):
    return await career_assistant.analyze_job_match(
        body.user_skills, body.job_requirements, body.job_description, generator
    )


# --- CV profile ---


@router.get("/api/cv-profile/full", response_model=CvProfile | None)
async def get_cv_profile(
    user_id: str | None = Depends(get_optional_user_id),
    profiles: InMemoryProfileStore = Depends(get_profile_store),
):
    if not user_id:
        return None
    return await profiles.get_profile(user_id)


@router.post("/api/cv-profile", response_model=CvProfile)
async def save_cv_profile(
    body: CvProfileRequest,
    user_id: str = Depends(get_current_user_id),
    profiles: InMemoryProfileStore = Depends(get_profile_store),
):
    return await profiles.upsert_profile(user_id, body.model_dump())


@router.post("/api/cv-profile/skills", response_model=list[Skill])
async def save_skills(
    names: list[str] = Body(...),
    user_id: str = Depends(get_current_user_id),
    profiles: InMemoryProfileStore = Depends(get_profile_store),
):
    skills = await profiles.replace_skills(user_id, names)
    if skills is None:
        raise ApiError(400, "Complete your profile first")
    return skills


# --- Application tracker ---


@router.post("/api/applications", response_model=Application)
async def create_application(
    body: ApplicationCreateRequest,
    user_id: str = Depends(get_current_user_id),
    applications: InMemoryApplicationStore = Depends(get_application_store),
):
    return await applications.create(
        user_id,
        title=body.title,
        company=body.company,
        location=body.location,
        job_id=str(body.job_id) if body.job_id is not None else None,
    )


@router.get("/api/applications", response_model=list[Application])
async def list_applications(
    user_id: str = Depends(get_current_user_id),
    applications: InMemoryApplicationStore = Depends(get_application_store),
):
    return await applications.list_by_user(user_id)


@router.patch("/api/applications/{application_id}", response_model=Application)
async def update_application(
    application_id: str,
    body: ApplicationUpdateRequest,
    user_id: str = Depends(get_current_user_id),
    applications: InMemoryApplicationStore = Depends(get_application_store),
):
    try:
        return await applications.update(user_id, application_id, body.model_dump(exclude_unset=True))
    except ApplicationNotFoundError:
        raise ApiError(404, "Application not found")
    except InvalidStatusError as e:
        raise ApiError(400, str(e))


@router.delete("/api/applications/{application_id}", response_model=SuccessResponse)
async def delete_application(
    application_id: str,
    user_id: str = Depends(get_current_user_id),
    applications: InMemoryApplicationStore = Depends(get_application_store),
):
    try:
        await applications.delete(user_id, application_id)
    except ApplicationNotFoundError:
        raise ApiError(404, "Application not found")
    return SuccessResponse()
