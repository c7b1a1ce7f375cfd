"""Shared dependencies for API routes."""

from fastapi import Depends, Request

from api.errors import ApiError
from services import application_store, gemini_client, notification_store, profile_store


def get_text_generator() -> gemini_client.TextGenerator:
    return gemini_client.get_generator()


def get_notification_store() -> notification_store.NotificationStore:
    return notification_store.get_store()


def get_profile_store() -> profile_store.InMemoryProfileStore:
    return profile_store.get_store()


def get_application_store() -> application_store.InMemoryApplicationStore:
    return application_store.get_store()


def get_optional_user_id(request: Request) -> str | None:
    """User id placed in the signed session cookie by the authentication service."""
    return request.session.get("user_id")


def get_current_user_id(user_id: str | None = Depends(get_optional_user_id)) -> str:
    if not user_id:
        raise ApiError(401, "Unauthorized")
    return user_id
