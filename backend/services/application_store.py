"""Application tracker: in-memory storage plus status pipeline rules."""

import logging
from datetime import datetime, timezone
from uuid import uuid4

from models.schemas.application import STATUS_ORDER, Application

logger = logging.getLogger(__name__)


class ApplicationNotFoundError(Exception):
    pass


class InvalidStatusError(ValueError):
    pass


class InMemoryApplicationStore:
    def __init__(self) -> None:
        self._rows: dict[str, Application] = {}

    async def create(
        self,
        user_id: str,
        title: str,
        company: str,
        location: str | None = None,
        job_id: str | None = None,
    ) -> Application:
        now = datetime.now(timezone.utc)
        application = Application(
            id=uuid4().hex,
            user_id=user_id,
            job_id=job_id or uuid4().hex,
            title=title,
            company=company,
            location=location,
            created_at=now,
            updated_at=now,
        )
        self._rows[application.id] = application
        return application

    async def list_by_user(self, user_id: str) -> list[Application]:
        rows = [a for a in reversed(self._rows.values()) if a.user_id == user_id]
        return sorted(rows, key=lambda a: a.created_at, reverse=True)

    async def get(self, user_id: str, application_id: str) -> Application:
        application = self._rows.get(application_id)
        if application is None or application.user_id != user_id:
            raise ApplicationNotFoundError(application_id)
        return application

    async def find_by_job(self, user_id: str, job_id: str) -> Application:
        for application in reversed(self._rows.values()):
            if application.user_id == user_id and application.job_id == job_id:
                return application
        raise ApplicationNotFoundError(job_id)

    async def update(self, user_id: str, application_id: str, changes: dict) -> Application:
        """Apply ``changes`` (status / notes / cover_letter). None values are ignored."""
        current = await self.get(user_id, application_id)
        changes = {k: v for k, v in changes.items() if v is not None}

        status = changes.get("status")
        if status is not None:
            if status not in STATUS_ORDER:
                raise InvalidStatusError(f"Unknown status: {status}")
            if status == "applied" and current.applied_date is None:
                changes["applied_date"] = datetime.now(timezone.utc)
            if status != current.status:
                logger.info("Application %s moved %s -> %s", application_id, current.status, status)

        updated = current.model_copy(update={**changes, "updated_at": datetime.now(timezone.utc)})
        self._rows[application_id] = updated
        return updated

    async def delete(self, user_id: str, application_id: str) -> None:
        await self.get(user_id, application_id)
        del self._rows[application_id]


_store: InMemoryApplicationStore | None = None


def get_store() -> InMemoryApplicationStore:
    global _store
    if _store is None:
        _store = InMemoryApplicationStore()
    return _store
