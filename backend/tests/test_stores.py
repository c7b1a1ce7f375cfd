"""Tests for the in-memory notification, profile and application stores."""

import pytest

from models.schemas.notification import NewNotification
from services.application_store import (
    ApplicationNotFoundError,
    InMemoryApplicationStore,
    InvalidStatusError,
)
from services.notification_store import InMemoryNotificationStore
from services.profile_store import InMemoryProfileStore


def note(user_id="u", title="t"):
    return NewNotification(user_id=user_id, type="skill_gap", title=title, message="m")


class TestNotificationStore:
    @pytest.mark.asyncio
    async def test_create_assigns_id_and_timestamp(self):
        store = InMemoryNotificationStore()
        stored = await store.create(note())
        assert stored.id
        assert stored.created_at is not None
        assert stored.read is False

    @pytest.mark.asyncio
    async def test_list_is_newest_first_and_per_user(self):
        store = InMemoryNotificationStore()
        for title in ("first", "second", "third"):
            await store.create(note(title=title))
        await store.create(note(user_id="other"))

        titles = [n.title for n in await store.list_by_user("u")]
        assert titles == ["third", "second", "first"]

    @pytest.mark.asyncio
    async def test_mark_read_is_one_way(self):
        store = InMemoryNotificationStore()
        stored = await store.create(note())

        assert await store.mark_read(stored.id) is True
        assert await store.mark_read(stored.id) is True
        [row] = await store.list_by_user("u")
        assert row.read is True

    @pytest.mark.asyncio
    async def test_mark_read_checks_owner(self):
        store = InMemoryNotificationStore()
        stored = await store.create(note())
        assert await store.mark_read(stored.id, user_id="intruder") is False
        assert await store.mark_read("missing") is False


class TestProfileStore:
    @pytest.mark.asyncio
    async def test_skill_names_are_normalized(self):
        store = InMemoryProfileStore()
        await store.upsert_profile("u", {"first_name": "A", "last_name": "B", "email": "a@b.c"})
        await store.replace_skills("u", ["Python", " python ", "", "SQL"])

        profile = await store.get_profile("u")
        assert [s.name for s in profile.skills] == ["Python", "python", "SQL"]
        assert profile.skill_names() == ["python", "sql"]

    @pytest.mark.asyncio
    async def test_no_profile(self):
        store = InMemoryProfileStore()
        assert await store.get_profile("u") is None
        assert await store.replace_skills("u", ["go"]) is None

    @pytest.mark.asyncio
    async def test_upsert_updates_in_place(self):
        store = InMemoryProfileStore()
        created = await store.upsert_profile("u", {"first_name": "A", "last_name": "B", "email": "a@b.c"})
        updated = await store.upsert_profile("u", {"first_name": "Z", "last_name": "B", "email": "a@b.c"})
        assert updated.id == created.id
        assert updated.full_name == "Z B"


class TestApplicationStore:
    @pytest.mark.asyncio
    async def test_status_update_stamps_applied_date_once(self):
        store = InMemoryApplicationStore()
        app = await store.create("u", title="SRE", company="Acme")
        assert app.status == "to_apply"

        applied = await store.update("u", app.id, {"status": "applied"})
        assert applied.applied_date is not None
        later = await store.update("u", app.id, {"status": "interviewing"})
        again = await store.update("u", app.id, {"status": "applied"})
        assert later.applied_date == again.applied_date == applied.applied_date

    @pytest.mark.asyncio
    async def test_unknown_status_rejected(self):
        store = InMemoryApplicationStore()
        app = await store.create("u", title="SRE", company="Acme")
        with pytest.raises(InvalidStatusError):
            await store.update("u", app.id, {"status": "ghosted"})

    @pytest.mark.asyncio
    async def test_other_users_rows_are_invisible(self):
        store = InMemoryApplicationStore()
        app = await store.create("u", title="SRE", company="Acme", job_id="j1")
        with pytest.raises(ApplicationNotFoundError):
            await store.get("other", app.id)
        with pytest.raises(ApplicationNotFoundError):
            await store.find_by_job("other", "j1")
        with pytest.raises(ApplicationNotFoundError):
            await store.delete("other", app.id)
