"""
Tests for TaskService: ownership rules, partial updates, admin views.
"""

from datetime import timedelta

import pytest

from taskmanager.core.errors import ForbiddenError, NotFoundError, ValidationError
from taskmanager.core.models import Task, User
from taskmanager.core.utils import utc_now


# =============================================================================
# Create / read
# =============================================================================


class TestCreate:
    @pytest.mark.asyncio
    async def test_owner_is_caller(self, task_service, alice):
        task = await task_service.create(alice, "Buy milk")
        
        assert task.owner == "alice"
        assert task.completed is False
        assert task.description is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("title,description,field", [
        ("", None, "title"),
        ("   ", None, "title"),
        (None, None, "title"),
        ("x" * 256, None, "title"),
        ("ok", "d" * 1001, "description"),
    ])
    async def test_validation(self, task_service, tasks, alice, title, description, field):
        with pytest.raises(ValidationError) as exc_info:
            await task_service.create(alice, title, description)
        
        assert [e.field for e in exc_info.value.errors] == [field]
        assert await tasks.count() == 0

    @pytest.mark.asyncio
    async def test_bounds_are_inclusive(self, task_service, alice):
        task = await task_service.create(alice, "x" * 255, "d" * 1000)
        assert len(task.title) == 255


class TestGet:
    @pytest.mark.asyncio
    async def test_owner_can_read(self, task_service, alice):
        task = await task_service.create(alice, "Buy milk")
        assert (await task_service.get(alice, task.id)).title == "Buy milk"

    @pytest.mark.asyncio
    async def test_other_user_forbidden(self, task_service, alice, bob):
        task = await task_service.create(alice, "Buy milk")
        
        with pytest.raises(ForbiddenError):
            await task_service.get(bob, task.id)

    @pytest.mark.asyncio
    async def test_admin_gets_no_ownership_bypass(self, task_service, alice, admin):
        task = await task_service.create(alice, "Buy milk")
        
        with pytest.raises(ForbiddenError):
            await task_service.get(admin, task.id)

    @pytest.mark.asyncio
    async def test_missing(self, task_service, alice):
        with pytest.raises(NotFoundError):
            await task_service.get(alice, "task_missing")


class TestListMine:
    @pytest.mark.asyncio
    async def test_only_own_tasks(self, task_service, alice, bob):
        await task_service.create(alice, "A1")
        await task_service.create(alice, "A2")
        await task_service.create(bob, "B1")
        
        mine = await task_service.list_mine(alice)
        
        assert {t.title for t in mine} == {"A1", "A2"}
        assert all(t.owner == "alice" for t in mine)


# =============================================================================
# Update
# =============================================================================


class TestUpdate:
    @pytest.mark.asyncio
    async def test_partial_update_leaves_other_fields(self, task_service, tasks, alice):
        task = await task_service.create(alice, "Buy milk", "2 litres")
        
        updated = await task_service.update(alice, task.id, {"completed": True})
        
        assert updated.completed is True
        assert updated.title == "Buy milk"
        assert updated.description == "2 litres"
        assert updated.updated_at >= task.updated_at
        stored = await tasks.find_by_id(task.id)
        assert (stored.title, stored.description, stored.completed) == ("Buy milk", "2 litres", True)

    @pytest.mark.asyncio
    async def test_null_is_absent_but_empty_string_is_a_value(self, task_service, alice):
        task = await task_service.create(alice, "Buy milk", "2 litres")
        
        updated = await task_service.update(alice, task.id, {"title": None, "description": ""})
        
        assert updated.title == "Buy milk"
        assert updated.description == ""

    @pytest.mark.asyncio
    async def test_owner_cannot_be_changed(self, task_service, alice):
        task = await task_service.create(alice, "Buy milk")
        
        updated = await task_service.update(alice, task.id, {"owner": "bob", "title": "Buy oat milk"})
        
        assert updated.owner == "alice"
        assert updated.title == "Buy oat milk"

    @pytest.mark.asyncio
    async def test_other_user_forbidden_and_task_unchanged(self, task_service, tasks, alice, bob):
        task = await task_service.create(alice, "Buy milk")
        
        with pytest.raises(ForbiddenError):
            await task_service.update(bob, task.id, {"title": "Hacked", "completed": True})
        
        stored = await tasks.find_by_id(task.id)
        assert stored == task

    @pytest.mark.asyncio
    async def test_missing(self, task_service, alice):
        with pytest.raises(NotFoundError):
            await task_service.update(alice, "task_missing", {"completed": True})

    @pytest.mark.asyncio
    async def test_invalid_update_writes_nothing(self, task_service, tasks, alice):
        task = await task_service.create(alice, "Buy milk")
        
        with pytest.raises(ValidationError):
            await task_service.update(alice, task.id, {"title": "", "completed": True})
        
        assert (await tasks.find_by_id(task.id)).completed is False


# =============================================================================
# Delete
# =============================================================================


class TestDelete:
    @pytest.mark.asyncio
    async def test_owner_deletes(self, task_service, alice):
        task = await task_service.create(alice, "Buy milk")
        
        await task_service.delete(alice, task.id)
        
        with pytest.raises(NotFoundError):
            await task_service.get(alice, task.id)

    @pytest.mark.asyncio
    async def test_deleting_missing_task_twice(self, task_service, alice):
        for _ in range(2):
            with pytest.raises(NotFoundError):
                await task_service.delete(alice, "task_missing")

    @pytest.mark.asyncio
    async def test_other_user_forbidden(self, task_service, tasks, alice, bob):
        task = await task_service.create(alice, "Buy milk")
        
        with pytest.raises(ForbiddenError):
            await task_service.delete(bob, task.id)
        
        assert await tasks.find_by_id(task.id) == task


# =============================================================================
# Admin views
# =============================================================================


class TestAdmin:
    @pytest.mark.asyncio
    async def test_non_admin_forbidden_everywhere(self, task_service, user_service, alice):
        with pytest.raises(ForbiddenError):
            await task_service.list_all(alice)
        with pytest.raises(ForbiddenError):
            await task_service.list_by_user(alice, "alice")
        with pytest.raises(ForbiddenError):
            await task_service.stats(alice)
        with pytest.raises(ForbiddenError):
            await user_service.list_users(alice)

    @pytest.mark.asyncio
    async def test_list_all_newest_first_with_owner(self, task_service, tasks, users, admin):
        await users.save(User(identifier="alice", email="alice@x.com", password_hash="h"))
        now = utc_now()
        await tasks.save(Task(id="old", title="Old", owner="alice", created_at=now - timedelta(hours=1)))
        await tasks.save(Task(id="new", title="New", owner="alice", created_at=now))
        
        listing = await task_service.list_all(admin)
        
        assert [t.id for t in listing] == ["new", "old"]
        assert listing[0].owner.identifier == "alice"
        assert listing[0].owner.email == "alice@x.com"
        assert listing[0].owner.resolved is True

    @pytest.mark.asyncio
    async def test_dangling_owner_marks_row_only(self, task_service, tasks, users, admin):
        await users.save(User(identifier="alice", email="alice@x.com", password_hash="h"))
        await tasks.save(Task(id="t1", title="Kept", owner="alice"))
        await tasks.save(Task(id="t2", title="Orphan", owner="ghost"))
        
        listing = {t.id: t for t in await task_service.list_all(admin)}
        
        assert listing["t1"].owner.resolved is True
        assert listing["t2"].owner.resolved is False
        assert listing["t2"].owner.identifier == "ghost"
        assert listing["t2"].owner.error

    @pytest.mark.asyncio
    async def test_owner_lookup_failure_marks_row_only(self, task_service, tasks, users, admin, monkeypatch):
        await tasks.save(Task(id="t1", title="A", owner="alice"))
        
        async def broken(identifier):
            raise RuntimeError("store unavailable")
        
        monkeypatch.setattr(users, "find_by_identifier", broken)
        
        listing = await task_service.list_all(admin)
        
        assert len(listing) == 1
        assert listing[0].owner.resolved is False
        assert listing[0].owner.error == "Unable to load user data"

    @pytest.mark.asyncio
    async def test_list_by_user(self, task_service, users, alice, bob, admin):
        await users.save(User(identifier="alice", email="alice@x.com", password_hash="h"))
        await task_service.create(alice, "A1")
        await task_service.create(bob, "B1")
        
        result = await task_service.list_by_user(admin, "alice")
        
        assert result.user.identifier == "alice"
        assert result.task_count == 1
        assert [t.title for t in result.tasks] == ["A1"]

    @pytest.mark.asyncio
    async def test_list_by_unknown_user(self, task_service, admin):
        with pytest.raises(NotFoundError):
            await task_service.list_by_user(admin, "nobody")

    @pytest.mark.asyncio
    async def test_stats(self, task_service, users, alice, admin):
        await users.save(User(identifier="alice", email="alice@x.com", password_hash="h"))
        first = await task_service.create(alice, "A1")
        await task_service.create(alice, "A2")
        await task_service.update(alice, first.id, {"completed": True})
        
        stats = await task_service.stats(admin)
        
        assert stats.total_users == 1
        assert stats.total_tasks == 2
        assert stats.completed_tasks == 1
        assert stats.pending_tasks == 1

    @pytest.mark.asyncio
    async def test_list_users_hides_hashes(self, user_service, users, admin):
        await users.save(User(identifier="alice", email="alice@x.com", password_hash="h"))
        
        listing = await user_service.list_users(admin)
        
        assert [u.identifier for u in listing] == ["alice"]
        assert "password_hash" not in listing[0].model_dump()
