import asyncio

import aiosqlite
import pytest

from playwright_bridge.memory.record_store import RecordStore


def run_with_store(tmp_path, scenario):
    async def main():
        store = RecordStore(str(tmp_path / "data" / "records.db"))
        await store.initialize()
        try:
            return await scenario(store)
        finally:
            await store.close()

    return asyncio.run(main())


def test_create_and_find(tmp_path):
    async def scenario(store):
        created = await store.create("User", {"name": "Ada"})
        found = await store.find("User", created["id"])
        return created, found

    created, found = run_with_store(tmp_path, scenario)

    assert created["name"] == "Ada"
    assert found == created
    assert (tmp_path / "data" / "records.db").exists()


def test_find_is_scoped_to_model(tmp_path):
    async def scenario(store):
        created = await store.create("User", {"name": "Ada"})
        return await store.find("Post", created["id"])

    assert run_with_store(tmp_path, scenario) is None


def test_where_matches_every_condition(tmp_path):
    async def scenario(store):
        await store.create("User", {"email": "a@b.com", "is_admin": True, "tags": ["x"]})
        await store.create("User", {"email": "a@b.com", "is_admin": False, "tags": []})
        await store.create("User", {"email": "c@d.com", "is_admin": True, "verified_at": None})
        return (
            await store.where("User", {"email": "a@b.com"}),
            await store.where("User", {"email": "a@b.com", "is_admin": True}),
            await store.where("User", {"tags": ["x"]}),
            await store.where("User", {"verified_at": None}),
            await store.first("User", {"email": "missing@b.com"}),
        )

    by_email, admins, tagged, unverified, missing = run_with_store(tmp_path, scenario)

    assert len(by_email) == 2
    assert len(admins) == 1 and admins[0]["tags"] == ["x"]
    assert len(tagged) == 1
    assert len(unverified) == 3
    assert missing is None


def test_count_truncate_and_models(tmp_path):
    async def scenario(store):
        await store.create("User", {})
        await store.create("User", {})
        await store.create("Post", {})
        before = (await store.count("User"), await store.count(), await store.models())
        removed = await store.truncate("Post")
        after_post = await store.count()
        removed_all = await store.truncate()
        return before, removed, after_post, removed_all, await store.count()

    before, removed, after_post, removed_all, remaining = run_with_store(tmp_path, scenario)

    assert before == (2, 3, ["Post", "User"])
    assert removed == 1
    assert after_post == 2
    assert removed_all == 2
    assert remaining == 0


def test_update_and_delete(tmp_path):
    async def scenario(store):
        created = await store.create("User", {"name": "Ada", "email": "a@b.com"})
        updated = await store.update("User", created["id"], {"name": "Grace", "id": 500})
        deleted = await store.delete("User", created["id"])
        return created, updated, deleted, await store.find("User", created["id"])

    created, updated, deleted, found = run_with_store(tmp_path, scenario)

    assert updated["name"] == "Grace"
    assert updated["email"] == "a@b.com"
    assert updated["id"] == created["id"]
    assert deleted is True
    assert found is None


def test_create_keeps_explicit_id_and_created_at(tmp_path):
    async def scenario(store):
        explicit = await store.create("User", {"id": 42, "created_at": "2024-01-01T00:00:00"})
        following = await store.create("User", {})
        found = await store.find("User", 42)
        with pytest.raises(aiosqlite.IntegrityError):
            await store.create("Post", {"id": 42})
        return explicit, following, found

    explicit, following, found = run_with_store(tmp_path, scenario)

    assert explicit == {"id": 42, "created_at": "2024-01-01T00:00:00"}
    assert following["id"] == 43
    assert found == explicit
