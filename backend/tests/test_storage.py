"""Tests for the remote-first, cache-fallback repositories."""

from datetime import datetime, timezone

import httpx
import pytest
from httpx import AsyncClient

from dsa_flash.client.entities import Problem, ProblemUpdate, Topic, TopicUpdate
from dsa_flash.client.local_cache import KeyValueStore, load_bundled
from dsa_flash.client.storage import SyncStorage


def make_topic(topic_id: str = "topic-1", name: str = "Arrays") -> Topic:
    return Topic(id=topic_id, name=name, description="desc", category="Data Structures", order=5)


def make_problem(problem_id: str = "problem-1", topic_id: str = "topic-1", title: str = "Two Sum") -> Problem:
    return Problem(
        id=problem_id,
        topic_id=topic_id,
        title=title,
        difficulty="Easy",
        solution="hashmap",
        tags=["hashmap"],
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


@pytest.fixture
def online(client: AsyncClient, tmp_path) -> SyncStorage:
    return SyncStorage(client, KeyValueStore(tmp_path / "cache"))


@pytest.fixture
def offline(offline_client: AsyncClient, tmp_path) -> SyncStorage:
    return SyncStorage(offline_client, KeyValueStore(tmp_path / "cache"))


async def test_get_all_mirrors_remote_into_cache(online: SyncStorage, client: AsyncClient):
    await client.post("/api/topics", json={"name": "Graphs", "description": "d", "category": "Algorithms"})

    topics = await online.topics.get_all()

    assert [t.name for t in topics] == ["Graphs"]
    assert await online.topics.cache.load() == topics


async def test_get_all_offline_uses_bundled_defaults_when_cache_empty(offline: SyncStorage):
    topics = await offline.topics.get_all()
    problems = await offline.problems.get_all()

    assert topics == load_bundled("topics.json", Topic)
    assert problems == load_bundled("problems.json", Problem)


async def test_get_all_offline_returns_last_snapshot(tmp_path, client, offline_client):
    cache_dir = tmp_path / "shared"
    await client.post("/api/topics", json={"name": "Graphs", "description": "d", "category": "Algorithms"})
    snapshot = await SyncStorage(client, KeyValueStore(cache_dir)).topics.get_all()

    fallback = await SyncStorage(offline_client, KeyValueStore(cache_dir)).topics.get_all()

    assert fallback == snapshot


async def test_error_status_counts_as_remote_failure(tmp_path):
    transport = httpx.MockTransport(lambda request: httpx.Response(500, text="boom"))
    async with AsyncClient(transport=transport, base_url="http://broken") as http:
        storage = SyncStorage(http, KeyValueStore(tmp_path))
        await storage.topics.cache.save([make_topic()])

        topics = await storage.topics.get_all()

    assert [t.id for t in topics] == ["topic-1"]


async def test_malformed_remote_payload_counts_as_remote_failure(tmp_path):
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=[{"unexpected": True}]))
    async with AsyncClient(transport=transport, base_url="http://odd") as http:
        storage = SyncStorage(http, KeyValueStore(tmp_path))
        await storage.topics.cache.save([make_topic()])

        topics = await storage.topics.get_all()

    assert [t.id for t in topics] == ["topic-1"]


@pytest.mark.parametrize("body", [[], {"notes": 5}, "just text"])
async def test_malformed_notes_payload_counts_as_remote_failure(tmp_path, body):
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=body))
    async with AsyncClient(transport=transport, base_url="http://odd") as http:
        storage = SyncStorage(http, KeyValueStore(tmp_path))
        await storage.notes.cache.set("t1", "cached notes")

        fetched = await storage.notes.get("t1")
        saved = await storage.notes.save("t1", "new notes")

    assert fetched == "cached notes"
    assert saved == "new notes"
    assert await storage.notes.cache.get("t1") == "new notes"


async def test_add_online_returns_server_copy(online: SyncStorage):
    provisional = make_topic()

    created = await online.topics.add(provisional)

    assert created.id != provisional.id
    assert (created.name, created.description, created.category, created.order) == (
        "Arrays", "desc", "Data Structures", 5,
    )
    assert created in await online.topics.cache.load()


async def test_add_accepts_document_store_ids(tmp_path):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            201,
            json={"_id": "65f0c0ffee", "name": "Arrays", "description": "desc", "category": "Data Structures"},
        )

    async with AsyncClient(transport=httpx.MockTransport(handler), base_url="http://mongo") as http:
        created = await SyncStorage(http, KeyValueStore(tmp_path)).topics.add(make_topic())

    assert created.id == "65f0c0ffee"


async def test_add_offline_keeps_provisional_entity(offline: SyncStorage):
    await offline.problems.cache.save([])
    provisional = make_problem()

    created = await offline.problems.add(provisional)

    assert created == provisional
    assert await offline.problems.cache.load() == [provisional]


async def test_update_online_replaces_cached_copy(online: SyncStorage):
    created = await online.problems.add(make_problem())

    updated = await online.problems.update(created.id, ProblemUpdate(notes="revisit"))

    assert updated.notes == "revisit"
    cached = {p.id: p for p in await online.problems.cache.load()}
    assert cached[created.id].notes == "revisit"


async def test_update_offline_merges_into_cache(offline: SyncStorage):
    await offline.topics.cache.save([make_topic()])

    updated = await offline.topics.update("topic-1", TopicUpdate(name="Arrays II"))

    assert updated.name == "Arrays II"
    assert [t.name for t in await offline.topics.cache.load()] == ["Arrays II"]


async def test_delete_online_also_updates_cache(online: SyncStorage):
    await online.problems.cache.save([])
    created = await online.problems.add(make_problem())
    assert [p.id for p in await online.problems.cache.load()] == [created.id]

    await online.problems.delete(created.id)

    assert await online.problems.cache.load() == []
    assert await online.problems.get_all() == []


async def test_delete_offline_removes_from_cache(offline: SyncStorage):
    await offline.problems.cache.save([make_problem("p1"), make_problem("p2")])

    await offline.problems.delete("p1")

    assert [p.id for p in await offline.problems.cache.load()] == ["p2"]


async def test_topic_delete_drops_cached_dependents(offline: SyncStorage):
    await offline.topics.cache.save([make_topic("t1"), make_topic("t2", "Graphs")])
    await offline.problems.cache.save([
        make_problem("p1", topic_id="t1"),
        make_problem("p2", topic_id="t2"),
        make_problem("p3", topic_id="t1"),
    ])
    await offline.notes.save("t1", "arrays notes")
    await offline.notes.save("t2", "graph notes")

    await offline.topics.delete("t1")

    assert [t.id for t in await offline.topics.cache.load()] == ["t2"]
    assert [p.id for p in await offline.problems.cache.load()] == ["p2"]
    assert await offline.notes.get("t1") == ""
    assert await offline.notes.get("t2") == "graph notes"


async def test_notes_online_round_trip_and_mirror(online: SyncStorage):
    assert await online.notes.get("arrays") == ""

    await online.notes.save("arrays", "sliding window")

    assert await online.notes.get("arrays") == "sliding window"
    assert await online.notes.cache.get("arrays") == "sliding window"


async def test_notes_offline_use_cache(offline: SyncStorage):
    assert await offline.notes.get("arrays") == ""

    await offline.notes.save("arrays", "offline notes")

    assert await offline.notes.get("arrays") == "offline notes"
