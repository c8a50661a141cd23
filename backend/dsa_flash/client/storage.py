"""
Synchronization layer: remote-primary, local-fallback repositories.

Every operation tries the API first. A successful result is mirrored into the
local cache; a failed call is replayed against the local cache instead. The
repositories never raise: callers always receive data (possibly stale or
bundled) and failures are only logged.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from dsa_flash.client.api import ApiError, CollectionAPI, ProblemsAPI, TopicNotesAPI, TopicsAPI
from dsa_flash.client.entities import Problem, Topic
from dsa_flash.client.local_cache import (
    PROBLEMS_KEY,
    TOPICS_KEY,
    CollectionCache,
    KeyValueStore,
    NotesCache,
    load_bundled,
)

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

# Everything the remote side can throw at us
REMOTE_ERRORS = (ApiError, httpx.HTTPError, ValidationError)


class ResilientRepository(Generic[T]):
    """
    CRUD over one entity collection with local fallback.

    Deletes are mirrored into the cache whether or not the remote call
    succeeded, like reads and writes, so the cache never keeps entities the
    server already dropped.
    """

    def __init__(
        self,
        name: str,
        model: type[T],
        remote: CollectionAPI,
        cache: CollectionCache[T],
        on_delete: Callable[[str], Awaitable[None]] | None = None,
    ):
        self.name = name
        self.model = model
        self.remote = remote
        self.cache = cache
        self.on_delete = on_delete

    async def get_all(self) -> list[T]:
        """Fetch the collection, refreshing the cache; cached copy on failure."""
        try:
            items = [self.model.model_validate(raw) for raw in await self.remote.get_all()]
        except REMOTE_ERRORS as e:
            logger.warning("Loading %s from local cache: %s", self.name, e)
            return await self.cache.load()
        await self.cache.save(items)
        return items

    async def add(self, entity: T) -> T:
        """
        Create an entity remotely, without its provisional id.

        Returns the remote copy (which may carry a server-assigned id) or, when
        the remote call fails, the entity as given after caching it.
        """
        payload = entity.model_dump(mode="json", by_alias=True, exclude={"id"})
        try:
            created = self.model.model_validate(await self.remote.create(payload))
        except REMOTE_ERRORS as e:
            logger.warning("Adding %s %s locally: %s", self.name, entity.id, e)
            await self.cache.append(entity)
            return entity
        await self.cache.append(created)
        return created

    async def update(self, entity_id: str, changes: BaseModel) -> T | None:
        """
        Apply a partial update (only the fields set on ``changes``).

        Returns the updated entity if either side knows it, else None.
        """
        payload = changes.model_dump(mode="json", by_alias=True, exclude_unset=True)
        try:
            updated = self.model.model_validate(await self.remote.update(entity_id, payload))
        except REMOTE_ERRORS as e:
            logger.warning("Updating %s %s locally: %s", self.name, entity_id, e)
            return await self.cache.merge(entity_id, changes.model_dump(exclude_unset=True))
        await self.cache.replace(updated)
        return updated

    async def delete(self, entity_id: str) -> None:
        try:
            await self.remote.delete(entity_id)
        except REMOTE_ERRORS as e:
            logger.warning("Deleting %s %s locally: %s", self.name, entity_id, e)
        await self.cache.remove(entity_id)
        if self.on_delete is not None:
            await self.on_delete(entity_id)


class TopicNotesRepository:
    """Notes content per topic: remote upsert with a local map as fallback."""

    def __init__(self, remote: TopicNotesAPI, cache: NotesCache):
        self.remote = remote
        self.cache = cache

    async def get(self, topic_id: str) -> str:
        """Stored content for the topic, "" when there is none."""
        try:
            content = await self.remote.get(topic_id)
        except REMOTE_ERRORS as e:
            logger.warning("Loading notes for topic %s from local cache: %s", topic_id, e)
            return await self.cache.get(topic_id)
        await self.cache.set(topic_id, content)
        return content

    async def save(self, topic_id: str, content: str) -> str:
        """Create or overwrite the topic's notes."""
        try:
            content = await self.remote.save(topic_id, content)
        except REMOTE_ERRORS as e:
            logger.warning("Saving notes for topic %s locally: %s", topic_id, e)
        await self.cache.set(topic_id, content)
        return content


class SyncStorage:
    """The three repositories over one HTTP client and one local store."""

    def __init__(self, http: httpx.AsyncClient, store: KeyValueStore):
        self.store = store
        self.problems: ResilientRepository[Problem] = ResilientRepository(
            "problems",
            Problem,
            ProblemsAPI(http),
            CollectionCache(store, PROBLEMS_KEY, Problem, lambda: load_bundled("problems.json", Problem)),
        )
        self.notes = TopicNotesRepository(TopicNotesAPI(http), NotesCache(store))
        self.topics: ResilientRepository[Topic] = ResilientRepository(
            "topics",
            Topic,
            TopicsAPI(http),
            CollectionCache(store, TOPICS_KEY, Topic, lambda: load_bundled("topics.json", Topic)),
            on_delete=self._forget_topic_dependents,
        )

    async def _forget_topic_dependents(self, topic_id: str) -> None:
        """Drop a deleted topic's problems and notes from the cache, as the server does."""
        await self.problems.cache.remove_where(lambda problem: problem.topic_id == topic_id)
        await self.notes.cache.remove(topic_id)

    async def clear_local(self) -> None:
        """Forget every cached collection; the next read falls back to bundled data."""
        await self.store.clear()
