"""
Local durable cache: a file-backed key-value store plus typed views on it.

Works like browser local storage. Each key holds one string value, kept in its
own JSON file. Reads never raise; a missing or unreadable collection falls
back to the dataset bundled with the package.
"""

import asyncio
import json
import logging
from collections.abc import Callable
from importlib import resources
from pathlib import Path
from typing import Any, Generic, TypeVar
from uuid import uuid4

import anyio
from pydantic import BaseModel, TypeAdapter, ValidationError

logger = logging.getLogger(__name__)

TOPICS_KEY = "dsa_topics"
PROBLEMS_KEY = "dsa_problems"
TOPIC_NOTES_KEY = "dsa_topic_notes"

ALL_KEYS = (TOPICS_KEY, PROBLEMS_KEY, TOPIC_NOTES_KEY)

T = TypeVar("T", bound=BaseModel)


class KeyValueStore:
    """Persist string values by key as files in one directory."""

    def __init__(self, directory: Path | str):
        self.directory = Path(directory)
        self._locks: dict[str, asyncio.Lock] = {}

    def lock(self, key: str) -> asyncio.Lock:
        """Lock guarding read-modify-write sequences on one key."""
        if key not in self._locks:
            self._locks[key] = asyncio.Lock()
        return self._locks[key]

    async def ensure_directory(self) -> None:
        """Ensure the cache directory exists."""
        path = anyio.Path(self.directory)
        await path.mkdir(parents=True, exist_ok=True)

    def _key_file(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    async def get_item(self, key: str) -> str | None:
        """Return the stored value, or None if the key was never set."""
        file_path = anyio.Path(self._key_file(key))
        if not await file_path.exists():
            return None
        return await file_path.read_text(encoding="utf-8")

    async def set_item(self, key: str, value: str) -> None:
        await self.ensure_directory()

        # Write atomically (write to a temp file of our own, then rename)
        file_path = anyio.Path(self._key_file(key))
        temp_path = anyio.Path(f"{file_path}.{uuid4().hex}.tmp")

        try:
            await temp_path.write_text(value, encoding="utf-8")
            await temp_path.rename(file_path)
        except OSError:
            await temp_path.unlink(missing_ok=True)
            raise

    async def remove_item(self, key: str) -> None:
        file_path = anyio.Path(self._key_file(key))
        if await file_path.exists():
            await file_path.unlink()

    async def clear(self, keys: tuple[str, ...] = ALL_KEYS) -> None:
        """Remove the given keys (all application keys by default)."""
        for key in keys:
            try:
                await self.remove_item(key)
            except OSError:
                logger.exception("Error clearing cache key %s", key)


def load_bundled(filename: str, model: type[T]) -> list[T]:
    """Read a default dataset shipped in ``dsa_flash/client/data``."""
    source = resources.files("dsa_flash.client") / "data" / filename
    return TypeAdapter(list[model]).validate_json(source.read_bytes())


class CollectionCache(Generic[T]):
    """
    Snapshot of one entity collection stored under a single key.

    Entities are kept in their wire (camelCase) form so a snapshot written by
    one version of the client reads back in another.
    """

    def __init__(
        self,
        store: KeyValueStore,
        key: str,
        model: type[T],
        defaults: Callable[[], list[T]] | None = None,
    ):
        self.store = store
        self.key = key
        self.model = model
        self.defaults = defaults or list
        self._adapter = TypeAdapter(list[model])

    def _fallback(self) -> list[T]:
        try:
            return self.defaults()
        except (OSError, ValidationError):
            logger.exception("Bundled dataset for %s is unreadable", self.key)
            return []

    async def load(self) -> list[T]:
        """Cached snapshot, else the bundled defaults. Never raises."""
        try:
            raw = await self.store.get_item(self.key)
        except OSError:
            logger.exception("Error loading %s", self.key)
            return self._fallback()
        if raw is None:
            return self._fallback()
        try:
            return self._adapter.validate_json(raw)
        except ValidationError:
            logger.exception("Corrupt cache entry %s, using bundled data", self.key)
            return self._fallback()

    async def _write(self, items: list[T]) -> None:
        try:
            data = self._adapter.dump_json(items, by_alias=True).decode("utf-8")
            await self.store.set_item(self.key, data)
        except OSError:
            logger.exception("Error saving %s", self.key)

    async def save(self, items: list[T]) -> None:
        async with self.store.lock(self.key):
            await self._write(items)

    # Mutations hold the key's lock from load through write.

    async def append(self, item: T) -> None:
        async with self.store.lock(self.key):
            items = await self.load()
            items.append(item)
            await self._write(items)

    async def replace(self, item: T) -> None:
        """Swap the entity with the same id for ``item``."""
        async with self.store.lock(self.key):
            items = await self.load()
            await self._write([item if existing.id == item.id else existing for existing in items])

    async def merge(self, entity_id: str, fields: dict[str, Any]) -> T | None:
        """Read-modify-write: overlay ``fields`` on one entity. Returns it if found."""
        async with self.store.lock(self.key):
            items = await self.load()
            updated = None
            for index, existing in enumerate(items):
                if existing.id == entity_id:
                    updated = existing.model_copy(update=fields)
                    items[index] = updated
            await self._write(items)
        return updated

    async def remove(self, entity_id: str) -> None:
        await self.remove_where(lambda item: item.id == entity_id)

    async def remove_where(self, predicate: Callable[[T], bool]) -> None:
        async with self.store.lock(self.key):
            items = await self.load()
            await self._write([item for item in items if not predicate(item)])


class NotesCache:
    """Map of topic id to note content, stored under one key."""

    def __init__(self, store: KeyValueStore, key: str = TOPIC_NOTES_KEY):
        self.store = store
        self.key = key

    async def _load_all(self) -> dict[str, str]:
        try:
            raw = await self.store.get_item(self.key)
            notes = json.loads(raw) if raw else {}
        except (OSError, ValueError):
            logger.exception("Error loading topic notes")
            return {}
        if not isinstance(notes, dict):
            logger.error("Topic notes cache holds %s, expected an object", type(notes).__name__)
            return {}
        return notes

    async def _write(self, notes: dict[str, str]) -> None:
        try:
            await self.store.set_item(self.key, json.dumps(notes))
        except OSError:
            logger.exception("Error saving topic notes")

    async def get(self, topic_id: str) -> str:
        """Content for the topic, "" when none (or nothing usable) is cached."""
        content = (await self._load_all()).get(topic_id)
        if not isinstance(content, str):
            if content is not None:
                logger.error("Cached notes for topic %s are %s, not text", topic_id, type(content).__name__)
            return ""
        return content

    async def set(self, topic_id: str, content: str) -> None:
        async with self.store.lock(self.key):
            notes = await self._load_all()
            notes[topic_id] = content
            await self._write(notes)

    async def remove(self, topic_id: str) -> None:
        async with self.store.lock(self.key):
            notes = await self._load_all()
            if topic_id not in notes:
                return
            del notes[topic_id]
            await self._write(notes)
