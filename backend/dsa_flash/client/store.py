"""
Application state container.

StudyStore holds the snapshot a UI renders from and routes every mutation
through the synchronization layer. Each mutation builds a complete new
StoreState and publishes it in one step, then notifies subscribers.

Mutations are independent and unsynchronized: there is no lock and no
cancellation, so two concurrent edits of the same entity apply in whatever
order their storage calls complete.
"""

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from uuid import uuid4

from dsa_flash.client.entities import (
    Problem,
    ProblemFields,
    ProblemUpdate,
    Topic,
    TopicFields,
    TopicUpdate,
)
from dsa_flash.client.storage import SyncStorage

logger = logging.getLogger(__name__)

Listener = Callable[["StoreState"], None]


@dataclass(frozen=True)
class StoreState:
    topics: tuple[Topic, ...] = ()
    problems: tuple[Problem, ...] = ()
    selected_topic: Topic | None = None
    selected_problem: Problem | None = None
    search_query: str = ""
    show_add_topic_modal: bool = False
    show_add_problem_modal: bool = False


def parse_tags(raw: str) -> list[str]:
    """Split a comma separated tag field. Blank entries go, duplicates stay."""
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


def provisional_id(prefix: str) -> str:
    """Client-side id: creation time in ms plus a random suffix."""
    return f"{prefix}-{int(time.time() * 1000)}-{uuid4().hex[:6]}"


def _contains(text: str | None, query: str) -> bool:
    return bool(text) and query in text.lower()


class StudyStore:
    """In-memory snapshot of topics and problems plus UI selection state."""

    def __init__(self, storage: SyncStorage):
        self.storage = storage
        self.state = StoreState()
        self._listeners: list[Listener] = []

    # ------------------------------------------------------------------
    # Subscription
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with every new state. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set(self, **changes) -> None:
        self.state = replace(self.state, **changes)
        for listener in list(self._listeners):
            listener(self.state)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def load_all(self) -> None:
        """Load topics and problems in parallel; empty collections if that fails."""
        try:
            topics, problems = await asyncio.gather(
                self.storage.topics.get_all(),
                self.storage.problems.get_all(),
            )
        except Exception:
            logger.exception("Error loading data")
            self._set(topics=(), problems=())
            return
        self._set(topics=tuple(topics), problems=tuple(problems))

    async def reset_data(self) -> None:
        """Drop the local cache and load again (remote, else bundled defaults)."""
        await self.storage.clear_local()
        await self.load_all()

    # ------------------------------------------------------------------
    # UI state
    # ------------------------------------------------------------------

    def set_selected_topic(self, topic: Topic | None) -> None:
        self._set(selected_topic=topic)

    def set_selected_problem(self, problem: Problem | None) -> None:
        self._set(selected_problem=problem)

    def set_search_query(self, query: str) -> None:
        self._set(search_query=query)

    def set_show_add_topic_modal(self, show: bool) -> None:
        self._set(show_add_topic_modal=show)

    def set_show_add_problem_modal(self, show: bool) -> None:
        self._set(show_add_problem_modal=show)

    # ------------------------------------------------------------------
    # Topics
    # ------------------------------------------------------------------

    async def add_topic(self, fields: TopicFields) -> Topic:
        """
        Add a topic under a provisional id.

        If the server assigns its own id, the server's copy is what lands in
        memory.
        """
        provisional = Topic(id=provisional_id("topic"), **fields.model_dump())
        created = await self.storage.topics.add(provisional)
        self._set(topics=(*self.state.topics, created))
        return created

    async def update_topic(self, topic_id: str, changes: TopicUpdate) -> None:
        await self.storage.topics.update(topic_id, changes)
        fields = changes.model_dump(exclude_unset=True)
        self._set(
            topics=tuple(
                t.model_copy(update=fields) if t.id == topic_id else t for t in self.state.topics
            )
        )

    async def delete_topic(self, topic_id: str) -> None:
        """Delete a topic and, in memory, every problem filed under it."""
        await self.storage.topics.delete(topic_id)
        self._set(
            topics=tuple(t for t in self.state.topics if t.id != topic_id),
            problems=tuple(p for p in self.state.problems if p.topic_id != topic_id),
        )

    # ------------------------------------------------------------------
    # Problems
    # ------------------------------------------------------------------

    async def add_problem(self, fields: ProblemFields) -> Problem:
        """Add a problem under a provisional id, stamped with the creation time."""
        provisional = Problem(
            id=provisional_id("problem"),
            created_at=datetime.now(timezone.utc),
            **fields.model_dump(exclude={"created_at"}),
        )
        created = await self.storage.problems.add(provisional)
        self._set(problems=(*self.state.problems, created))
        return created

    async def update_problem(self, problem_id: str, changes: ProblemUpdate) -> None:
        await self.storage.problems.update(problem_id, changes)
        fields = changes.model_dump(exclude_unset=True)
        self._set(
            problems=tuple(
                p.model_copy(update=fields) if p.id == problem_id else p
                for p in self.state.problems
            )
        )

    async def delete_problem(self, problem_id: str) -> None:
        await self.storage.problems.delete(problem_id)
        self._set(problems=tuple(p for p in self.state.problems if p.id != problem_id))

    # ------------------------------------------------------------------
    # Derived views (no I/O)
    # ------------------------------------------------------------------

    def filtered_topics(self, query: str | None = None) -> list[Topic]:
        """Topics whose name or description contains the query, ignoring case."""
        query = (self.state.search_query if query is None else query).lower()
        if not query:
            return list(self.state.topics)
        return [
            t for t in self.state.topics
            if _contains(t.name, query) or _contains(t.description, query)
        ]

    def problems_by_topic(self, topic_id: str) -> list[Problem]:
        return [p for p in self.state.problems if p.topic_id == topic_id]

    def filtered_problems(self, query: str | None = None) -> list[Problem]:
        """Problems matching the query in title, solution, notes or any tag, ignoring case."""
        query = (self.state.search_query if query is None else query).lower()
        if not query:
            return list(self.state.problems)
        return [
            p for p in self.state.problems
            if _contains(p.title, query)
            or _contains(p.solution, query)
            or _contains(p.notes, query)
            or any(_contains(tag, query) for tag in p.tags)
        ]

    # ------------------------------------------------------------------
    # Topic notes
    # ------------------------------------------------------------------

    async def get_topic_notes(self, topic_id: str) -> str:
        return await self.storage.notes.get(topic_id)

    async def save_topic_notes(self, topic_id: str, content: str) -> None:
        await self.storage.notes.save(topic_id, content)
