"""API routes package."""

from dsa_flash.api.routes import (
    problems,
    topic_notes,
    topics,
    uploads,
)

__all__ = [
    "problems",
    "topic_notes",
    "topics",
    "uploads",
]
