"""
SQLAlchemy 2.0 Models for DSA Flash.

Uses modern declarative syntax with Mapped[] type annotations.
Primary keys are generated strings so client-side ids and server ids share one
type. Problems reference topics by id only; the topic delete route removes
dependents explicitly.
"""

from datetime import datetime, timezone
from enum import Enum as PyEnum
from typing import Optional
from uuid import uuid4

from sqlalchemy import JSON, BigInteger, CheckConstraint, DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from dsa_flash.db.base import Base


# =============================================================================
# ENUMS
# =============================================================================


class Difficulty(str, PyEnum):
    """Difficulty rating of a practice problem."""

    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


def generate_id() -> str:
    return uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# MODELS
# =============================================================================


class Topic(Base):
    """
    Algorithm topic (e.g. "Arrays", "Dynamic Programming").

    Parent of problems and of at most one topic note.
    """

    __tablename__ = "topics"
    __table_args__ = (Index("idx_topics_order", "order"),)

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=generate_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    order: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    icon: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)  # Symbolic glyph name
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )


class Problem(Base):
    """
    Practice problem with a recorded solution approach.

    topic_id is a plain indexed column, not a foreign key.
    """

    __tablename__ = "problems"
    __table_args__ = (
        Index("idx_problems_topic_created", "topic_id", "created_at"),
        CheckConstraint(
            "difficulty IN (" + ", ".join(f"'{d.value}'" for d in Difficulty) + ")",
            name="valid_difficulty",
        ),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=generate_id)
    topic_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    difficulty: Mapped[str] = mapped_column(String(10), nullable=False)
    leetcode_url: Mapped[Optional[str]] = mapped_column(String(2048), nullable=True)
    geeksforgeeks_url: Mapped[Optional[str]] = mapped_column(String(2048), nullable=True)
    solution: Mapped[str] = mapped_column(Text, nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    time_complexity: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    space_complexity: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )


class TopicNote(Base):
    """
    Rich notes for one topic.

    content holds the serialized block list (or a legacy plain string).
    """

    __tablename__ = "topic_notes"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=generate_id)
    topic_id: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )
