"""Topic CRUD routes."""

import logging

from fastapi import APIRouter, status
from sqlalchemy import delete, select

from dsa_flash.api.deps import DbSession, get_resource_or_404
from dsa_flash.db.models import Problem, Topic, TopicNote
from dsa_flash.schemas.base import MessageResponse
from dsa_flash.schemas.topics import TopicCreate, TopicRead, TopicUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/topics", tags=["topics"])


@router.get("", response_model=list[TopicRead])
async def list_topics(db: DbSession) -> list[TopicRead]:
    """List all topics in display order."""
    result = await db.execute(select(Topic).order_by(Topic.order, Topic.created_at))
    return [TopicRead.model_validate(t) for t in result.scalars()]


@router.post("", response_model=TopicRead, status_code=status.HTTP_201_CREATED)
async def create_topic(data: TopicCreate, db: DbSession) -> TopicRead:
    """Create a new topic. The server assigns the identifier."""
    new_topic = Topic(**data.model_dump())
    db.add(new_topic)
    await db.commit()
    await db.refresh(new_topic)
    return TopicRead.model_validate(new_topic)


@router.put("/{topic_id}", response_model=TopicRead)
async def update_topic(topic_id: str, data: TopicUpdate, db: DbSession) -> TopicRead:
    """Update a topic with the fields present in the body."""
    topic = await get_resource_or_404(db, Topic, topic_id)
    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(topic, key, value)
    await db.commit()
    await db.refresh(topic)
    return TopicRead.model_validate(topic)


@router.delete("/{topic_id}", response_model=MessageResponse)
async def delete_topic(topic_id: str, db: DbSession) -> MessageResponse:
    """Delete a topic together with its problems and its note."""
    topic = await get_resource_or_404(db, Topic, topic_id)
    await db.delete(topic)
    problems = await db.execute(delete(Problem).where(Problem.topic_id == topic_id))
    await db.execute(delete(TopicNote).where(TopicNote.topic_id == topic_id))
    await db.commit()
    logger.info("Deleted topic %s and %d problems", topic_id, problems.rowcount)
    return MessageResponse(message="Topic deleted successfully")
