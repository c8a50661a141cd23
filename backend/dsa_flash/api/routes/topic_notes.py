"""Topic notes routes (one upserted document per topic)."""

from fastapi import APIRouter
from sqlalchemy import select

from dsa_flash.api.deps import DbSession
from dsa_flash.db.models import TopicNote
from dsa_flash.schemas.topic_notes import TopicNotePayload

router = APIRouter(prefix="/api/topic-notes", tags=["topic-notes"])


@router.get("/{topic_id}", response_model=TopicNotePayload)
async def get_topic_notes(topic_id: str, db: DbSession) -> TopicNotePayload:
    """Return a topic's notes, or an empty string when none were saved."""
    result = await db.execute(select(TopicNote).where(TopicNote.topic_id == topic_id))
    note = result.scalar_one_or_none()
    return TopicNotePayload(notes=note.content if note else "")


@router.post("/{topic_id}", response_model=TopicNotePayload)
async def save_topic_notes(
    topic_id: str,
    data: TopicNotePayload,
    db: DbSession,
) -> TopicNotePayload:
    """Create or overwrite a topic's notes."""
    result = await db.execute(select(TopicNote).where(TopicNote.topic_id == topic_id))
    note = result.scalar_one_or_none()
    if note is None:
        note = TopicNote(topic_id=topic_id, content=data.notes)
        db.add(note)
    else:
        note.content = data.notes
    await db.commit()
    await db.refresh(note)
    return TopicNotePayload(notes=note.content)
