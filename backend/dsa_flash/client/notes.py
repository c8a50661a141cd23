"""
Topic notes as an ordered list of text and image blocks.

Notes are stored as a JSON array of ``{"id", "type", "content"}`` objects.
Older notes were a single plain string; those are upgraded to one text block
when read. Block edits are pure list transforms; nothing is persisted until
the editor saves the whole list.
"""

import asyncio
import base64
import json
import logging
import mimetypes
import time
from collections.abc import Awaitable, Callable, Iterable
from pathlib import Path
from typing import TYPE_CHECKING, Literal
from uuid import uuid4

from pydantic import BaseModel, TypeAdapter, ValidationError

if TYPE_CHECKING:
    from dsa_flash.client.store import StudyStore

logger = logging.getLogger(__name__)

BlockType = Literal["text", "image"]


class NoteBlock(BaseModel):
    """One block of a note. Image content is a data URL."""

    id: str
    type: BlockType
    content: str


_blocks_adapter = TypeAdapter(list[NoteBlock])


def new_block_id() -> str:
    """Millisecond timestamp plus a random suffix, unique within a note."""
    return f"{int(time.time() * 1000)}-{uuid4().hex[:8]}"


def text_block(content: str = "") -> NoteBlock:
    return NoteBlock(id=new_block_id(), type="text", content=content)


def image_block(data_url: str) -> NoteBlock:
    return NoteBlock(id=new_block_id(), type="image", content=data_url)


def parse_note_content(raw: str) -> list[NoteBlock]:
    """
    Decode stored note content.

    - "" gives a single empty text block to start writing in.
    - A JSON array of blocks gives those blocks, in order.
    - Anything else is legacy plain text and becomes one text block.
    """
    if not raw:
        return [text_block()]
    try:
        decoded = json.loads(raw)
    except ValueError:
        return [text_block(raw)]
    if not isinstance(decoded, list):
        return [text_block(raw)]
    try:
        return _blocks_adapter.validate_python(decoded)
    except ValidationError:
        logger.warning("Note content is a list but not of blocks, keeping it as text")
        return [text_block(raw)]


def serialize_note_content(blocks: Iterable[NoteBlock]) -> str:
    return json.dumps([block.model_dump() for block in blocks])


# Pure transforms over a block list


def append_text_block(blocks: list[NoteBlock], content: str = "") -> list[NoteBlock]:
    return [*blocks, text_block(content)]


def append_image_block(blocks: list[NoteBlock], data_url: str) -> list[NoteBlock]:
    return [*blocks, image_block(data_url)]


def update_text_block(blocks: list[NoteBlock], block_id: str, content: str) -> list[NoteBlock]:
    """Replace the content of the text block with ``block_id``; image blocks are left alone."""
    return [
        block.model_copy(update={"content": content})
        if block.id == block_id and block.type == "text"
        else block
        for block in blocks
    ]


def remove_block(blocks: list[NoteBlock], block_id: str) -> list[NoteBlock]:
    return [block for block in blocks if block.id != block_id]


def _read_data_url(path: Path) -> str:
    content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    encoded = base64.b64encode(path.read_bytes()).decode("ascii")
    return f"data:{content_type};base64,{encoded}"


async def encode_image_file(path: Path | str) -> str:
    """Read an image file into a base64 data URL without blocking the loop."""
    return await asyncio.to_thread(_read_data_url, Path(path))


class NoteEditor:
    """
    Editing session for one topic's notes.

    Holds the working block list. ``save`` writes it through the store;
    ``cancel`` throws edits away by reloading what was persisted.
    """

    def __init__(
        self,
        store: "StudyStore",
        topic_id: str,
        encoder: Callable[[Path | str], Awaitable[str]] = encode_image_file,
    ):
        self.store = store
        self.topic_id = topic_id
        self.encoder = encoder
        self.blocks: list[NoteBlock] = []

    async def load(self) -> list[NoteBlock]:
        self.blocks = parse_note_content(await self.store.get_topic_notes(self.topic_id))
        return self.blocks

    async def save(self) -> None:
        await self.store.save_topic_notes(self.topic_id, serialize_note_content(self.blocks))

    async def cancel(self) -> list[NoteBlock]:
        return await self.load()

    def add_text_block(self) -> NoteBlock:
        self.blocks = append_text_block(self.blocks)
        return self.blocks[-1]

    def update_text_block(self, block_id: str, content: str) -> None:
        self.blocks = update_text_block(self.blocks, block_id, content)

    def remove_block(self, block_id: str) -> None:
        self.blocks = remove_block(self.blocks, block_id)

    async def attach_image(self, path: Path | str) -> NoteBlock:
        data_url = await self.encoder(path)
        self.blocks = append_image_block(self.blocks, data_url)
        return self.blocks[-1]

    async def attach_images(self, paths: Iterable[Path | str]) -> list[NoteBlock]:
        """
        Encode several images concurrently.

        Each image is appended as soon as its own encode finishes, so blocks
        land in completion order, not in the order of ``paths``.
        """
        return list(await asyncio.gather(*(self.attach_image(path) for path in paths)))
