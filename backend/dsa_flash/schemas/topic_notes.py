"""Topic note schemas."""

from pydantic import ConfigDict

from dsa_flash.schemas.base import BaseSchema


class TopicNotePayload(BaseSchema):
    """Request and response body for a topic's notes.

    notes carries the serialized block list, or a legacy plain string, and is
    stored exactly as sent.
    """

    model_config = ConfigDict(str_strip_whitespace=False)

    notes: str = ""
