"""Pydantic schemas for API request/response validation."""

from dsa_flash.schemas.base import MessageResponse
from dsa_flash.schemas.problems import ProblemCreate, ProblemRead, ProblemUpdate
from dsa_flash.schemas.topic_notes import TopicNotePayload
from dsa_flash.schemas.topics import TopicCreate, TopicRead, TopicUpdate
from dsa_flash.schemas.uploads import HealthResponse, ImageUploadResponse

__all__ = [
    # Common
    "MessageResponse",
    # Topics
    "TopicCreate",
    "TopicRead",
    "TopicUpdate",
    # Problems
    "ProblemCreate",
    "ProblemRead",
    "ProblemUpdate",
    # Topic notes
    "TopicNotePayload",
    # Uploads
    "ImageUploadResponse",
    "HealthResponse",
]
