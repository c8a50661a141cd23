"""
Remote access layer: thin async wrappers over the REST API.

Every call either returns decoded JSON or raises. Non-2xx responses and
undecodable bodies raise ApiError, and transport failures surface as
httpx.HTTPError. Note and upload bodies are checked against their schemas,
so a malformed one raises pydantic.ValidationError.

Falling back is the storage layer's job, not this one's.
"""

import logging
import mimetypes
from pathlib import Path
from typing import Any

import httpx

from dsa_flash.schemas.topic_notes import TopicNotePayload
from dsa_flash.schemas.uploads import ImageUploadResponse

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """The API answered with an error status or an unreadable body."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"API Error: {status_code} - {body}")
        self.status_code = status_code
        self.body = body


def handle_response(response: httpx.Response) -> Any:
    """Return the decoded JSON body or raise ApiError."""
    logger.debug("API response %s %s", response.status_code, response.url)
    if not response.is_success:
        logger.warning("API error %s from %s: %s", response.status_code, response.url, response.text)
        raise ApiError(response.status_code, response.text)
    try:
        return response.json()
    except ValueError as e:
        raise ApiError(response.status_code, response.text) from e


class CollectionAPI:
    """CRUD endpoints of one collection, e.g. ``/api/topics``."""

    def __init__(self, http: httpx.AsyncClient, path: str):
        self.http = http
        self.path = path.rstrip("/")

    async def get_all(self) -> list[dict[str, Any]]:
        return handle_response(await self.http.get(self.path))

    async def create(self, payload: dict[str, Any]) -> dict[str, Any]:
        return handle_response(await self.http.post(self.path, json=payload))

    async def update(self, entity_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        return handle_response(await self.http.put(f"{self.path}/{entity_id}", json=payload))

    async def delete(self, entity_id: str) -> dict[str, Any]:
        return handle_response(await self.http.delete(f"{self.path}/{entity_id}"))


class TopicsAPI(CollectionAPI):
    def __init__(self, http: httpx.AsyncClient):
        super().__init__(http, "/api/topics")


class ProblemsAPI(CollectionAPI):
    def __init__(self, http: httpx.AsyncClient):
        super().__init__(http, "/api/problems")

    async def get_by_topic(self, topic_id: str) -> list[dict[str, Any]]:
        """Problems of one topic, newest first."""
        return handle_response(await self.http.get(f"{self.path}/topic/{topic_id}"))


class TopicNotesAPI:
    """One notes document per topic, addressed by topic id."""

    def __init__(self, http: httpx.AsyncClient):
        self.http = http

    async def get(self, topic_id: str) -> str:
        body = handle_response(await self.http.get(f"/api/topic-notes/{topic_id}"))
        return TopicNotePayload.model_validate(body).notes

    async def save(self, topic_id: str, notes: str) -> str:
        body = handle_response(
            await self.http.post(f"/api/topic-notes/{topic_id}", json={"notes": notes})
        )
        return TopicNotePayload.model_validate(body).notes


class UploadAPI:
    def __init__(self, http: httpx.AsyncClient):
        self.http = http

    async def upload_image(self, path: Path | str) -> str:
        """
        Upload an image file as multipart field ``image``.

        Returns:
            The public URL the server serves the image from
        """
        path = Path(path)
        content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        files = {"image": (path.name, path.read_bytes(), content_type)}
        body = handle_response(await self.http.post("/api/upload", files=files))
        return ImageUploadResponse.model_validate(body).image_url


async def health_check(http: httpx.AsyncClient) -> bool:
    """True when the backend answers its health check. Never raises."""
    try:
        response = await http.get("/api/health")
        return response.is_success
    except httpx.HTTPError as e:
        logger.error("Backend health check failed: %s", e)
        return False
