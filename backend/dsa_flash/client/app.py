"""Composition root: wire the HTTP client, local cache and store together."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx

from dsa_flash.client.local_cache import KeyValueStore
from dsa_flash.client.storage import SyncStorage
from dsa_flash.client.store import StudyStore
from dsa_flash.config import ClientSettings, get_client_settings


@asynccontextmanager
async def open_store(
    settings: ClientSettings | None = None,
    http: httpx.AsyncClient | None = None,
) -> AsyncIterator[StudyStore]:
    """
    Build a StudyStore for one session.

    Pass ``http`` to reuse a client (tests hand in one bound to the app or to
    a mock transport); it is then left open on exit. The store is not loaded;
    call ``load_all`` when ready.
    """
    settings = settings or get_client_settings()
    owns_http = http is None
    if http is None:
        http = httpx.AsyncClient(
            base_url=settings.api_base_url,
            timeout=settings.request_timeout_seconds,
        )
    try:
        storage = SyncStorage(http, KeyValueStore(settings.cache_dir))
        yield StudyStore(storage)
    finally:
        if owns_http:
            await http.aclose()
