"""
DSA Flash FastAPI Application Entry Point.

Run with: uvicorn dsa_flash.main:app --reload --port 5000
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from dsa_flash.api.routes import problems, topic_notes, topics, uploads
from dsa_flash.config import get_settings
from dsa_flash.db.session import init_models
from dsa_flash.services import image_storage
from dsa_flash.services.images import STATIC_PREFIX

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup/shutdown."""
    # Startup
    await init_models()
    logger.info("Database ready, serving %s", settings.app_name)
    yield
    # Shutdown


app = FastAPI(
    title=settings.app_name,
    description="Algorithm topics, practice problems and study notes API",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(topics.router)
app.include_router(problems.router)
app.include_router(topic_notes.router)
app.include_router(uploads.router)

# Uploaded images
image_storage.ensure_directory()
app.mount(
    f"/{STATIC_PREFIX}",
    StaticFiles(directory=image_storage.directory),
    name=STATIC_PREFIX,
)
