"""
FastAPI dependencies shared by the collection routers.

Single-user application: there is no authentication layer, every handler
works on the whole collection.
"""

from typing import Annotated, TypeVar

from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from dsa_flash.db.base import Base
from dsa_flash.db.session import get_db

ModelT = TypeVar("ModelT", bound=Base)

# Type alias for dependency injection
DbSession = Annotated[AsyncSession, Depends(get_db)]


async def get_resource_or_404(
    db: AsyncSession,
    model: type[ModelT],
    resource_id: str,
) -> ModelT:
    """
    Fetch a document by primary key.

    Usage:
        problem = await get_resource_or_404(db, Problem, problem_id)
    """
    resource = await db.get(model, resource_id)

    if resource is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Resource not found")

    return resource
