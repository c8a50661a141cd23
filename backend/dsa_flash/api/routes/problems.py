"""Problem CRUD routes."""

from fastapi import APIRouter, Query, status
from sqlalchemy import select

from dsa_flash.api.deps import DbSession, get_resource_or_404
from dsa_flash.db.models import Problem
from dsa_flash.schemas.base import MessageResponse
from dsa_flash.schemas.problems import ProblemCreate, ProblemRead, ProblemUpdate

router = APIRouter(prefix="/api/problems", tags=["problems"])


@router.get("", response_model=list[ProblemRead])
async def list_problems(
    db: DbSession,
    topic_id: str | None = Query(None, alias="topicId"),
) -> list[ProblemRead]:
    """List problems, newest first, optionally filtered by topic."""
    query = select(Problem)
    if topic_id:
        query = query.where(Problem.topic_id == topic_id)
    query = query.order_by(Problem.created_at.desc())

    result = await db.execute(query)
    return [ProblemRead.model_validate(p) for p in result.scalars()]


@router.get("/topic/{topic_id}", response_model=list[ProblemRead])
async def list_problems_for_topic(topic_id: str, db: DbSession) -> list[ProblemRead]:
    """List the problems of one topic, newest first."""
    return await list_problems(db, topic_id=topic_id)


@router.post("", response_model=ProblemRead, status_code=status.HTTP_201_CREATED)
async def create_problem(data: ProblemCreate, db: DbSession) -> ProblemRead:
    """Create a new problem.

    A client-stamped created_at is kept, otherwise the server stamps it.
    """
    new_problem = Problem(**data.model_dump(exclude={"created_at"}))
    if data.created_at is not None:
        new_problem.created_at = data.created_at
    db.add(new_problem)
    await db.commit()
    await db.refresh(new_problem)
    return ProblemRead.model_validate(new_problem)


@router.get("/{problem_id}", response_model=ProblemRead)
async def get_problem(problem_id: str, db: DbSession) -> ProblemRead:
    """Get a specific problem by ID."""
    problem = await get_resource_or_404(db, Problem, problem_id)
    return ProblemRead.model_validate(problem)


@router.put("/{problem_id}", response_model=ProblemRead)
async def update_problem(problem_id: str, data: ProblemUpdate, db: DbSession) -> ProblemRead:
    """Update a problem with the fields present in the body."""
    problem = await get_resource_or_404(db, Problem, problem_id)
    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(problem, key, value)
    await db.commit()
    await db.refresh(problem)
    return ProblemRead.model_validate(problem)


@router.delete("/{problem_id}", response_model=MessageResponse)
async def delete_problem(problem_id: str, db: DbSession) -> MessageResponse:
    """Delete a problem."""
    problem = await get_resource_or_404(db, Problem, problem_id)
    await db.delete(problem)
    await db.commit()
    return MessageResponse(message="Problem deleted successfully")
