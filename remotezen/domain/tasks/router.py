"""Task router - FastAPI endpoints for task operations"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import Task, User
from ...schemas import MessageResponse, user_summary
from .schemas import TaskCreate, TaskResponse, TaskUpdate, TeamRef
from .service import TaskService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["Tasks"])


def get_task_service(db: Session = Depends(get_db)) -> TaskService:
    """Dependency injection for TaskService"""
    return TaskService(db)


def task_response(task: Task) -> TaskResponse:
    return TaskResponse(
        id=task.id,
        teamId=task.team_id,
        title=task.title,
        description=task.description,
        status=task.status,
        assignedToId=task.assigned_to_id,
        createdById=task.created_by_id,
        dueDate=task.due_date,
        createdAt=task.created_at,
        updatedAt=task.updated_at,
        team=TeamRef(id=task.team.id, name=task.team.name) if task.team else None,
        createdBy=user_summary(task.created_by),
        assignedTo=user_summary(task.assigned_to),
    )


# ============================================================================
# CORE CRUD OPERATIONS
# ============================================================================


@router.get("", response_model=list[TaskResponse])
def get_tasks(
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
    teamId: Optional[str] = Query(None, description="Only tasks of this team"),
    assignedToId: Optional[str] = Query(None, description="Assignee id, or 'me'"),
):
    """Get tasks from the current user's teams"""
    return [task_response(t) for t in service.get_tasks(current_user, teamId, assignedToId)]


@router.get("/mine", response_model=list[TaskResponse])
def get_my_tasks(
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """Get tasks assigned to the current user"""
    return [task_response(t) for t in service.get_my_tasks(current_user)]


@router.post("", response_model=TaskResponse, status_code=201)
def create_task(
    data: TaskCreate,
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """Create a new task"""
    return task_response(service.create_task(data, current_user))


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: str,
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    return task_response(service.get_task(task_id, current_user))


@router.patch("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: str,
    data: TaskUpdate,
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """Update a task (partial)"""
    return task_response(service.update_task(task_id, data, current_user))


@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task(
    task_id: str,
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """Delete a task"""
    return service.delete_task(task_id, current_user)
