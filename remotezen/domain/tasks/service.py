"""Task service - Business logic for task operations"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...errors import AuthorizationError, NotFoundError, ValidationError
from ...models import MANAGER_ROLES, Task, User
from ..teams.membership import MembershipGuard, require_role
from .repository import TaskRepository
from .schemas import TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)

# Request field name -> model attribute
UPDATABLE_FIELDS = {
    "title": "title",
    "description": "description",
    "status": "status",
    "assignedToId": "assigned_to_id",
    "dueDate": "due_date",
}


class TaskService:
    """Service layer for task business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = TaskRepository()
        self.guard = MembershipGuard(db)

    def _validate_assignee(self, team_id: str, assignee_id: Optional[str]) -> None:
        if assignee_id and not self.guard.is_member(team_id, assignee_id):
            raise ValidationError("Assignee must be a member of the task's team")

    def get_task(self, task_id: str, user: User) -> Task:
        """Get a task the user can see"""
        task = self.repo.get_task(self.db, task_id)
        if not task:
            raise NotFoundError("Task not found")
        self.guard.require_member(task.team_id, user.id)
        return task

    def get_tasks(
        self,
        user: User,
        team_id: Optional[str] = None,
        assigned_to_id: Optional[str] = None,
    ) -> list[Task]:
        """Tasks visible to the user, optionally narrowed to one team and/or assignee"""
        if team_id:
            self.guard.require_member(team_id, user.id)
            team_ids = [team_id]
        else:
            team_ids = self.guard.team_ids_for(user.id)

        if assigned_to_id == "me":
            assigned_to_id = user.id

        return self.repo.get_tasks(self.db, team_ids, assigned_to_id)

    def get_my_tasks(self, user: User) -> list[Task]:
        return self.get_tasks(user, assigned_to_id=user.id)

    def create_task(self, data: TaskCreate, user: User) -> Task:
        """Create a task in a team the user belongs to"""
        self.guard.require_member(data.teamId, user.id)
        self._validate_assignee(data.teamId, data.assignedToId)

        task = self.repo.create_task(
            self.db,
            team_id=data.teamId,
            title=data.title,
            description=data.description,
            assigned_to_id=data.assignedToId,
            created_by_id=user.id,
            due_date=data.dueDate,
        )
        logger.info(f"📝 Task {task.id} created in team {task.team_id} by {user.id}")
        return self.repo.get_task(self.db, task.id)

    def update_task(self, task_id: str, data: TaskUpdate, user: User) -> Task:
        """Partially update a task; any team member may update"""
        task = self.get_task(task_id, user)

        updates = {}
        for field, value in data.changes().items():
            updates[UPDATABLE_FIELDS[field]] = value

        if "assigned_to_id" in updates and updates["assigned_to_id"] != task.assigned_to_id:
            self._validate_assignee(task.team_id, updates["assigned_to_id"])

        if not updates:
            return task

        self.repo.update_task(self.db, task, **updates)
        return self.repo.get_task(self.db, task.id)

    def delete_task(self, task_id: str, user: User) -> dict:
        """Delete a task; only its creator or a team manager/admin may"""
        task = self.repo.get_task(self.db, task_id)
        if not task:
            raise NotFoundError("Task not found")

        membership = self.guard.require_member(task.team_id, user.id)
        if task.created_by_id != user.id and not require_role(membership, MANAGER_ROLES):
            raise AuthorizationError("Only the creator or team admin can delete this task")

        self.repo.delete_task(self.db, task)
        logger.info(f"🗑️ Task {task_id} deleted by {user.id}")
        return {"message": "Task deleted successfully"}
