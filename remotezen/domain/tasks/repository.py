"""Task repository - Database operations for tasks"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Task


def _with_relations(query):
    return query.options(
        joinedload(Task.team),
        joinedload(Task.created_by),
        joinedload(Task.assigned_to),
    )


class TaskRepository:
    """Repository for task database operations"""

    @staticmethod
    def get_task(db: Session, task_id: str) -> Optional[Task]:
        return _with_relations(db.query(Task)).filter(Task.id == task_id).first()

    @staticmethod
    def get_tasks(
        db: Session,
        team_ids: list[str],
        assigned_to_id: Optional[str] = None,
    ) -> list[Task]:
        """Tasks of the given teams, newest first"""
        if not team_ids:
            return []

        query = _with_relations(db.query(Task)).filter(Task.team_id.in_(team_ids))
        if assigned_to_id:
            query = query.filter(Task.assigned_to_id == assigned_to_id)

        return query.order_by(Task.created_at.desc()).all()

    @staticmethod
    def create_task(db: Session, **task_data) -> Task:
        task = Task(**task_data)
        db.add(task)
        db.commit()
        db.refresh(task)
        return task

    @staticmethod
    def update_task(db: Session, task: Task, **updates) -> Task:
        """Apply every given field, including explicit None values"""
        for key, value in updates.items():
            setattr(task, key, value)

        db.commit()
        db.refresh(task)
        return task

    @staticmethod
    def delete_task(db: Session, task: Task) -> None:
        db.delete(task)
        db.commit()
