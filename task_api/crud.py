from sqlalchemy import insert, select, update
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from task_api import models
from task_api.logger import logger
from typing import Optional

# Columns returned to callers; is_deleted never leaves the gateway
TASK_COLUMNS = (
    models.Task.id,
    models.Task.title,
    models.Task.description,
    models.Task.status,
    models.Task.created_at,
    models.Task.updated_at,
)


class TaskRepository:
    """Parameterized statements against the tasks table.

    Every method returns plain dicts; a statement that matches no row
    returns None instead of raising.
    """

    def __init__(self, db: Session):
        self.db = db

    def create_task(self, title: str, description: Optional[str] = None) -> dict:
        """Insert a new task and return the persisted row"""
        stmt = (
            insert(models.Task)
            .values(title=title, description=description)
            .returning(*TASK_COLUMNS)
        )
        try:
            row = self.db.execute(stmt).mappings().one()
            self.db.commit()
            logger.info(f"Created task with ID: {row['id']}")
            return dict(row)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error creating task: {str(e)}")
            raise

    def get_tasks(self) -> list[dict]:
        """Get all non-deleted tasks, newest first"""
        stmt = (
            select(*TASK_COLUMNS)
            .where(models.Task.is_deleted.is_(False))
            .order_by(models.Task.created_at.desc(), models.Task.id.desc())
        )
        try:
            return [dict(row) for row in self.db.execute(stmt).mappings().all()]
        except SQLAlchemyError as e:
            logger.error(f"Error fetching tasks: {str(e)}")
            raise

    def get_task(self, task_id: int) -> Optional[dict]:
        """Get a single non-deleted task by ID"""
        stmt = select(*TASK_COLUMNS).where(
            models.Task.id == task_id,
            models.Task.is_deleted.is_(False),
        )
        try:
            row = self.db.execute(stmt).mappings().first()
            return dict(row) if row is not None else None
        except SQLAlchemyError as e:
            logger.error(f"Error fetching task {task_id}: {str(e)}")
            raise

    def update_task_status(self, task_id: int, status: str) -> Optional[dict]:
        """Set the status of a non-deleted task"""
        stmt = (
            update(models.Task)
            .where(models.Task.id == task_id, models.Task.is_deleted.is_(False))
            .values(status=status)
            .returning(*TASK_COLUMNS)
            .execution_options(synchronize_session=False)
        )
        return self._mutate(stmt, task_id, "Updated status of")

    def soft_delete_task(self, task_id: int) -> Optional[dict]:
        """Flag a non-deleted task as deleted, returning it as it was"""
        stmt = (
            update(models.Task)
            .where(models.Task.id == task_id, models.Task.is_deleted.is_(False))
            .values(is_deleted=True)
            .returning(*TASK_COLUMNS)
            .execution_options(synchronize_session=False)
        )
        return self._mutate(stmt, task_id, "Soft-deleted")

    def _mutate(self, stmt, task_id: int, action: str) -> Optional[dict]:
        try:
            row = self.db.execute(stmt).mappings().first()
            self.db.commit()
            if row is None:
                return None
            logger.info(f"{action} task with ID: {task_id}")
            return dict(row)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error updating task {task_id}: {str(e)}")
            raise
