"""Repository for Todo database operations."""

import logging
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session

from waaranders.models.todo import Todo, TodoStatus
from waaranders.database.models import TodoDB, enum_to_value

logger = logging.getLogger(__name__)


class TodoRepository:
    """Repository for Todo database operations."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, todo: Todo) -> Todo:
        """Create a new todo."""
        try:
            todo_db = TodoDB.from_pydantic(todo)
            self.db.add(todo_db)
            self.db.commit()
            self.db.refresh(todo_db)
            logger.debug(f"Created todo {todo.id}: {todo.text[:50]}")
            return todo_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create todo {todo.id}: {type(e).__name__}: {str(e)}")
            raise

    def get(self, todo_id: str) -> Optional[Todo]:
        """Get todo by ID."""
        todo_db = self.db.query(TodoDB).filter(TodoDB.id == todo_id).first()
        return todo_db.to_pydantic() if todo_db else None

    def get_all(self, include_done: bool = True) -> List[Todo]:
        """Get all todos (storage order; callers apply the display ordering)."""
        query = self.db.query(TodoDB)
        if not include_done:
            query = query.filter(TodoDB.status != TodoStatus.DONE.value)
        return [todo_db.to_pydantic() for todo_db in query.all()]

    def get_open_for_assignee(self, assignee_id: str) -> List[Todo]:
        """Get todos assigned to a volunteer that are not done yet."""
        todos_db = self.db.query(TodoDB).filter(
            TodoDB.assignee_id == assignee_id,
            TodoDB.status != TodoStatus.DONE.value,
        ).all()
        return [todo_db.to_pydantic() for todo_db in todos_db]

    def update(self, todo: Todo) -> Todo:
        """Update an existing todo."""
        todo_db = self.db.query(TodoDB).filter(TodoDB.id == todo.id).first()
        if not todo_db:
            raise ValueError(f"Todo {todo.id} not found")

        todo_db.text = todo.text
        todo_db.assignee_id = todo.assignee_id
        todo_db.due_date = todo.due_date
        todo_db.priority = enum_to_value(todo.priority)
        todo_db.status = enum_to_value(todo.status)
        todo_db.updated_at = todo.updated_at

        try:
            self.db.commit()
            self.db.refresh(todo_db)
            logger.debug(f"Updated todo {todo.id}: {todo.text[:50]}")
            return todo_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update todo {todo.id}: {type(e).__name__}: {str(e)}")
            raise

    def set_status(self, todo_id: str, status: TodoStatus) -> Todo:
        """Change only the status of a todo."""
        todo_db = self.db.query(TodoDB).filter(TodoDB.id == todo_id).first()
        if not todo_db:
            raise ValueError(f"Todo {todo_id} not found")

        try:
            todo_db.status = enum_to_value(status)
            todo_db.updated_at = datetime.utcnow()
            self.db.commit()
            self.db.refresh(todo_db)
            logger.debug(f"Set status of todo {todo_id} to {todo_db.status}")
            return todo_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to set status of todo {todo_id}: {type(e).__name__}: {str(e)}")
            raise

    def delete(self, todo_id: str) -> bool:
        """Permanently delete a todo."""
        todo_db = self.db.query(TodoDB).filter(TodoDB.id == todo_id).first()
        if not todo_db:
            return False

        try:
            self.db.delete(todo_db)
            self.db.commit()
            logger.debug(f"Deleted todo {todo_id}")
            return True
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete todo {todo_id}: {type(e).__name__}: {str(e)}")
            raise
