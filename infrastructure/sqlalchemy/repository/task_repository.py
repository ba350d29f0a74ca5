from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from core.domain.errors import PersistenceFailure
from core.domain.models.task import Task, TaskStatus, TaskType
from core.domain.ports.task_repository import TaskRepository
from infrastructure.sqlalchemy.model.models import TaskModel
from infrastructure.sqlalchemy.repository._utils import to_utc


def _to_domain(model: TaskModel) -> Task:
    return Task(
        id=model.id,
        application_id=model.application_id,
        tenant_id=model.tenant_id,
        type=TaskType(model.type),
        due_at=to_utc(model.due_at),
        status=TaskStatus(model.status),
        created_at=to_utc(model.created_at) if model.created_at else None,
    )


class SqlAlchemyTaskRepository(TaskRepository):
    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    def add(self, task: Task) -> str:
        session = self._session_factory()
        try:
            model = TaskModel(
                application_id=task.application_id,
                tenant_id=task.tenant_id,
                type=task.type.value,
                due_at=to_utc(task.due_at),
                status=task.status.value,
            )
            session.add(model)
            session.commit()
            return model.id
        except SQLAlchemyError as e:
            session.rollback()
            raise PersistenceFailure(str(e)) from e
        finally:
            session.close()

    def get(self, task_id: str) -> Task | None:
        session = self._session_factory()
        try:
            model = session.get(TaskModel, task_id)
            if model is None:
                return None
            return _to_domain(model)
        except SQLAlchemyError as e:
            raise PersistenceFailure(str(e)) from e
        finally:
            session.close()

    def list(
        self,
        tenant_id: str,
        status: TaskStatus | None = None,
        task_type: TaskType | None = None,
    ) -> list[Task]:
        session = self._session_factory()
        try:
            query = session.query(TaskModel).filter(TaskModel.tenant_id == tenant_id)
            if status is not None:
                query = query.filter(TaskModel.status == status.value)
            if task_type is not None:
                query = query.filter(TaskModel.type == task_type.value)
            return [_to_domain(m) for m in query.order_by(TaskModel.due_at.asc()).all()]
        except SQLAlchemyError as e:
            raise PersistenceFailure(str(e)) from e
        finally:
            session.close()

    def list_due_between(
        self,
        tenant_id: str,
        start: datetime,
        end: datetime,
        exclude_status: TaskStatus | None = None,
    ) -> "list[Task]":
        session = self._session_factory()
        try:
            query = session.query(TaskModel).filter(
                TaskModel.tenant_id == tenant_id,
                TaskModel.due_at >= to_utc(start),
                TaskModel.due_at < to_utc(end),
            )
            if exclude_status is not None:
                query = query.filter(TaskModel.status != exclude_status.value)
            return [_to_domain(m) for m in query.order_by(TaskModel.due_at.asc()).all()]
        except SQLAlchemyError as e:
            raise PersistenceFailure(str(e)) from e
        finally:
            session.close()

    def update_status(self, task_id: str, status: TaskStatus) -> None:
        session = self._session_factory()
        try:
            session.query(TaskModel).filter(TaskModel.id == task_id).update(
                {TaskModel.status: status.value}
            )
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise PersistenceFailure(str(e)) from e
        finally:
            session.close()
