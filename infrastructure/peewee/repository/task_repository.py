from datetime import datetime, timezone

from peewee import Database, PeeweeException

from core.domain.errors import PersistenceFailure
from core.domain.models.task import Task, TaskStatus, TaskType
from core.domain.ports.task_repository import TaskRepository
from infrastructure.peewee.model.models import TaskModel, naive_utc


def _to_domain(model: TaskModel) -> Task:
    return Task(
        id=model.id,
        application_id=model.application_id,
        tenant_id=model.tenant_id,
        type=TaskType(model.type),
        due_at=model.due_at.replace(tzinfo=timezone.utc),
        status=TaskStatus(model.status),
        created_at=model.created_at.replace(tzinfo=timezone.utc),
    )


class PeeweeTaskRepository(TaskRepository):
    def __init__(self, db: Database) -> None:
        self._db = db

    def add(self, task: Task) -> str:
        try:
            with self._db.atomic():
                model = TaskModel.create(
                    application_id=task.application_id,
                    tenant_id=task.tenant_id,
                    type=task.type.value,
                    due_at=naive_utc(task.due_at),
                    status=task.status.value,
                )
            return model.id
        except PeeweeException as e:
            raise PersistenceFailure(str(e)) from e

    def get(self, task_id: str) -> Task | None:
        try:
            model = TaskModel.get_or_none(TaskModel.id == task_id)
        except PeeweeException as e:
            raise PersistenceFailure(str(e)) from e
        return _to_domain(model) if model is not None else None

    def list(
        self,
        tenant_id: str,
        status: TaskStatus | None = None,
        task_type: TaskType | None = None,
    ) -> list[Task]:
        query = TaskModel.select().where(TaskModel.tenant_id == tenant_id)
        if status is not None:
            query = query.where(TaskModel.status == status.value)
        if task_type is not None:
            query = query.where(TaskModel.type == task_type.value)
        try:
            return [_to_domain(m) for m in query.order_by(TaskModel.due_at.asc())]
        except PeeweeException as e:
            raise PersistenceFailure(str(e)) from e

    def list_due_between(
        self,
        tenant_id: str,
        start: datetime,
        end: datetime,
        exclude_status: TaskStatus | None = None,
    ) -> "list[Task]":
        query = TaskModel.select().where(
            (TaskModel.tenant_id == tenant_id)
            & (TaskModel.due_at >= naive_utc(start))
            & (TaskModel.due_at < naive_utc(end))
        )
        if exclude_status is not None:
            query = query.where(TaskModel.status != exclude_status.value)
        try:
            return [_to_domain(m) for m in query.order_by(TaskModel.due_at.asc())]
        except PeeweeException as e:
            raise PersistenceFailure(str(e)) from e

    def update_status(self, task_id: str, status: TaskStatus) -> None:
        try:
            with self._db.atomic():
                TaskModel.update(status=status.value).where(TaskModel.id == task_id).execute()
        except PeeweeException as e:
            raise PersistenceFailure(str(e)) from e
