from abc import ABC, abstractmethod
from datetime import datetime

from core.domain.models.task import Task, TaskStatus, TaskType


class TaskRepository(ABC):
    @abstractmethod
    def add(self, task: Task) -> str:
        """Inserta la tarea y devuelve el id generado por el almacén."""
        raise NotImplementedError

    @abstractmethod
    def get(self, task_id: str) -> Task | None:
        raise NotImplementedError

    @abstractmethod
    def list(
        self,
        tenant_id: str,
        status: TaskStatus | None = None,
        task_type: TaskType | None = None,
    ) -> list[Task]:
        """Tareas del tenant ordenadas por `due_at` ascendente."""
        raise NotImplementedError

    @abstractmethod
    def list_due_between(
        self,
        tenant_id: str,
        start: datetime,
        end: datetime,
        exclude_status: TaskStatus | None = None,
    ) -> "list[Task]":
        """Tareas con `start <= due_at < end`, ordenadas por `due_at`."""
        raise NotImplementedError

    @abstractmethod
    def update_status(self, task_id: str, status: TaskStatus) -> None:
        raise NotImplementedError
