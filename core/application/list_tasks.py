from dataclasses import dataclass

from core.domain.models.task import Task, TaskStatus, TaskType
from core.domain.ports.task_repository import TaskRepository


@dataclass(slots=True)
class ListTasksCommand:
    tenant_id: str
    status: TaskStatus | None = None
    task_type: TaskType | None = None


class ListTasksUseCase:
    def __init__(self, repository: TaskRepository) -> None:
        self._repository = repository

    def execute(self, cmd: ListTasksCommand) -> list[Task]:
        return self._repository.list(cmd.tenant_id, status=cmd.status, task_type=cmd.task_type)
