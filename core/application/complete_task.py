import logging

from core.domain.errors import TaskNotFound
from core.domain.models.task import Task, TaskStatus
from core.domain.ports.task_repository import TaskRepository

logger = logging.getLogger(__name__)


class CompleteTaskUseCase:
    def __init__(self, repository: TaskRepository) -> None:
        self._repository = repository

    def execute(self, task_id: str, tenant_id: str) -> Task:
        task = self._repository.get(task_id)
        # Una tarea de otro tenant se trata igual que una inexistente.
        if task is None or task.tenant_id != tenant_id:
            raise TaskNotFound(task_id)

        if task.status is TaskStatus.COMPLETED:
            return task

        self._repository.update_status(task_id, TaskStatus.COMPLETED)
        task.status = TaskStatus.COMPLETED
        logger.info(f"Tarea {task_id} marcada como completada")
        return task
