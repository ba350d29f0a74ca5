from collections.abc import Callable
from datetime import datetime, timedelta

from core.application.create_task import utc_now
from core.domain.models.task import Task, TaskStatus
from core.domain.ports.task_repository import TaskRepository


class ListTodayTasksUseCase:
    """Tareas abiertas del tenant con vencimiento dentro del día UTC en curso."""

    def __init__(
        self,
        repository: TaskRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._repository = repository
        self._clock = clock

    def execute(self, tenant_id: str) -> list[Task]:
        start = self._clock().replace(hour=0, minute=0, second=0, microsecond=0)
        end = start + timedelta(days=1)
        return self._repository.list_due_between(
            tenant_id, start, end, exclude_status=TaskStatus.COMPLETED
        )
