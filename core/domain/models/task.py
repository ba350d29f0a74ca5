from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import ClassVar


class TaskType(Enum):
    CALL = "call"
    EMAIL = "email"
    REVIEW = "review"


class TaskStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"


@dataclass(slots=True)
class Task:
    application_id: str
    tenant_id: str
    type: TaskType
    due_at: datetime
    status: TaskStatus = TaskStatus.PENDING
    id: str | None = None
    created_at: datetime | None = None


@dataclass(slots=True, frozen=True)
class TaskCreatedEvent:
    """Evento `task.created` que se difunde por el canal de tareas."""

    task_id: str
    application_id: str
    task_type: TaskType
    due_at: str
    name: ClassVar[str] = "task.created"

    def payload(self) -> dict[str, str]:
        return {
            "task_id": self.task_id,
            "application_id": self.application_id,
            "task_type": self.task_type.value,
            "due_at": self.due_at,
        }
